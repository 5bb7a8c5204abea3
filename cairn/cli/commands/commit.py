"""Commit command - record the staged working tree."""

import click

from cairn.cli.context import get_repository
from cairn.cli.output import success, error, info, short
from cairn.errors import CairnError, NothingToCommit


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
@click.pass_obj
def commit_cmd(obj, message):
    """
    Commit staged objects.

    Promotes everything in the staging area, writes a commit of the current
    working tree and advances the current branch (or HEAD, when detached).

    Examples:
        cairn commit -m "Add parser"
    """
    repo = get_repository(obj)

    try:
        commit_hash = repo.commit(message)
    except NothingToCommit:
        click.echo(error("No files to commit"))
        click.echo(info("Run 'cairn stage' first"))
        raise click.Abort()
    except CairnError as e:
        click.echo(error(f"Commit failed: {e}"))
        raise click.Abort()

    branch = repo.refs.current_branch()
    where = branch if branch else 'detached HEAD'
    click.echo(success(f"[{where} {short(commit_hash)}] {message.splitlines()[0] if message else ''}"))
    click.echo(info(f"Commit created with hash: {commit_hash}"))
