"""Checkout command - move HEAD to a branch or commit."""

import click

from cairn.cli.context import get_repository
from cairn.cli.output import success, error, info, warning, short
from cairn.core.objects import is_valid_hash
from cairn.errors import CairnError


@click.command('checkout')
@click.argument('target')
@click.pass_obj
def checkout_cmd(obj, target):
    """
    Point HEAD at a branch, or detach it at a commit hash.

    Only HEAD moves: files in the working directory are left as they are.

    Examples:
        cairn checkout feature
        cairn checkout 3f1c2a...    # detached HEAD
    """
    repo = get_repository(obj)

    try:
        if not repo.refs.branch_exists(target) and is_valid_hash(target):
            repo.refs.checkout_commit(target)
            click.echo(warning(f"HEAD is now detached at {short(target)}"))
            return

        commit_hash = repo.checkout_branch(target)
    except CairnError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Switched to branch '{target}'"))
    click.echo(info(f"HEAD is at {short(commit_hash)}; working directory unchanged"))
