"""Branch command - list or create branches."""

import click
from colorama import Fore, Style

from cairn.cli.context import get_repository
from cairn.cli.output import success, error, warning, short
from cairn.errors import CairnError


@click.command('branch')
@click.option('-v', '--verbose', is_flag=True, help='Show commit hash for each branch')
@click.argument('branch_name', required=False)
@click.pass_obj
def branch_cmd(obj, verbose, branch_name):
    """
    List or create branches.

    With no arguments, lists all branches. The current branch is marked
    with *. With one argument, creates a new branch at HEAD without
    switching to it.

    Examples:
        cairn branch                # List branches
        cairn branch feature        # Create 'feature' at HEAD
        cairn branch -v             # List branches with commit hashes
    """
    repo = get_repository(obj)

    if branch_name:
        try:
            commit_hash = repo.create_branch(branch_name)
        except CairnError as e:
            click.echo(error(str(e)))
            raise click.Abort()
        click.echo(success(f"Created branch '{branch_name}' at {short(commit_hash)}"))
        return

    try:
        branches = repo.list_branches()
    except CairnError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if not branches:
        click.echo(warning("No branches exist yet"))
        return

    for branch in branches:
        if branch.current:
            prefix = f"{Fore.GREEN}* "
        else:
            prefix = "  "
        if verbose:
            click.echo(f"{prefix}{branch.name:<20}{Style.RESET_ALL} {short(branch.commit)}")
        else:
            click.echo(f"{prefix}{branch.name}{Style.RESET_ALL}")
