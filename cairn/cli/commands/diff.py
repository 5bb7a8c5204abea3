"""Diff command - compare the top-level entries of two trees."""

import click
from colorama import Fore, Style

from cairn.cli.context import get_repository
from cairn.cli.output import error, info
from cairn.errors import CairnError
from cairn.operations.diff import ADDED, DELETED

COLORS = {ADDED: Fore.GREEN, DELETED: Fore.RED}


@click.command('diff')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.argument('rev_a')
@click.argument('rev_b')
@click.pass_obj
def diff_cmd(obj, no_color, rev_a, rev_b):
    """
    Show entries added, deleted or modified between two trees.

    Each side may be a tree hash, a commit hash, a branch name or HEAD.
    Trees are looked up in committed objects first, then in the staging
    area. Only top-level entries are compared; a changed directory shows
    up as one modified entry.

    Examples:
        cairn diff main feature
        cairn diff HEAD 3f1c...     # compare HEAD with a staged tree
    """
    repo = get_repository(obj)

    try:
        tree_a = repo.resolve_tree(rev_a)
        tree_b = repo.resolve_tree(rev_b)
        changes = repo.diff(tree_a, tree_b)
    except CairnError as e:
        click.echo(error(f"Diff failed: {e}"))
        raise click.Abort()

    if not changes:
        click.echo(info("No differences"))
        return

    for change in changes:
        if no_color:
            click.echo(click.format_filename(str(change)))
        else:
            color = COLORS.get(change.status, Fore.YELLOW)
            click.echo(f"{color}{click.format_filename(str(change))}{Style.RESET_ALL}")
