"""Stage command - snapshot the working tree into the staging area."""

import click

from cairn.cli.context import get_repository
from cairn.cli.output import success, error, info
from cairn.errors import CairnError


@click.command('stage')
@click.pass_obj
def stage_cmd(obj):
    """
    Stage the whole working tree.

    Writes a blob for every file and a tree for every directory into the
    staging area, skipping paths listed in .cairnignore, and prints the
    root tree hash.

    Examples:
        cairn stage
    """
    repo = get_repository(obj)

    try:
        result = repo.stage()
    except CairnError as e:
        click.echo(error(f"Stage failed: {e}"))
        raise click.Abort()

    for name in result.names:
        click.echo(f"  {click.format_filename(name)}")
    click.echo(success(f"Working tree staged: {result.tree_hash}"))
    if not result.names:
        click.echo(info("The working tree is empty"))
