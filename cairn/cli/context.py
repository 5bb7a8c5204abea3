"""Repository lookup shared by CLI commands."""

import click

from cairn.core.repository import Repository
from cairn.cli.output import error


def get_repository(obj) -> Repository:
    """Find the repository for the invocation directory, or abort."""
    path = (obj or {}).get('path', '.')
    repo = Repository.find_repository(path)
    if not repo:
        click.echo(error("Not a cairn repository"))
        raise click.Abort()
    return repo
