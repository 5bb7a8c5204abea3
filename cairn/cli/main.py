"""Main CLI entry point for Cairn."""

import logging

import click
from colorama import init

from cairn import __version__
from cairn.cli.commands import (init_cmd, stage_cmd, commit_cmd, diff_cmd, branch_cmd,
                                checkout_cmd, config_cmd, cat_file_cmd, ls_tree_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


@click.group()
@click.version_option(version=__version__)
@click.option('-C', 'directory', default='.', type=click.Path(file_okay=False),
              help='Run as if started in DIRECTORY')
@click.option('-v', '--verbose', is_flag=True, help='Log object and ref activity')
@click.pass_context
def cli(ctx, directory, verbose):
    """Cairn - a minimal content-addressable version control store."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    ctx.obj = {'path': directory}


# Register commands
cli.add_command(init_cmd)
cli.add_command(stage_cmd)
cli.add_command(commit_cmd)
cli.add_command(diff_cmd)
cli.add_command(branch_cmd)
cli.add_command(checkout_cmd)
cli.add_command(config_cmd)
cli.add_command(cat_file_cmd)
cli.add_command(ls_tree_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
