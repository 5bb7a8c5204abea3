"""Initialize a new Cairn repository."""

import click
from pathlib import Path

from cairn.core.repository import Repository
from cairn.cli.output import success, error, info, short
from cairn.errors import CairnError


@click.command('init')
@click.argument('path', required=False)
@click.option('-b', '--initial-branch', help='Name of the first branch (default: main)')
@click.pass_obj
def init_cmd(obj, path, initial_branch):
    """
    Initialize a new Cairn repository.

    Creates a .cairn directory, a default .cairnignore, and an initial
    commit of the empty tree on the first branch.

    Examples:
        cairn init                  # Initialize in current directory
        cairn init my-project       # Initialize in my-project directory
        cairn init -b trunk         # Start on a branch named 'trunk'
    """
    repo_path = Path(obj['path'], path) if path else Path(obj['path'])
    repo_path = repo_path.resolve()

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = Repository(str(repo_path))
        repo.init(default_branch=initial_branch)
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {repo_path}"))
        raise click.Abort()
    except CairnError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    branch = repo.refs.current_branch()
    click.echo(success(f"Initialized empty Cairn repository in {repo.cairn_dir}"))
    click.echo(info(f"On branch {branch} at {short(repo.refs.head_commit())}"))
