"""Low-level object inspection commands: cat-file and ls-tree."""

import click
from colorama import Fore, Style

from cairn.cli.context import get_repository
from cairn.cli.output import error
from cairn.core.objects import Blob, Commit, Tree
from cairn.errors import CairnError


@click.command('cat-file')
@click.option('-t', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', 'pretty', is_flag=True, help='Pretty-print object content')
@click.argument('object_hash')
@click.pass_obj
def cat_file_cmd(obj, show_type, show_size, pretty, object_hash):
    """
    Show the type, size or content of a stored object.

    Committed objects are searched first, then the staging area.

    Examples:
        cairn cat-file -t 3f1c2a...
        cairn cat-file -p 3f1c2a...
    """
    repo = get_repository(obj)

    try:
        stored = repo.read_object(object_hash)
    except CairnError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if show_type:
        click.echo(stored.type)
    elif show_size:
        click.echo(len(stored.serialize()))
    elif pretty:
        if isinstance(stored, Blob):
            try:
                click.echo(stored.data.decode('utf-8'), nl=False)
            except UnicodeDecodeError:
                click.echo(f"<binary data: {len(stored.data)} bytes>")
        elif isinstance(stored, Tree):
            for entry in stored.entries:
                click.echo(f"{entry.mode:>6} {entry.type} {entry.hash}\t{click.format_filename(entry.name)}")
        elif isinstance(stored, Commit):
            click.echo(stored.serialize().decode(), nl=False)
    else:
        click.echo(error("Use -t, -s or -p"))
        raise click.Abort()


@click.command('ls-tree')
@click.argument('rev', default='HEAD')
@click.pass_obj
def ls_tree_cmd(obj, rev):
    """
    List the entries of a tree.

    REV may be a tree hash, a commit hash, a branch name or HEAD.

    Examples:
        cairn ls-tree
        cairn ls-tree feature
    """
    repo = get_repository(obj)

    try:
        tree = repo.read_object(repo.resolve_tree(rev))
    except CairnError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    for entry in tree.entries:
        name = click.format_filename(entry.name)
        if entry.is_tree:
            name = f"{Fore.BLUE}{name}/{Style.RESET_ALL}"
        click.echo(f"{entry.mode:>6} {entry.type} {entry.hash}\t{name}")
