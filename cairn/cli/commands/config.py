"""Config command - manage repository and global configuration."""

import click

from cairn.core.config import Config
from cairn.core.repository import Repository
from cairn.cli.output import success, error, info, warning


def split_key(key):
    """Split 'section.option' into its parts; bare keys belong to [core]."""
    return key.split('.', 1) if '.' in key else ('core', key)


def load_config(obj, is_global):
    """Config for the invocation directory; --global needs no repository."""
    if is_global:
        return Config()
    repo = Repository.find_repository((obj or {}).get('path', '.'))
    if not repo:
        click.echo(error("Not a cairn repository (use --global for global config)"))
        raise click.Abort()
    return repo.config


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('get')
@click.argument('key')
@click.pass_obj
def config_get(obj, key):
    """
    Print the effective value of a config key.

    Examples:
        cairn config get core.compression
    """
    repo = Repository.find_repository((obj or {}).get('path', '.'))
    config = repo.config if repo else Config()

    section, option = split_key(key)
    value = config.get(section, option)
    if value is None:
        click.echo(warning(f"{key} is not set"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Write to ~/.cairnconfig')
@click.pass_obj
def config_set(obj, key, value, is_global):
    """
    Set a config value.

    Examples:
        cairn config set core.compression 9
        cairn config set --global init.defaultbranch trunk
    """
    config = load_config(obj, is_global)
    section, option = split_key(key)
    config.set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Modify ~/.cairnconfig')
@click.pass_obj
def config_unset(obj, key, is_global):
    """Remove a config value."""
    config = load_config(obj, is_global)
    section, option = split_key(key)

    if config.unset(section, option, global_config=is_global):
        click.echo(success(f"Removed {key}"))
    else:
        click.echo(info(f"{key} was not set"))


@config_cmd.command('list')
@click.pass_obj
def config_list(obj):
    """List configured values (repository values override global ones)."""
    repo = Repository.find_repository((obj or {}).get('path', '.'))
    config = repo.config if repo else Config()

    values = config.list_all()
    if not values:
        click.echo(info("No configuration set"))
        return

    for section in sorted(values):
        for option, value in sorted(values[section].items()):
            click.echo(f"{section}.{option}={value}")
