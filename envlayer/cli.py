"""Command-line interface for inspecting a layered configuration.

Examples:
    envlayer get DATABASE_URL
    envlayer --dir ./deploy show --prefix CACHE --category BOOK --format yaml
    envlayer files
"""

from __future__ import annotations

import importlib.metadata as _metadata
import json
import re
import sys

import click
import yaml

from .config.process_config import ProcessConfig
from .core.errors import EnvError
from .utils.logger import setup_logging

_PLAIN_VALUE = re.compile(r"[A-Za-z0-9_./:@,+-]*")


def _get_version() -> str:
    try:
        return _metadata.version("envlayer")
    except _metadata.PackageNotFoundError:
        return "0.0.0-dev"


def _dotenv_line(key: str, value: str) -> str:
    if _PLAIN_VALUE.fullmatch(value):
        return f"{key}={value}"
    return f"{key}={json.dumps(value, ensure_ascii=False)}"


def _accessor(config: ProcessConfig, prefix: str, category: str):
    if prefix or category:
        return config.signed(prefix, category)
    return config


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(_get_version())
@click.option('--dir', '-d', 'directory', default='.', show_default=True,
              type=click.Path(file_okay=False), help='Directory holding the .env files')
@click.option('--log-level', default='WARNING', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level')
@click.option('--verbose', '-v', is_flag=True, help='Log loading details')
@click.pass_context
def main(ctx: click.Context, directory: str, log_level: str, verbose: bool) -> None:
    """Inspect environment configuration loaded from the OS and .env files."""
    logger = setup_logging(log_level='DEBUG' if verbose else log_level)
    config = ProcessConfig()
    try:
        config.initialize(directory)
    except (EnvError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(2)
    logger.debug(f"Loaded {len(config)} entries")
    ctx.obj = config


@main.command()
@click.argument('key')
@click.option('--prefix', '-p', default='', help='Scope prefix, e.g. CACHE')
@click.option('--category', '-c', default='', help='Scope category, e.g. BOOK')
@click.option('--default', 'default', default=None, help='Value printed when KEY is not set')
@click.pass_obj
def get(config: ProcessConfig, key: str, prefix: str, category: str, default: str | None):
    """Print the value of KEY."""
    value, found = _accessor(config, prefix, category).lookup(key)
    if found:
        click.echo(value)
    elif default is not None:
        click.echo(default)
    else:
        click.echo(f"{key} is not set", err=True)
        raise click.exceptions.Exit(1)


@main.command()
@click.option('--prefix', '-p', default='', help='Scope prefix, e.g. CACHE')
@click.option('--category', '-c', default='', help='Scope category, e.g. BOOK')
@click.option('--format', 'output_format', default='dotenv', show_default=True,
              type=click.Choice(['dotenv', 'json', 'yaml']), help='Output format')
@click.pass_obj
def show(config: ProcessConfig, prefix: str, category: str, output_format: str):
    """Print every (scoped) value."""
    values = _accessor(config, prefix, category).all()
    if output_format == 'json':
        click.echo(json.dumps(values, indent=2, ensure_ascii=False))
    elif output_format == 'yaml':
        click.echo(yaml.safe_dump(values, default_flow_style=False, allow_unicode=True), nl=False)
    else:
        for key, value in values.items():
            click.echo(_dotenv_line(key, value))


@main.command()
@click.pass_obj
def files(config: ProcessConfig):
    """List the dotenv files that were applied, in load order."""
    click.echo(f"root: {config.root}")
    click.echo(f"{config.app_env_key}: {config.app_env}")
    for filename in config.loaded_files:
        click.echo(filename)


@main.command()
@click.argument('segments', nargs=-1)
@click.pass_obj
def path(config: ProcessConfig, segments: tuple):
    """Print the root directory joined with SEGMENTS."""
    click.echo(config.path(*segments))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
