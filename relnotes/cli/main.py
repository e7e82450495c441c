"""Main CLI entry point for relnotes."""

import logging
import sys

import click

from .. import __version__
from ..config import get_config, create_sample_config
from ..logging_setup import setup_logging
from .generate import generate


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--access-token', help='Asana personal access token (overrides RELNOTES_ACCESS_TOKEN)')
@click.option('--project-id', help='Asana project id (overrides RELNOTES_PROJECT_ID)')
@click.option('--config-file', '-c', help='Path to JSON configuration file')
@click.version_option(version=__version__, prog_name="relnotes")
@click.pass_context
def cli(ctx, debug, access_token, project_id, config_file):
    """relnotes - release notes from Asana tasks."""

    setup_logging(debug)
    logger = logging.getLogger('relnotes')

    try:
        base_config = get_config(config_file, access_token=access_token, project_id=project_id)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    ctx.ensure_object(dict)
    ctx.obj['config'] = base_config
    ctx.obj['logger'] = logger


@cli.command()
@click.option('--path', '-p', default='relnotes.json', help='Path for the config file')
@click.pass_context
def init_config(ctx, path):
    """Create a sample configuration file."""
    try:
        create_sample_config(path)
    except OSError as e:
        ctx.obj['logger'].error(f"Error creating config file: {e}")
        sys.exit(1)

    click.echo(f"Sample configuration file created at: {path}")
    click.echo("Please edit the file and add your Asana token and project id.")


@cli.command()
def version():
    """Show version information."""
    click.echo(f"relnotes version {__version__}")


cli.add_command(generate)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()
