"""
Unified CLI entry point for repo-builder using Click.

This module provides the main CLI group and shared options.
"""

import sys
from typing import Optional

import click

from . import deb
from .._version import __version__
from ..utils.constants import DEFAULT_MAX_WORKERS


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="repo-builder")
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to config file (default: ~/.config/repo-builder/config.toml)",
)
@click.option(
    "-d",
    "--debug",
    count=True,
    help="Increase verbosity (use -d for INFO, -dd for DEBUG, -ddd for DEBUG with HTTP logs)",
)
@click.option(
    "--max-workers",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_WORKERS,
    help=f"Maximum number of concurrent repository jobs (default: {DEFAULT_MAX_WORKERS})",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], debug: int, max_workers: int) -> None:
    """Repo Builder - Build, sign and index OS package repositories."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["debug"] = debug
    ctx.obj["max_workers"] = max_workers


cli.add_command(deb.deb)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation cancelled by user", err=True)
        sys.exit(130)


__all__ = ["cli", "main"]
