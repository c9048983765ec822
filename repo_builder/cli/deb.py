"""
Debian repository command for the repo-builder CLI.

This module provides the deb command, which injects packages into the
configured repositories of a distro and rebuilds their metadata.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from ..models.config import BuildConfig
from ..services import NotarySigner, StaticIndexPageBuilder, build_jobs, log_results_summary, run_jobs
from ..utils import OutputStore, setup_logging
from ..utils.config_manager import ConfigManager
from ..utils.error_handling import handle_generic_error, log_and_exit, with_error_handling
from ..utils.process import SubprocessRunner


@with_error_handling("loading configuration", exit_on_error=True)
def load_build_config(config_path: Optional[str]) -> BuildConfig:
    """Load the build configuration, exiting on failure."""
    return ConfigManager(config_path).load_build_config()


def write_output_file(output_file: str, output_store: OutputStore) -> None:
    """Write the recorded command output as JSON."""
    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(output_store.snapshot(), f, indent=2, sort_keys=True)
    logging.info("Wrote command output to %s", path)


@click.command()
@click.option("--distro", required=True, help="Name of the distro in the configuration file")
@click.option("--arch", "archs", multiple=True, help="Architecture to build (repeatable, default: all)")
@click.option(
    "--local-root",
    required=True,
    type=click.Path(file_okay=False),
    help="Local directory holding the repository trees",
)
@click.option(
    "--package",
    "packages",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Package file to add (repeatable)",
)
@click.option("--output-file", type=click.Path(dir_okay=False), help="Write recorded command output as JSON")
@click.pass_context
def deb(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    ctx: click.Context,
    distro: str,
    archs: Tuple[str, ...],
    local_root: str,
    packages: Tuple[str, ...],
    output_file: Optional[str],
) -> None:
    """Add packages to Debian repositories and rebuild their metadata."""
    config_path = ctx.obj["config"]
    debug = ctx.obj["debug"]
    max_workers = ctx.obj["max_workers"]

    setup_logging(debug, use_wrapping=True)

    build_config = load_build_config(config_path)
    output_store = OutputStore()

    if build_config.notary is None:
        log_and_exit("No [notary] section in the configuration; Release files can't be signed")

    signer = None
    try:
        signer = NotarySigner(build_config.notary, output_store)
        jobs = build_jobs(
            build_config,
            distro,
            local_root=Path(local_root).absolute(),
            packages=list(packages),
            output_store=output_store,
            runner=SubprocessRunner(),
            signer=signer,
            index_builder=StaticIndexPageBuilder(build_config.index_page),
            architectures=list(archs) or None,
        )

        logging.info("Running %d repository job(s) with %d workers", len(jobs), max_workers)
        results = run_jobs(jobs, max_workers=max_workers)
    except Exception as e:
        handle_generic_error(e, "deb repository build")
        sys.exit(1)
    finally:
        if signer:
            signer.close()

    if output_file:
        write_output_file(output_file, output_store)

    log_results_summary(results)
    for result in results:
        status = "skipped" if result.skipped else ("ok" if result.success else "FAILED")
        click.echo(f"{result.job_id}: {status}")

    sys.exit(0 if all(result.success for result in results) else 1)


__all__ = ["deb"]
