"""
Release manifest generation.

A Release file is the edition's header template, rendered for the distro,
followed by the checksum listing produced by ``apt-ftparchive release``.
"""

import logging
from pathlib import Path
from string import Template

from ..models.config import BuildConfig
from ..models.distro import DistroSpec, RepositoryLayout
from ..protocols import CommandRunnerProtocol
from ..utils.compression import write_file
from ..utils.constants import RELEASE_ARGS, RELEASE_COMMAND, RELEASE_OUTPUT_KEY_PREFIX
from ..utils.error_handling import CommandError, ReleaseTemplateError, RepositoryBuildError
from ..utils.logging_utils import log_command_output
from ..utils.output_store import OutputStore


def render_release_header(template_source: str, distro: DistroSpec) -> str:
    """
    Render a Release header template for a distro.

    Templates use ``${code_name}``, ``${component}`` and ``${architectures}``;
    the architectures are joined by single spaces.

    Raises:
        ReleaseTemplateError: If the template references an unknown
            placeholder or is malformed
    """
    try:
        return Template(template_source).substitute(
            code_name=distro.code_name,
            component=distro.component,
            architectures=distro.architecture_list,
        )
    except KeyError as e:
        raise ReleaseTemplateError(f"rendering Release template: unknown placeholder {e}") from e
    except ValueError as e:
        raise ReleaseTemplateError(f"rendering Release template: {e}") from e


class ReleaseManifestBuilder:
    """
    Builds the Release manifest above a component directory.
    """

    def __init__(self, config: BuildConfig, runner: CommandRunnerProtocol, output_store: OutputStore) -> None:
        self.config = config
        self.runner = runner
        self.output_store = output_store

    def build_manifest(self, layout: RepositoryLayout, distro: DistroSpec) -> Path:
        """
        Write the Release file for a component.

        Nothing is written unless the template renders and the release
        command succeeds.

        Args:
            layout: Repository layout of the component
            distro: Distribution the repository belongs to

        Returns:
            Path of the written Release file

        Raises:
            TemplateNotFoundError: If the edition has no template
            ReleaseTemplateError: If the template fails to render
            CommandError: If apt-ftparchive fails
            RepositoryBuildError: If the Release file can't be written
        """
        header = render_release_header(self.config.release_template(distro.edition), distro)

        working_dir = layout.working_dir
        result = self.runner.run(RELEASE_COMMAND, RELEASE_ARGS, cwd=working_dir, combine_output=True)
        output = result.output_text
        log_command_output(RELEASE_COMMAND, output)
        if not result.ok:
            raise CommandError(f"generating Release content for {working_dir}", result.returncode, output)

        self.output_store.record(f"{RELEASE_OUTPUT_KEY_PREFIX}{working_dir}", output)

        release_file = layout.release_file
        try:
            write_file(release_file, header.encode("utf-8") + result.stdout)
        except OSError as e:
            raise RepositoryBuildError(f"writing Release file to disk {release_file}: {e}") from e

        logging.info("Wrote release file to: %s", release_file)
        return release_file


__all__ = ["render_release_header", "ReleaseManifestBuilder"]
