"""
Package index generation.

The Packages index of an architecture is regenerated from scratch on every
rebuild by dpkg-scanpackages; Packages.gz is always compressed from the
same scan output.
"""

import logging

from ..models.distro import RepositoryLayout
from ..protocols import CommandRunnerProtocol
from ..utils.compression import gzip_and_write_to_file, write_file
from ..utils.constants import (
    PACKAGES_FILENAME,
    PACKAGES_GZ_FILENAME,
    SCAN_PACKAGES_ARGS,
    SCAN_PACKAGES_COMMAND,
)
from ..utils.error_handling import CommandError, RepositoryBuildError
from ..utils.logging_utils import log_command_output


class MetadataGenerator:
    """
    Regenerates Packages and Packages.gz for an architecture directory.
    """

    def __init__(self, runner: CommandRunnerProtocol) -> None:
        self.runner = runner

    def scan_packages(self, layout: RepositoryLayout, architecture: str) -> bytes:
        """
        Run the package scanner over an architecture directory.

        The scanner runs from the repository root so the Filename fields
        in the index are relative to it.

        Returns:
            The scanner's standard output, unmodified

        Raises:
            CommandError: If the scanner exits non-zero
        """
        args = [*SCAN_PACKAGES_ARGS, str(layout.relative_arch_dir(architecture))]
        result = self.runner.run(SCAN_PACKAGES_COMMAND, args, cwd=layout.root)
        log_command_output(SCAN_PACKAGES_COMMAND, result.stderr.decode("utf-8", errors="replace"))

        if not result.ok:
            raise CommandError("building 'Packages'", result.returncode, result.output_text)

        return result.stdout

    def regenerate_index(self, layout: RepositoryLayout, architecture: str) -> bytes:
        """
        Rebuild the package index of an architecture.

        Nothing is written if the scan fails.

        Args:
            layout: Repository layout of the component
            architecture: Architecture to index

        Returns:
            Contents of the new Packages file

        Raises:
            CommandError: If the scanner fails
            RepositoryBuildError: If writing either index file fails
        """
        out = self.scan_packages(layout, architecture)

        packages_file = layout.arch_dir(architecture) / PACKAGES_FILENAME
        try:
            write_file(packages_file, out)
        except OSError as e:
            raise RepositoryBuildError(f"problem writing packages file to '{packages_file}': {e}") from e
        logging.info("Wrote packages file to: %s", packages_file)

        try:
            gzip_and_write_to_file(layout.arch_dir(architecture) / PACKAGES_GZ_FILENAME, out)
        except RepositoryBuildError as e:
            raise RepositoryBuildError(f"compressing the 'Packages' file: {e}") from e

        return out


__all__ = ["MetadataGenerator"]
