"""
Protocols for the external collaborators of the repository pipeline.

The pipeline only depends on these interfaces, so tests can substitute
fakes for the command runner, the signing service and the index page
builder.
"""

import os
from typing import Optional, Protocol, Sequence, Union

from ..models.results import CommandResult


class CommandRunnerProtocol(Protocol):
    """Protocol for running external commands."""

    def run(
        self,
        program: str,
        args: Sequence[str],
        cwd: Optional[Union[str, os.PathLike]] = None,
        *,
        combine_output: bool = False,
    ) -> CommandResult:
        """
        Run a command and capture its output.

        Args:
            program: Executable name or path
            args: Arguments passed to the program
            cwd: Working directory for the command
            combine_output: Capture stderr into stdout when True

        Returns:
            CommandResult with the exit status and captured output
        """
        ...


class SignerProtocol(Protocol):
    """Protocol for signing files with a detached signature."""

    def sign(self, file_path: Union[str, os.PathLike], extension: str, overwrite: bool) -> None:
        """
        Sign a file.

        Args:
            file_path: File to sign
            extension: Extension of the detached signature file
            overwrite: Replace an existing signature when True

        Raises:
            SigningError: If the file could not be signed
        """
        ...


class IndexPageBuilderProtocol(Protocol):
    """Protocol for building static index pages."""

    def build_index_page(self, directory: Union[str, os.PathLike], bucket: str) -> None:
        """
        Build index pages for a directory tree.

        Args:
            directory: Directory to index
            bucket: Storage bucket the directory is published to
        """
        ...


__all__ = ["CommandRunnerProtocol", "SignerProtocol", "IndexPageBuilderProtocol"]
