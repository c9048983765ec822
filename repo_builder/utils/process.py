"""
External command execution.

This module runs the external tools used to build repositories
(dpkg-scanpackages, apt-ftparchive) and captures their output byte-exact.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from ..models.results import CommandResult


class SubprocessRunner:
    """
    Run external commands with ``subprocess``.

    Implements the CommandRunnerProtocol.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        """
        Initialize the runner.

        Args:
            timeout: Optional timeout in seconds applied to every command
        """
        self.timeout = timeout

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

        Raises:
            OSError: If the program can't be started
            subprocess.TimeoutExpired: If the configured timeout elapses
        """
        argv = [program, *args]
        logging.info("Running command='%s' path='%s'", " ".join(argv), cwd or os.getcwd())

        proc = subprocess.run(
            argv,
            cwd=cwd,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if combine_output else subprocess.PIPE,
            timeout=self.timeout,
        )

        return CommandResult(
            args=argv,
            cwd=Path(cwd) if cwd is not None else None,
            returncode=proc.returncode,
            stdout=proc.stdout or b"",
            stderr=proc.stderr or b"",
        )


__all__ = ["SubprocessRunner"]
