"""Result models for command and job execution."""

from pathlib import Path
from typing import List, Optional

from pydantic import Field

from .base import RepoBuilderBaseModel


class CommandResult(RepoBuilderBaseModel):
    """
    Captured result of an external command.

    Attributes:
        args: Full argument vector, program first
        cwd: Working directory the command ran in
        returncode: Exit status
        stdout: Captured standard output (combined with stderr when requested)
        stderr: Captured standard error
    """

    args: List[str]
    cwd: Optional[Path] = None
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        """Whether the command exited successfully."""
        return self.returncode == 0

    @property
    def output_text(self) -> str:
        """Standard output decoded as text."""
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def command_line(self) -> str:
        """Argument vector joined for logging."""
        return " ".join(self.args)


class JobResult(RepoBuilderBaseModel):
    """
    Outcome of one repository job.

    Attributes:
        job_id: Job identifier
        distro: Distribution name
        architecture: Architecture the job targeted
        completed: Whether the job ran to completion
        skipped: Whether the job was skipped by its dependency check
        repositories: Component directories that were rebuilt
        errors: Error messages collected while running
    """

    job_id: str
    distro: str
    architecture: str
    completed: bool = False
    skipped: bool = False
    repositories: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when the job completed (or was skipped) without errors."""
        return (self.completed or self.skipped) and not self.errors


__all__ = ["CommandResult", "JobResult"]
