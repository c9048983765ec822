"""
Debian repository job.

One DebRepositoryJob handles one architecture of one distro: it injects
the architecture's packages into every repository of the distro and then
rebuilds the repository metadata, signs the Release file and refreshes
the index pages.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..models.config import BuildConfig
from ..models.distro import DistroSpec, RepositoryLayout
from ..models.results import JobResult
from ..protocols import CommandRunnerProtocol, IndexPageBuilderProtocol, SignerProtocol
from ..utils.constants import DEB_JOB_SUFFIX, RELEASE_SIGNATURE_EXTENSION
from ..utils.error_handling import ErrorCollector, RepoBuilderError, RepositoryBuildError, handle_generic_error
from ..utils.logging_utils import log_operation_complete, log_operation_start
from ..utils.output_store import OutputStore
from ..utils.path_locks import RELEASE_DIR_LOCKS, PathLocks
from .injector import PackageInjector
from .metadata import MetadataGenerator
from .release import ReleaseManifestBuilder

# Errors a pipeline step may raise; OSError covers missing tools and filesystem failures
STEP_ERRORS = (RepoBuilderError, OSError)


class DebRepositoryJob:  # pylint: disable=too-many-instance-attributes
    """
    Builds Debian/Ubuntu repositories for one architecture of a distro.

    The job owns its architecture and configuration reference; the
    OutputStore is shared with every other job of the run. Jobs of other
    architectures rebuild the same Release manifest, so each repository is
    processed while holding the lock of its release directory.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        distro: DistroSpec,
        architecture: str,
        config: BuildConfig,
        output_store: OutputStore,
        runner: CommandRunnerProtocol,
        signer: SignerProtocol,
        index_builder: IndexPageBuilderProtocol,
        local_root: Union[str, os.PathLike],
        packages: Sequence[Union[str, os.PathLike]] = (),
        release_locks: Optional[PathLocks] = None,
    ) -> None:
        if architecture not in distro.architectures:
            raise ValueError(f"Architecture '{architecture}' is not defined for distro '{distro.name}'")

        self.distro = distro
        self.arch = architecture
        self.config = config
        self.output_store = output_store
        self.signer = signer
        self.index_builder = index_builder
        self.local_root = Path(local_root)
        self.packages = [Path(p) for p in packages]
        self.release_locks = release_locks if release_locks is not None else RELEASE_DIR_LOCKS

        self.injector = PackageInjector(distro, verify_placeholders=config.verify_placeholders)
        self.metadata = MetadataGenerator(runner)
        self.release = ReleaseManifestBuilder(config, runner, output_store)

        self.completed = False
        self.errors: List[str] = []
        self.repositories: List[str] = []

    @property
    def job_id(self) -> str:
        """Identifier of the job."""
        return f"{self.distro.name}-{self.distro.component}-{self.arch}.{DEB_JOB_SUFFIX}"

    def should_run(self) -> bool:
        """Whether there is work left for this job."""
        if self.completed:
            logging.debug("Job %s already completed", self.job_id)
            return False
        if not self.packages:
            logging.debug("Job %s has no packages to add", self.job_id)
            return False
        return True

    def rebuild_repo(self, working_dir: Union[str, os.PathLike]) -> None:
        """
        Regenerate, sign and publish the metadata of a component directory.

        Steps run in order and the first failure aborts the rest, so a
        broken Release file is never signed and an unsigned one never gets
        index pages. The steps run under the lock of the release directory,
        so the Release file signed is the one this call wrote.

        Args:
            working_dir: Component directory

        Raises:
            RepositoryBuildError: Wrapping the error of the failing step
        """
        try:
            layout = RepositoryLayout.from_working_dir(Path(working_dir))
        except ValueError as e:
            raise RepositoryBuildError(f"resolving repository root for {working_dir}: {e}") from e
        working_dir = layout.working_dir

        with self.release_locks.lock_for(layout.release_dir):
            try:
                self.metadata.regenerate_index(layout, self.arch)
            except STEP_ERRORS as e:
                raise RepositoryBuildError(f"regenerating package index for {working_dir}: {e}") from e

            try:
                release_file = self.release.build_manifest(layout, self.distro)
            except STEP_ERRORS as e:
                raise RepositoryBuildError(f"building Release file for {working_dir}: {e}") from e

            if not release_file.is_file():
                raise RepositoryBuildError(f"Release file {release_file} missing after it was written")

            try:
                self.signer.sign(release_file, RELEASE_SIGNATURE_EXTENSION, False)
            except STEP_ERRORS as e:
                raise RepositoryBuildError(f"signing Release file for {working_dir}: {e}") from e

            try:
                self.index_builder.build_index_page(working_dir, self.distro.bucket)
            except STEP_ERRORS as e:
                raise RepositoryBuildError(f"building index.html pages for {working_dir}: {e}") from e

    def run(self) -> JobResult:
        """
        Inject packages and rebuild every repository of the distro.

        A failing repository does not stop the others; all failures are
        reported in the result.

        Returns:
            JobResult describing the run
        """
        log_operation_start("repository job", job=self.job_id, repos=len(self.distro.repos))
        catcher = ErrorCollector()

        for repo_name in self.distro.repos:
            # the repository directory holds the Release file of its component
            with self.release_locks.lock_for(self.local_root / repo_name):
                try:
                    working_dir = self.injector.inject(self.local_root, repo_name, self.arch, self.packages)
                    self.rebuild_repo(working_dir)
                except RepoBuilderError as e:
                    handle_generic_error(e, f"building {repo_name} for {self.arch}", log_traceback=False)
                    catcher.add(e)
                    continue

            self.repositories.append(str(working_dir))

        self.errors = [str(err) for err in catcher.errors]
        self.completed = True
        log_operation_complete("repository job", job=self.job_id, errors=len(self.errors))

        return self.result()

    def result(self, skipped: bool = False) -> JobResult:
        """Snapshot of the job state."""
        return JobResult(
            job_id=self.job_id,
            distro=self.distro.name,
            architecture=self.arch,
            completed=self.completed,
            skipped=skipped,
            repositories=list(self.repositories),
            errors=list(self.errors),
        )

    def __repr__(self) -> str:
        return f"DebRepositoryJob(id={self.job_id!r}, packages={len(self.packages)})"


__all__ = ["DebRepositoryJob"]
