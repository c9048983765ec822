"""
Package injection into a repository tree.

Built packages are linked into the ``binary-<arch>`` directory of a
component, after making sure the component's architecture skeleton exists.
"""

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, Union

from ..models.distro import DistroSpec
from ..utils.constants import ARCH_DIR_PREFIX
from ..utils.error_handling import AggregateError, ErrorCollector, RepositoryBuildError
from .arch_dirs import ensure_arch_dirs

# errno values for which a hard link can't work but a copy can
_COPY_FALLBACK_ERRNOS = {errno.EXDEV, errno.EPERM, errno.EACCES, errno.EMLINK}


def _link_or_copy(source: Path, destination: Path) -> None:
    if destination.exists():
        if destination.stat().st_size == source.stat().st_size:
            logging.debug("Package %s already present, skipping", destination)
            return
        destination.unlink()

    try:
        os.link(source, destination)
        logging.info("Linked %s to %s", source, destination)
    except OSError as e:
        if e.errno not in _COPY_FALLBACK_ERRNOS:
            raise
        shutil.copy2(source, destination)
        logging.info("Copied %s to %s", source, destination)


def link_packages(destination: Union[str, os.PathLike], packages: Iterable[Union[str, os.PathLike]]) -> None:
    """
    Link package files into a directory.

    Hard links are used where possible; across filesystems the files are
    copied. A package already present with the same size is skipped.

    Args:
        destination: Architecture directory
        packages: Package files to add

    Raises:
        AggregateError: Listing every package that could not be added
    """
    catcher = ErrorCollector()
    destination = Path(destination)

    for package in packages:
        source = Path(package)
        if not source.is_file():
            catcher.add(RepositoryBuildError(f"package file '{source}' does not exist"))
            continue

        try:
            _link_or_copy(source, destination / source.name)
        except OSError as e:
            catcher.add(RepositoryBuildError(f"adding package '{source}' to '{destination}': {e}"))

    catcher.check()


class PackageInjector:
    """
    Injects packages for one distribution into local repository trees.
    """

    def __init__(self, distro: DistroSpec, *, verify_placeholders: bool = False) -> None:
        """
        Initialize the injector.

        Args:
            distro: Distribution the packages belong to
            verify_placeholders: Passed through to ensure_arch_dirs
        """
        self.distro = distro
        self.verify_placeholders = verify_placeholders

    def inject(
        self,
        local_root: Union[str, os.PathLike],
        repo_name: str,
        architecture: str,
        packages: Iterable[Union[str, os.PathLike]],
    ) -> Path:
        """
        Add packages to the component directory of a repository.

        The skeleton is ensured for all of the distro's architectures, not
        only the one receiving packages. Ensuring and linking are both
        attempted; their errors are raised together.

        Args:
            local_root: Local directory holding the repository trees
            repo_name: Repository name relative to local_root
            architecture: Architecture the packages are built for
            packages: Package files to add

        Returns:
            Component directory (the rebuild working directory)

        Raises:
            AggregateError: If ensuring the skeleton or linking failed
        """
        repo_path = Path(local_root) / repo_name / self.distro.component
        catcher = ErrorCollector()

        try:
            ensure_arch_dirs(repo_path, self.distro.architectures, verify_placeholders=self.verify_placeholders)
        except AggregateError as e:
            catcher.add(e)

        try:
            link_packages(repo_path / f"{ARCH_DIR_PREFIX}{architecture}", packages)
        except AggregateError as e:
            catcher.add(e)

        catcher.check()
        return repo_path


__all__ = ["link_packages", "PackageInjector"]
