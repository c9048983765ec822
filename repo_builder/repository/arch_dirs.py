"""
Architecture directory scaffolding.

Every architecture of a distribution gets a ``binary-<arch>`` directory
holding an (initially empty) Packages index and its compressed copy.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Union

from ..utils.compression import gzip_and_write_to_file, write_file
from ..utils.constants import ARCH_DIR_PREFIX, DIRECTORY_MODE, PACKAGES_FILENAME, PACKAGES_GZ_FILENAME
from ..utils.error_handling import ErrorCollector, RepositoryBuildError


def _write_placeholders(path: Path, *, missing_only: bool = False) -> ErrorCollector:
    catcher = ErrorCollector()

    packages_file = path / PACKAGES_FILENAME
    if not (missing_only and packages_file.exists()):
        try:
            write_file(packages_file, b"")
        except OSError as e:
            catcher.add(RepositoryBuildError(f"writing empty packages file '{packages_file}': {e}"))
            return catcher

    packages_gz_file = path / PACKAGES_GZ_FILENAME
    if not (missing_only and packages_gz_file.exists()):
        try:
            gzip_and_write_to_file(packages_gz_file, b"")
        except RepositoryBuildError as e:
            catcher.add(e)

    return catcher


def ensure_arch_dirs(
    base_path: Union[str, os.PathLike], architectures: Iterable[str], *, verify_placeholders: bool = False
) -> None:
    """
    Create the ``binary-<arch>`` skeleton for each architecture.

    A directory that already exists is left alone, so running this again
    on an initialized tree writes nothing. Each architecture is processed
    even if an earlier one failed.

    Args:
        base_path: Component directory
        architectures: Architecture names
        verify_placeholders: Also write Packages files missing from
            directories that already exist

    Raises:
        AggregateError: Listing every architecture that could not be initialized
    """
    catcher = ErrorCollector()

    for arch in architectures:
        path = Path(base_path) / f"{ARCH_DIR_PREFIX}{arch}"

        if path.exists():
            if verify_placeholders:
                for error in _write_placeholders(path, missing_only=True).errors:
                    catcher.add(error)
            continue

        try:
            os.makedirs(path, mode=DIRECTORY_MODE)
        except FileExistsError:
            # another job created it between the check and makedirs
            logging.debug("Directory %s already exists, skipping", path)
            continue
        except OSError as e:
            catcher.add(RepositoryBuildError(f"creating directory '{path}': {e}"))
            continue

        logging.info("Created architecture directory: %s", path)
        for error in _write_placeholders(path).errors:
            catcher.add(error)

    catcher.check()


__all__ = ["ensure_arch_dirs"]
