"""
Compression helpers for package index files.
"""

import gzip
import logging
import os
from typing import Union

from .constants import FILE_MODE, GZIP_COMPRESSION_LEVEL
from .error_handling import RepositoryBuildError


def gzip_bytes(content: bytes) -> bytes:
    """
    Compress bytes with gzip framing at maximum compression.

    The header timestamp is zeroed so equal input gives equal output.

    Args:
        content: Data to compress

    Returns:
        gzip-compressed data
    """
    return gzip.compress(content, compresslevel=GZIP_COMPRESSION_LEVEL, mtime=0)


def write_file(file_name: Union[str, os.PathLike], content: bytes) -> None:
    """
    Write bytes to a file with the repository file mode.

    Args:
        file_name: Destination path
        content: Bytes to write
    """
    with open(file_name, "wb") as f:
        f.write(content)
    os.chmod(file_name, FILE_MODE)


def gzip_and_write_to_file(file_name: Union[str, os.PathLike], content: bytes) -> None:
    """
    Compress content and write it to a file.

    Args:
        file_name: Destination path (normally ending in .gz)
        content: Uncompressed data

    Raises:
        RepositoryBuildError: If compressing or writing fails
    """
    try:
        compressed = gzip_bytes(content)
    except (OSError, ValueError) as e:
        raise RepositoryBuildError(f"compressing file '{file_name}': {e}") from e

    try:
        write_file(file_name, compressed)
    except OSError as e:
        raise RepositoryBuildError(f"writing compressed file '{file_name}': {e}") from e

    logging.info("Wrote zipped packages file to: %s", file_name)


__all__ = ["gzip_bytes", "write_file", "gzip_and_write_to_file"]
