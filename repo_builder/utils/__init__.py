"""
Utility modules for repo-builder operations.
"""

from . import constants
from . import error_handling
from .error_handling import AggregateError, ErrorCollector
from .logger import setup_logging, WrappingFormatter, get_logger
from .output_store import OutputStore
from .path_locks import PathLocks, RELEASE_DIR_LOCKS
from .compression import gzip_and_write_to_file
from .session import create_session_with_retry
from . import logging_utils

# process and config_manager depend on the models package and are imported
# from their own modules to keep models -> utils imports acyclic

__all__ = [
    "constants",
    "error_handling",
    "AggregateError",
    "ErrorCollector",
    "setup_logging",
    "WrappingFormatter",
    "get_logger",
    "OutputStore",
    "PathLocks",
    "RELEASE_DIR_LOCKS",
    "gzip_and_write_to_file",
    "create_session_with_retry",
    "logging_utils",
]
