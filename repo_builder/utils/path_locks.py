"""
Per-directory locks for repository trees.

All architecture jobs of a component share the Release manifest above it,
so work on one release directory has to be serialized while unrelated
directories are still processed in parallel.
"""

import os
import threading
from pathlib import Path
from typing import Dict, Union


class PathLocks:
    """
    Hands out one reentrant lock per directory.

    The registry lock is held only while looking up or creating an entry;
    the returned lock is what callers hold while working on the directory.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._locks: Dict[Path, threading.RLock] = {}

    def lock_for(self, path: Union[str, os.PathLike]) -> threading.RLock:
        """
        Get the lock of a directory.

        Args:
            path: Directory; equal paths after normalization share a lock

        Returns:
            The directory's lock
        """
        key = Path(os.path.normpath(os.path.abspath(path)))
        with self._lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    def __len__(self) -> int:
        with self._lock:
            return len(self._locks)


# Shared by every job in the process
RELEASE_DIR_LOCKS = PathLocks()


__all__ = ["PathLocks", "RELEASE_DIR_LOCKS"]
