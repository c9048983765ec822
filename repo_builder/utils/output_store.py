"""
Thread-safe store for captured command output.

One OutputStore is shared by every job of a build run. Jobs record the
output of the external tools they invoke, and reporting reads the
collected output once the run finishes.
"""

import logging
import threading
from typing import Dict, Iterator, Optional


class OutputStore:
    """
    Mapping of operation key to captured output text.

    All access goes through a single lock, held only for one insertion or
    one read. Entries are never removed during a run.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._output: Dict[str, str] = {}

    def record(self, key: str, output: str) -> None:
        """
        Record output under a key.

        Args:
            key: Operation identity (e.g. "sign-release-file-<path>")
            output: Captured output text
        """
        with self._lock:
            replaced = key in self._output
            self._output[key] = output

        if replaced:
            logging.debug("Replaced recorded output for %s", key)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get the output recorded under a key."""
        with self._lock:
            return self._output.get(key, default)

    def snapshot(self) -> Dict[str, str]:
        """Copy of all recorded output."""
        with self._lock:
            return dict(self._output)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._output

    def __len__(self) -> int:
        with self._lock:
            return len(self._output)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())


__all__ = ["OutputStore"]
