"""
Batch discovery: find every test executable under a batch directory.

A qualified path is ``<dir>/<name>`` built from the directory being visited,
so entries come back relative to however the batch root was spelled
(``blah`` -> ``blah/e``, ``blah/c/g``).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .errors import DirectoryExpectedError
from .filesystem import ReadDirFn, StatFn, read_dir, stat_path

logger = logging.getLogger(__name__)


class Discoverer:
    """Walks a batch root and owns the pending list of executables.

    Any non-directory entry whose mode has a user or group execute bit
    qualifies; every directory is recursed into whatever its own mode.
    Nothing else is filtered (hidden files, symlinks and sockets included).
    """

    def __init__(self, stat: Optional[StatFn] = None, read_dir_fn: Optional[ReadDirFn] = None):
        self._stat = stat or stat_path
        self._read_dir = read_dir_fn or read_dir
        self._pending: List[str] = []
        self.visited: List[str] = []

    def use_batch(self, path: str) -> List[str]:
        """Load the batch rooted at ``path`` and return the pending list.

        Errors from the status lookup propagate as-is; a root that is not a
        directory raises DirectoryExpectedError. A listing failure anywhere
        below the root also propagates and leaves the pending list empty.
        """
        self._pending = []
        self.visited = []
        fi = self._stat(path)
        if not fi.is_dir:
            raise DirectoryExpectedError(path)

        found: List[str] = []
        self._discover(path, found)
        self._pending = found
        logger.info("Batch %s loaded: %d executables in %d directories", path, len(found), len(self.visited))
        return list(found)

    def _discover(self, directory: str, found: List[str]) -> None:
        self.visited.append(directory)
        logger.debug("Scanning %s", directory)
        for fi in self._read_dir(directory):
            qn = f"{directory}/{fi.name}"
            if fi.is_dir:
                self._discover(qn, found)
            elif fi.is_executable:
                found.append(qn)

    @property
    def executables(self) -> List[str]:
        return list(self._pending)

    def next_executable(self) -> Tuple[str, bool]:
        """Dequeue the next pending executable; ``("", False)`` once drained."""
        if not self._pending:
            return "", False
        return self._pending.pop(0), True

    def __len__(self) -> int:
        return len(self._pending)
