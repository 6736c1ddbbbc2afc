"""
Filesystem lookups used by batch discovery.

Discovery never calls os directly; it goes through a path-status lookup and a
directory-listing lookup so that tests (and alternative backends) can hand in
their own. The defaults below are the real thing.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Callable, List

# user-or-group execute
EXECUTABLE_MASK = 0o110


@dataclass(frozen=True)
class FileEntry:
    name: str
    mode: int
    is_dir: bool

    @property
    def is_executable(self) -> bool:
        return bool(self.mode & EXECUTABLE_MASK)


StatFn = Callable[[str], FileEntry]
ReadDirFn = Callable[[str], List[FileEntry]]


def _entry_from_stat(name: str, st: os.stat_result) -> FileEntry:
    return FileEntry(name=name, mode=stat.S_IMODE(st.st_mode), is_dir=stat.S_ISDIR(st.st_mode))


def stat_path(path: str) -> FileEntry:
    """Status of ``path`` following symlinks. OSError propagates unchanged."""
    st = os.stat(path)
    return _entry_from_stat(os.path.basename(os.path.normpath(path)), st)


def read_dir(path: str) -> List[FileEntry]:
    """List ``path`` sorted by name.

    Entries are not followed: a symlink is reported with its own mode and is
    never treated as a directory.
    """
    entries: List[FileEntry] = []
    with os.scandir(path) as it:
        for de in it:
            st = de.stat(follow_symlinks=False)
            entries.append(_entry_from_stat(de.name, st))
    entries.sort(key=lambda e: e.name)
    return entries
