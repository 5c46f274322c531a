"""Scanned directory tree dataclasses."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class FileEntry:
    """Metadata snapshot of one file, taken at scan time.

    Entries are matched by ``name`` inside their parent directory; the
    remaining fields may be stale once the filesystem changes.
    """

    name: str
    size: int
    mode: str
    nlink: int
    uid: int
    gid: int
    mtime: float
    is_dir: bool = False

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> FileEntry:
        return cls(
            name=name,
            size=st.st_size,
            mode=stat.filemode(st.st_mode),
            nlink=st.st_nlink,
            uid=st.st_uid,
            gid=st.st_gid,
            mtime=st.st_mtime,
            is_dir=stat.S_ISDIR(st.st_mode),
        )


@dataclass(slots=True)
class DirectoryNode:
    """One scanned directory with its aggregated size.

    ``size`` covers the direct files plus every subdirectory's own
    aggregate. Both ``subdirs`` and ``files`` are kept largest first.
    """

    name: str
    path: str
    size: int = 0
    subdirs: list[DirectoryNode] = field(default_factory=list)
    files: list[FileEntry] = field(default_factory=list)

    def sort(self) -> None:
        """Re-sort subdirectories and files by size, largest first."""
        self.subdirs.sort(key=lambda d: d.size, reverse=True)
        self.files.sort(key=lambda f: f.size, reverse=True)

    def file_names(self) -> list[str]:
        return [f.name for f in self.files]
