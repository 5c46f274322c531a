"""Directory scanner and size aggregator."""

from __future__ import annotations

import logging
import os
import threading
import time

from duview.models.tree import DirectoryNode, FileEntry

log = logging.getLogger(__name__)


class ScanError(Exception):
    """Raised when the scan root cannot be read."""


class ScanCancelled(ScanError):
    """Raised when a scan is cancelled before it finished."""


def scan(
    path: str,
    recency_minutes: int = 0,
    *,
    now: float | None = None,
    cancel: threading.Event | None = None,
) -> DirectoryNode:
    """Scan *path* and build a fully aggregated directory tree.

    Subdirectories are walked depth-first without following symlinks.
    An unreadable subdirectory is left out of the tree; only a root that
    cannot be stat'ed aborts the scan.

    Args:
        path: Directory to scan.
        recency_minutes: If positive, keep only files modified strictly
            less than this many minutes before *now*.
        now: Reference timestamp for the recency filter (default: current time).
        cancel: Optional event; once set the walk stops with ``ScanCancelled``.

    Raises:
        ScanError: If *path* cannot be stat'ed.
    """
    try:
        st = os.stat(path)
    except OSError as e:
        raise ScanError(f"{path}: {e.strerror or e}") from e

    max_age = recency_minutes * 60 if recency_minutes > 0 else None
    if now is None:
        now = time.time()

    name = os.path.basename(os.path.normpath(path)) or path
    try:
        return _walk(path, name, now, max_age, cancel)
    except OSError as e:
        log.debug("Cannot list scan root %s (mode %o): %s", path, st.st_mode, e)
        return DirectoryNode(name=name, path=path)


def _walk(
    path: str,
    name: str,
    now: float,
    max_age: float | None,
    cancel: threading.Event | None,
) -> DirectoryNode:
    """Walk the tree with an explicit stack, then aggregate bottom-up.

    Directories are listed in pre-order; each listed directory is
    recorded with its parent so the reversed record visits every child
    before its parent. Only a listing failure of the root propagates.
    """
    root = DirectoryNode(name=name, path=path)
    listed: list[tuple[DirectoryNode, DirectoryNode | None]] = []
    stack: list[tuple[DirectoryNode, DirectoryNode | None]] = [(root, None)]

    while stack:
        if cancel is not None and cancel.is_set():
            raise ScanCancelled(f"Scan of {path} cancelled")

        node, parent = stack.pop()
        try:
            with os.scandir(node.path) as it:
                entries = list(it)
        except OSError:
            if parent is None:
                raise
            log.debug("Skipping unreadable directory: %s", node.path)
            continue
        listed.append((node, parent))

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                log.debug("Cannot access: %s", entry.path)
                continue

            if is_dir:
                stack.append((DirectoryNode(name=entry.name, path=entry.path), node))
                continue

            try:
                st = entry.stat(follow_symlinks=False)
            except OSError:
                log.debug("Cannot stat: %s", entry.path)
                continue
            if max_age is not None and now - st.st_mtime >= max_age:
                continue
            node.files.append(FileEntry.from_stat(entry.name, st))
            node.size += st.st_size

    for node, parent in reversed(listed):
        node.sort()
        if parent is not None:
            parent.subdirs.append(node)
            parent.size += node.size

    return root
