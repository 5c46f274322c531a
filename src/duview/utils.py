"""Shared utility functions."""

from __future__ import annotations

import grp
import logging
import os
import pwd
import time
from functools import lru_cache
from pathlib import Path

from duview.models.tree import DirectoryNode, FileEntry

log = logging.getLogger(__name__)

FILE_TABLE_HEADERS = ("Permissions", "Links", "Owner", "Group", "Size", "Modified", "Name")

_UNITS = ("KB", "MB", "GB", "TB", "PB", "EB")

# ls-style timestamp, e.g. "Mar 04 17:20".
_MTIME_FORMAT = "%b %d %H:%M"


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def expand_home(path: str) -> str:
    """Replace a leading ``~`` with the current user's home directory.

    This is plain prefix substitution: ``~other`` is not looked up as
    another user's home and simply becomes ``<home>/other``.
    """
    if not path.startswith("~"):
        return path
    rest = path[1:].lstrip("/")
    home = str(Path.home())
    return os.path.join(home, rest) if rest else home


def parse_recency(raw: str | int | None) -> int:
    """Parse a recency filter in minutes; anything unparsable disables it."""
    if raw is None:
        return 0
    try:
        return int(raw)
    except (TypeError, ValueError):
        log.debug("Ignoring invalid recency value %r", raw)
        return 0


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string.

    Values under 1024 stay an integer byte count; larger values get one
    decimal and a binary unit (1536 -> "1.5 KB").
    """
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes < 1024:
        return f"{size_bytes} B"

    div, exp = 1024, 0
    n = size_bytes // 1024
    while n >= 1024 and exp < len(_UNITS) - 1:
        div *= 1024
        exp += 1
        n //= 1024
    return f"{size_bytes / div:.1f} {_UNITS[exp]}"


@lru_cache(maxsize=256)
def owner_name(uid: int) -> str:
    """Resolve a uid to a user name, falling back to the numeric id."""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


@lru_cache(maxsize=256)
def group_name(gid: int) -> str:
    """Resolve a gid to a group name, falling back to the numeric id."""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def format_mtime(mtime: float) -> str:
    return time.strftime(_MTIME_FORMAT, time.localtime(mtime))


def describe(entry: FileEntry) -> list[str]:
    """Return ``ls -l`` style columns for a file entry.

    The order matches ``FILE_TABLE_HEADERS``.
    """
    name = entry.name + "/" if entry.is_dir else entry.name
    return [
        entry.mode,
        str(entry.nlink),
        owner_name(entry.uid),
        group_name(entry.gid),
        bytes_to_human(entry.size),
        format_mtime(entry.mtime),
        name,
    ]


def node_label(node: DirectoryNode) -> str:
    """Tree label for a directory: its name and aggregate size."""
    return f"{node.name} ({bytes_to_human(node.size)})"


def remove_files(directory: str, names: list[str]) -> tuple[list[str], list[str]]:
    """Remove files by name from *directory* and return (removed, errors).

    Every name is attempted; a failure is recorded and the remaining
    removals still proceed.
    """
    removed: list[str] = []
    errors: list[str] = []

    for name in names:
        path = os.path.join(directory, name)
        try:
            os.remove(path)
            removed.append(name)
        except OSError as e:
            errors.append(f"{path}: {e.strerror or e}")

    return removed, errors


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"
