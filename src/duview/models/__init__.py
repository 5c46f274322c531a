"""duview data models."""

from duview.models.tree import DirectoryNode, FileEntry
from duview.models.delete_result import DeleteResult

__all__ = [
    "DeleteResult",
    "DirectoryNode",
    "FileEntry",
]
