"""Widgets for the duview terminal frontend."""

from duview_tui.widgets.dir_tree import DirectoryTree
from duview_tui.widgets.file_table import FileTable

__all__ = [
    "DirectoryTree",
    "FileTable",
]
