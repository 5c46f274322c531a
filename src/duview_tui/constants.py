"""Shared constants for the duview terminal frontend."""

from __future__ import annotations

HELP_TEXT = """\
Key Bindings:
l : Focus Files Pane
h : Focus Directories Pane
j : Move down the file list
k : Move up the file list
d : Delete the selected file(s)
v : Select multiple files / disable multiple selection
r : Refresh the selected directory disk usage
q : Quit (with confirmation)
? : Show this help dialog

Use arrow keys or j/k to navigate.
Press any key to close."""

# Style for rows inside the visual (range) selection.
VISUAL_ROW_STYLE = "black on red strike"

TREE_TITLE = "Directories"
TABLE_TITLE = "Files"
SCAN_TITLE = "Scanning"
