"""Single-row and visual (range) selection over the file table."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from duview.models.tree import FileEntry

# Row 0 of the file table is the column header.
HEADER_ROWS = 1


class Mode(Enum):
    NORMAL = "normal"
    VISUAL = "visual"


class SelectionState:
    """Cursor, anchor and mode for the file table.

    One instance is shared by every input handler of the table so the
    transitions can be exercised without any widgets. Row numbers are
    table rows, header included: the first file is row ``HEADER_ROWS``.
    """

    def __init__(self) -> None:
        self.mode = Mode.NORMAL
        self.anchor: int | None = None
        self.current = HEADER_ROWS

    def toggle_visual(self) -> Mode:
        if self.mode is Mode.NORMAL:
            self.mode = Mode.VISUAL
            self.anchor = self.current
        else:
            self.mode = Mode.NORMAL
            self.anchor = None
        return self.mode

    def move_down(self, last_row: int) -> bool:
        """Move the cursor one row down, stopping at *last_row*."""
        if self.current >= last_row:
            return False
        self.current += 1
        return True

    def move_up(self) -> bool:
        """Move the cursor one row up; the header row is never reached."""
        if self.current <= HEADER_ROWS:
            return False
        self.current -= 1
        return True

    def sync(self, row: int) -> None:
        """Adopt a cursor position chosen by the table widget."""
        self.current = max(HEADER_ROWS, row)

    def highlighted(self) -> tuple[int, int] | None:
        """Inclusive row range to highlight, or None outside visual mode."""
        if self.mode is not Mode.VISUAL or self.anchor is None:
            return None
        return min(self.anchor, self.current), max(self.anchor, self.current)

    def target_rows(self) -> list[int]:
        span = self.highlighted()
        if span is None:
            rows = [self.current]
        else:
            rows = list(range(span[0], span[1] + 1))
        return [r for r in rows if r >= HEADER_ROWS]

    def target_names(self, files: Sequence[FileEntry]) -> list[str]:
        """File names under the target rows; rows with no file are dropped."""
        names = []
        for row in self.target_rows():
            idx = row - HEADER_ROWS
            if idx < len(files):
                names.append(files[idx].name)
        return names

    def reset(self, rows: int | None = None) -> None:
        """Return to normal mode with no anchor.

        With *rows* (the number of file rows now displayed) the cursor is
        kept but clamped into the table; otherwise it goes back to the
        first file row.
        """
        self.mode = Mode.NORMAL
        self.anchor = None
        if rows is None:
            self.current = HEADER_ROWS
        else:
            self.current = max(HEADER_ROWS, min(self.current, rows - 1 + HEADER_ROWS))

    def __repr__(self) -> str:
        return f"SelectionState(mode={self.mode.value}, anchor={self.anchor}, current={self.current})"
