"""File table widget with visual-range highlighting."""

from __future__ import annotations

from rich.text import Text
from textual.coordinate import Coordinate
from textual.widgets import DataTable

from duview.core.selection import HEADER_ROWS
from duview.utils import FILE_TABLE_HEADERS
from duview_tui.constants import TABLE_TITLE, VISUAL_ROW_STYLE


class FileTable(DataTable):
    """Shows the active directory's files, one row per file.

    Row numbers used by ``paint()`` and ``select_row()`` are selection
    rows, where the header counts as row 0.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(cursor_type="row", zebra_stripes=False, **kwargs)
        self.border_title = TABLE_TITLE
        self._file_rows: list[list[str]] = []
        self._painted_rows: set[int] = set()

    @property
    def last_row(self) -> int:
        """Last selectable row (header counted), at least the first file row."""
        return max(HEADER_ROWS, len(self._file_rows) - 1 + HEADER_ROWS)

    def show(self, rows: list[list[str]]) -> None:
        if not self.columns:
            self.add_columns(*FILE_TABLE_HEADERS)
        self.clear()
        self._file_rows = [list(r) for r in rows]
        self._painted_rows.clear()
        for row in self._file_rows:
            self.add_row(*row)

    def select_row(self, row: int) -> None:
        if self._file_rows:
            self.move_cursor(row=row - HEADER_ROWS)

    def paint(self, span: tuple[int, int] | None) -> None:
        """Style the rows of an inclusive visual range; None clears it."""
        wanted: set[int] = set()
        if span is not None:
            lo, hi = span
            wanted = {r - HEADER_ROWS for r in range(lo, hi + 1) if 0 <= r - HEADER_ROWS < len(self._file_rows)}
        for idx in wanted ^ self._painted_rows:
            style = VISUAL_ROW_STYLE if idx in wanted else ""
            for col, value in enumerate(self._file_rows[idx]):
                self.update_cell_at(Coordinate(idx, col), Text(value, style=style))
        self._painted_rows = wanted
