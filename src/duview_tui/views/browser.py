"""Main split view: directory tree on the left, file table on the right."""

from __future__ import annotations

from typing import Callable

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import DataTable, Tree

from duview.core.deletion import DeletionCoordinator
from duview.core.navigation import NavigationController
from duview.core.selection import HEADER_ROWS, SelectionState
from duview.models.delete_result import DeleteResult
from duview.utils import bytes_to_human
from duview_tui.dialogs import ConfirmScreen, HelpScreen, QuitScreen
from duview_tui.widgets import DirectoryTree, FileTable


class BrowserScreen(Screen[None]):
    """Routes key presses to navigation, selection and deletion."""

    CSS = """
    BrowserScreen > Horizontal {
        height: 1fr;
    }
    DirectoryTree {
        width: 1fr;
        border: round $panel;
    }
    FileTable {
        width: 2fr;
        border: round $panel;
    }
    DirectoryTree:focus, FileTable:focus {
        border: round green;
    }
    FileTable > .datatable--header {
        color: yellow;
    }
    """

    BINDINGS = [
        Binding("h", "focus_tree", "Directories"),
        Binding("l", "focus_table", "Files"),
        Binding("j", "move_down", "Down", show=False),
        Binding("k", "move_up", "Up", show=False),
        Binding("v", "toggle_visual", "Visual"),
        Binding("d", "delete", "Delete"),
        Binding("r", "refresh_dir", "Refresh"),
        Binding("q", "request_quit", "Quit"),
        Binding("question_mark", "help", "Help"),
    ]

    def __init__(
        self,
        controller: NavigationController,
        selection: SelectionState | None = None,
        *,
        confirm_deletes: bool = True,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.selection = selection or SelectionState()
        self.deletion = DeletionCoordinator(
            self._confirm,
            self.selection,
            confirm_required=confirm_deletes,
        )

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield DirectoryTree(self.controller, id="dirs")
            yield FileTable(id="files")

    @property
    def tree(self) -> DirectoryTree:
        return self.query_one(DirectoryTree)

    @property
    def table(self) -> FileTable:
        return self.query_one(FileTable)

    def on_mount(self) -> None:
        self._show_active()
        self.tree.focus()

    # -- Active directory --

    def _show_active(self) -> None:
        """Re-render the file table for the active directory."""
        self.selection.reset()
        self.table.show(self.controller.file_rows())
        self.table.select_row(self.selection.current)

    def on_tree_node_highlighted(self, event: Tree.NodeHighlighted[int]) -> None:
        handle = event.node.data
        if handle is None or handle not in self.controller or handle == self.controller.active:
            return
        self.controller.focus(handle)
        self._show_active()

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        # Arrow keys and mouse move the cursor without going through j/k.
        self.selection.sync(event.cursor_row + HEADER_ROWS)
        self.table.paint(self.selection.highlighted())

    # -- Focus --

    def action_focus_tree(self) -> None:
        if self.focused is not self.table:
            raise SkipAction()
        self.tree.focus()

    def action_focus_table(self) -> None:
        if self.focused is not self.tree:
            raise SkipAction()
        self.table.focus()

    # -- Selection --

    def action_move_down(self) -> None:
        if self.focused is not self.table:
            raise SkipAction()
        if self.selection.move_down(self.table.last_row):
            self._cursor_moved()

    def action_move_up(self) -> None:
        if self.focused is not self.table:
            raise SkipAction()
        if self.selection.move_up():
            self._cursor_moved()

    def _cursor_moved(self) -> None:
        self.table.select_row(self.selection.current)
        self.table.paint(self.selection.highlighted())

    def action_toggle_visual(self) -> None:
        if self.focused is not self.table:
            raise SkipAction()
        self.selection.toggle_visual()
        self.table.paint(self.selection.highlighted())

    # -- Deletion --

    def action_delete(self) -> None:
        if self.focused is not self.table:
            raise SkipAction()
        directory = self.controller.active_directory
        names = self.selection.target_names(directory.files)
        if not self.deletion.request_delete(directory, names, on_done=self._after_delete):
            raise SkipAction()

    def _confirm(self, prompt: str, callback: Callable[[bool], None]) -> None:
        self.app.push_screen(ConfirmScreen(prompt, title="Delete"), callback)

    def _after_delete(self, confirmed: bool, result: DeleteResult | None) -> None:
        self.table.show(self.controller.file_rows())
        self.table.select_row(self.selection.current)
        self.table.focus()
        if result is None:
            return
        if result.errors:
            self.notify(
                f"{len(result.errors)} of {len(result.requested)} file(s) could not be deleted",
                severity="warning",
            )
        else:
            self.notify(f"Deleted {len(result.removed)} file(s), freed {bytes_to_human(result.freed_bytes)}")

    # -- Refresh --

    def action_refresh_dir(self) -> None:
        node = self.tree.cursor_node
        if node is None or node.data is None:
            raise SkipAction()
        handle = node.data
        if not self.controller.refresh(handle):
            self.notify(f"Could not rescan {self.controller.directory(handle).path}", severity="warning")
            return
        self.tree.refresh_node(handle)
        if self.controller.active == handle:
            self._show_active()

    # -- App-level --

    def action_request_quit(self) -> None:
        def _answer(quit_: bool | None) -> None:
            if quit_:
                self.app.exit(return_code=0)

        self.app.push_screen(QuitScreen(), _answer)

    def action_help(self) -> None:
        self.app.push_screen(HelpScreen())
