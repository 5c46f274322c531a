"""Busy screen shown while the initial scan runs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Static

from duview.core.scan_task import ScanOutcome, ScanTask, spinner_frame
from duview_tui.constants import SCAN_TITLE

if TYPE_CHECKING:
    from duview_tui.app import DuviewApp

log = logging.getLogger(__name__)


class ScanningScreen(Screen[None]):
    """Runs the scan on a worker thread and animates a spinner meanwhile.

    The spinner timer and the scan task are independent; the timer is
    stopped as soon as the task's outcome reaches the event loop.
    """

    CSS = """
    ScanningScreen {
        align: center middle;
    }
    #scan-box {
        width: auto;
        min-width: 30;
        height: auto;
        border: round $accent;
        padding: 1 2;
        text-align: center;
    }
    """

    app: DuviewApp

    def __init__(self, path: str, recency_minutes: int, interval: float) -> None:
        super().__init__()
        self._scan_path = path
        self._recency_minutes = recency_minutes
        self._spinner_interval = interval
        self._spinner_tick = 0
        self._spinner_timer: Timer | None = None
        self.scan_task: ScanTask | None = None
        self._scan_app: DuviewApp | None = None

    def compose(self) -> ComposeResult:
        box = Static(self._text("Please wait..."), id="scan-box", markup=False)
        box.border_title = SCAN_TITLE
        yield box

    def on_mount(self) -> None:
        self._scan_app = self.app
        self._spinner_timer = self.set_interval(self._spinner_interval, self._advance)
        self.scan_task = ScanTask(
            self._scan_path,
            self._recency_minutes,
            scanner=self.app.scanner,
            on_done=self._deliver,
        )
        self.scan_task.start()

    def _text(self, status: str) -> str:
        return f"Scanning folder:\n{self._scan_path}\n{status}"

    def _advance(self) -> None:
        self._spinner_tick += 1
        self.query_one("#scan-box", Static).update(self._text(spinner_frame(self._spinner_tick)))

    def _deliver(self, outcome: ScanOutcome) -> None:
        """Hand the outcome to the event loop; runs on the scan thread."""
        host = self._scan_app
        if host is None or not host.is_running:
            log.debug("App exited before the scan of %s finished", self._scan_path)
            return
        try:
            host.call_from_thread(self._finished, host, outcome)
        except RuntimeError as e:
            log.debug("Dropping scan outcome for %s: %s", self._scan_path, e)

    def _finished(self, host: DuviewApp, outcome: ScanOutcome) -> None:
        if self._spinner_timer is not None:
            self._spinner_timer.stop()
            self._spinner_timer = None
        host.scan_finished(outcome)

    def on_unmount(self) -> None:
        # Leaving before the outcome arrived (quit) stops the walk.
        if self.scan_task is not None:
            self.scan_task.cancel()
