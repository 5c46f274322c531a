"""duview terminal application."""

from __future__ import annotations

import logging

from textual.app import App

from duview.core.navigation import NavigationController, Scanner
from duview.core.scan_task import ScanOutcome
from duview.core.scanner import ScanCancelled, ScanError, scan
from duview.settings import Settings
from duview_tui.views import BrowserScreen, ScanningScreen

log = logging.getLogger(__name__)


class DuviewApp(App[None]):
    """Scans *path* behind a busy screen, then opens the browser."""

    TITLE = "duview"

    def __init__(
        self,
        path: str,
        recency_minutes: int = 0,
        settings: Settings | None = None,
        scanner: Scanner = scan,
    ) -> None:
        super().__init__()
        self.path = path
        self.recency_minutes = recency_minutes
        self.settings = settings or Settings.instance()
        self.scanner = scanner
        self.scan_error: ScanError | None = None
        self.controller: NavigationController | None = None

    def on_mount(self) -> None:
        self.push_screen(
            ScanningScreen(self.path, self.recency_minutes, self.settings.spinner_interval())
        )

    def scan_finished(self, outcome: ScanOutcome) -> None:
        """Leave the busy screen; called on the event loop."""
        if isinstance(outcome.error, ScanCancelled):
            # Only happens once the scanning screen is gone.
            log.info("Scan of %s cancelled", self.path)
            return
        if outcome.error is not None:
            self.scan_error = outcome.error
            self.exit(return_code=1)
            return

        self.controller = NavigationController(
            outcome.tree,
            recency_minutes=self.recency_minutes,
            scanner=self.scanner,
        )
        self.switch_screen(
            BrowserScreen(self.controller, confirm_deletes=self.settings.confirm_deletes())
        )
