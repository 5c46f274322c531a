"""Screens of the duview terminal frontend."""

from duview_tui.views.browser import BrowserScreen
from duview_tui.views.scanning import ScanningScreen

__all__ = [
    "BrowserScreen",
    "ScanningScreen",
]
