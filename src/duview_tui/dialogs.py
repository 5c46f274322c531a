"""Modal screens: delete confirmation, quit confirmation and help."""

from __future__ import annotations

from textual import events, on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from duview_tui.constants import HELP_TEXT

_DIALOG_CSS = """
{name} {{
    align: center middle;
    background: rgba(0,0,0,0.45);
}}
{name} > Vertical {{
    width: auto;
    min-width: 40;
    max-width: 90%;
    height: auto;
    max-height: 90%;
    border: round $accent;
    background: $surface;
    padding: 1 2;
}}
{name} .prompt {{
    width: auto;
    margin-bottom: 1;
}}
{name} Horizontal {{
    width: auto;
    height: auto;
    align-horizontal: center;
}}
{name} Button {{
    margin: 0 1;
}}
"""


class ConfirmScreen(ModalScreen[bool]):
    """Yes/No question; dismisses with True for "Yes"."""

    CSS = _DIALOG_CSS.format(name="ConfirmScreen")

    BINDINGS = [
        Binding("y", "answer(True)", "Yes", show=False),
        Binding("n", "answer(False)", "No", show=False),
        Binding("escape", "answer(False)", "No", show=False),
    ]

    def __init__(self, prompt: str, title: str = "Confirm") -> None:
        super().__init__()
        self._prompt_text = prompt
        self._dialog_title = title

    def compose(self) -> ComposeResult:
        with Vertical() as box:
            box.border_title = self._dialog_title
            yield Static(self._prompt_text, classes="prompt", markup=False)
            with Horizontal():
                yield Button("Yes", id="yes", variant="error")
                yield Button("No", id="no", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#no", Button).focus()

    @on(Button.Pressed)
    def _on_button(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "yes")

    def action_answer(self, answer: bool) -> None:
        self.dismiss(answer)


class QuitScreen(ConfirmScreen):
    """Quit confirmation; "Yes" has focus so Enter quits."""

    CSS = _DIALOG_CSS.format(name="QuitScreen")

    def __init__(self) -> None:
        super().__init__("Do you really want to quit?", title="Quit")

    def on_mount(self) -> None:
        self.query_one("#yes", Button).focus()


class HelpScreen(ModalScreen[None]):
    """Key binding overview; any key closes it."""

    CSS = """
    HelpScreen {
        align: center middle;
        background: rgba(0,0,0,0.45);
    }
    #help-box {
        width: auto;
        height: auto;
        border: round $accent;
        background: $surface;
        padding: 1 2;
    }
    """

    def compose(self) -> ComposeResult:
        box = Static(HELP_TEXT, id="help-box", markup=False)
        box.border_title = "Help"
        yield box

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.dismiss()
