"""Filter prompt - modal input for the table filter query.

Standard Reactive Pattern:
- Dialogs are modal screens, inherit from ModalScreen
- No reactive state needed (they manage their own lifecycle)

CSS Classes: widget-filter-prompt
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Static


class FilterPrompt(ModalScreen[str | None]):
    """Ask for a filter query, pre-filled with the active one.

    Dismisses with the trimmed query on submit (an empty string clears the
    filter) or with None on cancel.
    """

    DEFAULT_CSS = """
    FilterPrompt {
        align: center middle;
    }
    FilterPrompt > .dialog-container {
        width: 60;
        height: auto;
        border: round $accent;
        padding: 0 1;
        background: $surface;
    }
    FilterPrompt .dialog-hint {
        color: $text-muted;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(self, query: str = "") -> None:
        super().__init__(classes="widget-filter-prompt")
        self._query = query

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container") as container:
            container.border_title = "Filter"
            yield Input(
                value=self._query,
                placeholder="Text to match in any column",
                id="filter-input",
            )
            yield Static("Enter to apply, empty to clear, Esc to cancel", classes="dialog-hint")

    def on_mount(self) -> None:
        self.query_one("#filter-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value.strip())

    def action_cancel(self) -> None:
        self.dismiss(None)


__all__ = ["FilterPrompt"]
