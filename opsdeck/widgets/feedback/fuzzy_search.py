"""Fuzzy quick-pick modal.

Typing narrows the list with substring-or-subsequence matching; Enter
dismisses with ``(original_index, item)`` and Esc with None.

CSS Classes: widget-fuzzy-search
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, OptionList
from textual.widgets.option_list import Option

from opsdeck.core.fuzzy import FuzzyPicker, FuzzySearchItem

FuzzySearchResult = tuple[int, FuzzySearchItem]


class FuzzySearchModal(ModalScreen[FuzzySearchResult | None]):
    """Quick-pick search over a list of FuzzySearchItem."""

    DEFAULT_CSS = """
    FuzzySearchModal {
        align: center middle;
    }
    FuzzySearchModal > .dialog-container {
        width: 70;
        height: 20;
        border: round $accent;
        padding: 0 1;
        background: $surface;
    }
    FuzzySearchModal OptionList {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
        Binding("down", "move(1)", "Down", show=False),
        Binding("up", "move(-1)", "Up", show=False),
    ]

    def __init__(self, title: str, items: Sequence[FuzzySearchItem]) -> None:
        super().__init__(classes="widget-fuzzy-search")
        self._title = title
        self.picker = FuzzyPicker(items)

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container") as container:
            container.border_title = self._title
            yield Input(placeholder="Type to search...", id="fuzzy-input")
            yield OptionList(id="fuzzy-options")

    def on_mount(self) -> None:
        self._render_options()
        self.query_one("#fuzzy-input", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.picker.update(event.value)
        self._render_options()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(self.picker.resolve())

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(self.picker.resolve(event.option_index))

    def action_move(self, delta: int) -> None:
        self.picker.move(delta)
        self._highlight()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _render_options(self) -> None:
        options = self.query_one("#fuzzy-options", OptionList)
        options.clear_options()
        options.add_options(
            Option(self._label(item)) for item in self.picker.matched_items()
        )
        self._highlight()

    def _highlight(self) -> None:
        options = self.query_one("#fuzzy-options", OptionList)
        options.highlighted = self.picker.highlighted if self.picker.highlighted >= 0 else None

    @staticmethod
    def _label(item: FuzzySearchItem) -> str:
        if item.description:
            return f"{escape(item.name)}  [dim]{escape(item.description)}[/]"
        return escape(item.name)


__all__ = ["FuzzySearchModal", "FuzzySearchResult"]
