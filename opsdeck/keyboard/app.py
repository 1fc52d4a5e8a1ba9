"""App-level keyboard bindings.

This module contains Textual Binding objects for app-level bindings that
work from any screen. Dashboard views own their keys through the binding
table; anything they forward reaches these.
"""

from textual.binding import Binding

# ============================================================================
# Textual Binding objects for app-level bindings
# ============================================================================

APP_BINDINGS: list[Binding] = [
    Binding("q", "quit", "Quit"),
    Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
]

# ============================================================================
# Virtual table cursor bindings
# ============================================================================

TABLE_BINDINGS: list[Binding] = [
    Binding("up", "cursor_up", "Up", show=False),
    Binding("down", "cursor_down", "Down", show=False),
    Binding("home", "cursor_home", "First", show=False),
    Binding("end", "cursor_end", "Last", show=False),
    Binding("pageup", "page_up", "Page Up", show=False),
    Binding("enter", "select_cursor", "Select", show=False),
]

__all__ = [
    "APP_BINDINGS",
    "TABLE_BINDINGS",
]
