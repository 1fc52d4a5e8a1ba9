"""Keyboard handling module.

- app: Textual app-level and table bindings (APP_BINDINGS, TABLE_BINDINGS)
- bindings: the per-view key binding table (KeyBindingTable)
- dispatcher: prioritized key dispatch (KeyDispatcher)
- help: help panel text
"""

from opsdeck.keyboard.app import APP_BINDINGS, TABLE_BINDINGS
from opsdeck.keyboard.bindings import KeyBinding, KeyBindingTable
from opsdeck.keyboard.dispatcher import KeyDispatcher, KeyEvent, key_event_from_textual

__all__ = [
    "APP_BINDINGS",
    "TABLE_BINDINGS",
    "KeyBinding",
    "KeyBindingTable",
    "KeyDispatcher",
    "KeyEvent",
    "key_event_from_textual",
]
