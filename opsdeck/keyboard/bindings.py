"""Key binding table for dashboard views.

Bindings and handlers are keyed by the literal key string. A binding may
exist without a handler; such keys fall through to the plugin's action
callback and then to the built-in defaults. Registering a key is what makes
the dispatcher own it: unregistered keys always pass through.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Final

from opsdeck.constants.values import (
    KEY_BACK,
    KEY_FILTER,
    KEY_HELP,
    KEY_LOAD_MORE,
    KEY_REFRESH,
    STANDARD_KEYS,
)

KeyHandler = Callable[[], None]

DEFAULT_BINDINGS: Final[dict[str, str]] = {
    KEY_REFRESH: "Refresh",
    KEY_BACK: "Back",
    KEY_HELP: "Help",
    KEY_FILTER: "Filter",
}

LOAD_MORE_DESCRIPTION: Final = "Load more"


@dataclass(frozen=True)
class KeyBinding:
    """A key and the description shown for it in the help panel."""

    key: str
    description: str


class KeyBindingTable:
    """Registered keys, their descriptions and optional direct handlers."""

    def __init__(self) -> None:
        self._descriptions: dict[str, str] = dict(DEFAULT_BINDINGS)
        self._handlers: dict[str, KeyHandler] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._descriptions

    def __iter__(self) -> Iterator[KeyBinding]:
        return iter(self.bindings())

    def __len__(self) -> int:
        return len(self._descriptions)

    def add(self, key: str, description: str, handler: KeyHandler | None = None) -> None:
        """Register ``key``; a handler, when given, is invoked directly."""
        self._descriptions[key] = description
        if handler is not None:
            self._handlers[key] = handler

    def add_load_more(self) -> None:
        self._descriptions[KEY_LOAD_MORE] = LOAD_MORE_DESCRIPTION

    def remove(self, key: str) -> None:
        """Unregister ``key`` and its handler; unknown keys are ignored."""
        self._descriptions.pop(key, None)
        self._handlers.pop(key, None)

    def is_registered(self, key: str) -> bool:
        return key in self._descriptions

    def handler_for(self, key: str) -> KeyHandler | None:
        return self._handlers.get(key)

    def description(self, key: str) -> str | None:
        return self._descriptions.get(key)

    def descriptions(self) -> dict[str, str]:
        return dict(self._descriptions)

    def bindings(self) -> list[KeyBinding]:
        return [KeyBinding(key, text) for key, text in self._descriptions.items()]

    def clear_custom(self) -> None:
        """Drop custom bindings and every handler, keeping standard keys."""
        self._descriptions = {
            key: text
            for key, text in self._descriptions.items()
            if key in STANDARD_KEYS
        }
        self._handlers = {}


__all__ = [
    "DEFAULT_BINDINGS",
    "KeyBinding",
    "KeyBindingTable",
    "KeyHandler",
    "LOAD_MORE_DESCRIPTION",
]
