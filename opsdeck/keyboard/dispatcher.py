"""KeyDispatcher - prioritized key handling for dashboard views.

Evaluation order for an incoming key event:

1. Escape: back-navigation when there is somewhere to go back to; at the
   root the event is forwarded to the outer handler.
2. Page-down: load the next page when lazy loading is configured; otherwise
   forwarded.
3. Character keys: unregistered keys are forwarded unchanged. Registered
   keys run through the resolution strategies in order - direct handler,
   action callback, built-in default - and are always consumed.
4. Anything else is forwarded.

``dispatch`` returns None for a consumed event and otherwise whatever the
outer handler returns (the event itself when there is no outer handler).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from opsdeck.constants.enums import Action, DispatchStrategy, KeyKind
from opsdeck.constants.values import KEY_FILTER, KEY_HELP, KEY_REFRESH
from opsdeck.keyboard.bindings import KeyBindingTable

if TYPE_CHECKING:
    from textual import events

    from opsdeck.core.navigation import NavigationStack

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyEvent:
    """A terminal-independent key event."""

    kind: KeyKind
    char: str = ""
    name: str = ""

    @classmethod
    def escape(cls) -> KeyEvent:
        return cls(KeyKind.ESCAPE, name="escape")

    @classmethod
    def page_down(cls) -> KeyEvent:
        return cls(KeyKind.PAGE_DOWN, name="pagedown")

    @classmethod
    def character(cls, char: str) -> KeyEvent:
        return cls(KeyKind.CHARACTER, char=char, name=char)

    @classmethod
    def other(cls, name: str) -> KeyEvent:
        return cls(KeyKind.OTHER, name=name)


def key_event_from_textual(event: events.Key) -> KeyEvent:
    """Translate a Textual key event into a KeyEvent."""
    if event.key == "escape":
        return KeyEvent.escape()
    if event.key == "pagedown":
        return KeyEvent.page_down()
    character = event.character
    if event.is_printable and character is not None and len(character) == 1:
        return KeyEvent.character(character)
    return KeyEvent.other(event.key)


OuterHandler = Callable[[KeyEvent], "KeyEvent | None"]


class DispatchHost(Protocol):
    """What the dispatcher needs from the view that owns it."""

    navigation: NavigationStack
    bindings: KeyBindingTable

    def has_lazy_loader(self) -> bool: ...

    def pop_view(self) -> str: ...

    def request_refresh(self) -> None: ...

    def request_load_more(self) -> None: ...

    def open_filter_prompt(self) -> None: ...

    def toggle_help_expanded(self) -> None: ...

    def emit_action(self, action: str, payload: Mapping[str, Any]) -> bool: ...

    def run_key_handler(self, key: str, handler: Callable[[], None]) -> None: ...


class KeyDispatcher:
    """Routes key events through the fixed-priority chain."""

    def __init__(self, host: DispatchHost, outer: OuterHandler | None = None) -> None:
        self._host = host
        self.outer = outer
        self.strategies: list[tuple[DispatchStrategy, Callable[[str], bool]]] = [
            (DispatchStrategy.DIRECT_HANDLER, self._direct_handler),
            (DispatchStrategy.ACTION_CALLBACK, self._action_callback),
            (DispatchStrategy.BUILTIN_DEFAULT, self._builtin_default),
        ]
        self.last_strategy: DispatchStrategy | None = None

    def dispatch(self, event: KeyEvent) -> KeyEvent | None:
        """Handle ``event``; None means consumed."""
        self.last_strategy = None

        if event.kind is KeyKind.ESCAPE:
            if self._navigate_back():
                return None
        elif event.kind is KeyKind.PAGE_DOWN:
            if self._host.has_lazy_loader():
                self._host.request_load_more()
                return None
        elif event.kind is KeyKind.CHARACTER:
            if event.char in self._host.bindings:
                self._resolve(event.char)
                return None
            logger.debug("Key %r not registered, forwarding", event.char)

        return self._forward(event)

    def _forward(self, event: KeyEvent) -> KeyEvent | None:
        if self.outer is not None:
            return self.outer(event)
        return event

    def _navigate_back(self) -> bool:
        navigation = self._host.navigation
        if not navigation.can_go_back():
            return False

        current = navigation.current()
        previous = navigation.previous()
        self._host.pop_view()
        self._host.emit_action(Action.BACK.value, {"from": current, "to": previous})
        self._host.emit_action(Action.NAVIGATE_BACK.value, {"current_view": previous})
        return True

    def _resolve(self, key: str) -> None:
        for name, strategy in self.strategies:
            if strategy(key):
                self.last_strategy = name
                logger.debug("Key %r handled by %s", key, name.value)
                return

    def _direct_handler(self, key: str) -> bool:
        handler = self._host.bindings.handler_for(key)
        if handler is None:
            return False
        self._host.run_key_handler(key, handler)
        return True

    def _action_callback(self, key: str) -> bool:
        return self._host.emit_action(Action.KEYPRESS.value, {"key": key})

    def _builtin_default(self, key: str) -> bool:
        if key == KEY_REFRESH:
            self._host.request_refresh()
        elif key == KEY_FILTER:
            self._host.open_filter_prompt()
        elif key == KEY_HELP:
            self._host.toggle_help_expanded()
        return True


__all__ = [
    "DispatchHost",
    "KeyDispatcher",
    "KeyEvent",
    "OuterHandler",
    "key_event_from_textual",
]
