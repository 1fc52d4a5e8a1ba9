"""MessageLog - the plugin's message panel.

A bounded list of timestamped rich-markup lines. Listeners are told about
every change so a widget can re-render; they may be invoked from worker
threads and must marshal onto the UI thread themselves.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from datetime import datetime

from opsdeck.constants.defaults import MAX_LOG_LINES_DEFAULT

logger = logging.getLogger(__name__)

MessageListener = Callable[[list[str]], None]


class MessageLog:
    """Timestamped message buffer rendered in the log panel."""

    def __init__(
        self,
        max_lines: int = MAX_LOG_LINES_DEFAULT,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._lines: deque[str] = deque(maxlen=max(1, max_lines))
        self._clock = clock
        self._lock = threading.Lock()
        self._listeners: list[MessageListener] = []

    def subscribe(self, listener: MessageListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: MessageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def lines(self) -> list[str]:
        with self._lock:
            return list(self._lines)

    @property
    def last(self) -> str | None:
        with self._lock:
            return self._lines[-1] if self._lines else None

    def text(self) -> str:
        return "\n".join(self.lines)

    def log(self, message: str) -> None:
        """Append ``message`` (rich markup) with a dim timestamp."""
        timestamp = self._clock().strftime("%H:%M:%S")
        with self._lock:
            self._lines.append(f"[dim]{timestamp}[/] {message}")
            snapshot = list(self._lines)
        logger.debug("Message panel: %s", message)
        self._notify(snapshot)

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()
        self._notify([])

    def _notify(self, snapshot: list[str]) -> None:
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = ["MessageListener", "MessageLog"]
