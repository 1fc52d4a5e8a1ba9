"""Centralized error surfacing for dashboard views.

Errors are written to the message panel with a level tag, mirrored to
stdlib logging, and - for ERROR and above - handed to an optional notifier
(a Textual view wires this to ``App.notify``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rich.markup import escape

from opsdeck.constants.enums import ErrorLevel
from opsdeck.core.message_log import MessageLog

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str, ErrorLevel], None]

_LEVEL_TAGS: dict[ErrorLevel, str] = {
    ErrorLevel.INFO: "[blue]INFO[/]",
    ErrorLevel.WARNING: "[yellow]WARN[/]",
    ErrorLevel.ERROR: "[red]ERROR[/]",
    ErrorLevel.FATAL: "[bold red]FATAL[/]",
}

_LOGGING_LEVELS: dict[ErrorLevel, int] = {
    ErrorLevel.INFO: logging.INFO,
    ErrorLevel.WARNING: logging.WARNING,
    ErrorLevel.ERROR: logging.ERROR,
    ErrorLevel.FATAL: logging.CRITICAL,
}


def level_to_string(level: ErrorLevel) -> str:
    """Return the short label for ``level``."""
    return {
        ErrorLevel.INFO: "INFO",
        ErrorLevel.WARNING: "WARN",
        ErrorLevel.ERROR: "ERROR",
        ErrorLevel.FATAL: "FATAL",
    }.get(level, "UNKNOWN")


class ErrorHandler:
    """Routes errors to the message panel, logging and a notifier."""

    def __init__(
        self,
        messages: MessageLog,
        notifier: Notifier | None = None,
    ) -> None:
        self._messages = messages
        self.notifier = notifier

    def handle_error(
        self,
        error: BaseException | str | None,
        level: ErrorLevel = ErrorLevel.ERROR,
        title: str = "",
    ) -> None:
        """Surface ``error`` according to its severity.

        Args:
            error: The error (or message). None is ignored.
            level: Severity of the error.
            title: Title for the notification; defaults to "Error".
        """
        if error is None:
            return

        text = str(error)
        self._messages.log(f"{_LEVEL_TAGS[level]} {escape(text)}")
        logger.log(_LOGGING_LEVELS[level], "[%s] %s", level_to_string(level), text)

        if level >= ErrorLevel.ERROR and self.notifier is not None:
            self.notifier(title or "Error", text, level)

    def handle_error_with_callback(
        self,
        error: BaseException | str | None,
        level: ErrorLevel,
        title: str,
        callback: Callable[[], None] | None,
    ) -> None:
        """Handle ``error`` then run ``callback`` unless the error is fatal.

        With no error the callback runs immediately.
        """
        if error is None:
            if callback is not None:
                callback()
            return

        self.handle_error(error, level, title)
        if level < ErrorLevel.FATAL and callback is not None:
            callback()


__all__ = ["ErrorHandler", "Notifier", "level_to_string"]
