"""Exception taxonomy for the dashboard runtime.

None of these are fatal to the process. Fetch failures are caught by the
refresh engine and surfaced on the message panel. Busy and configuration
conditions are soft: the engine logs them at INFO, keeps the latest one on
``RefreshEngine.last_rejection`` and returns an outcome instead of raising.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base exception for dashboard runtime errors."""


class FetchError(DashboardError):
    """Raised when a refresh source or paginated loader fails.

    Attributes:
        operation: The fetch path that failed ("refresh" or "load_more").
    """

    def __init__(self, message: str, *, operation: str = "refresh") -> None:
        super().__init__(message)
        self.operation = operation


class FetchTimeoutError(FetchError):
    """Raised when a fetch does not return within the configured timeout."""


class ConcurrencyBusyError(DashboardError):
    """An operation was attempted while another fetch was in flight."""


class ConfigurationError(DashboardError):
    """An operation was attempted in a state that does not support it."""


class UnhandledAction(DashboardError):
    """Raised by an action delegate to decline an action.

    For "keypress" actions this lets the dispatcher fall through to the
    built-in default for the key.
    """


__all__ = [
    "ConcurrencyBusyError",
    "ConfigurationError",
    "DashboardError",
    "FetchError",
    "FetchTimeoutError",
    "UnhandledAction",
]
