"""All enum definitions for the dashboard runtime.

This module consolidates all enumerations used throughout the package.
"""

from enum import Enum, IntEnum, auto

# =============================================================================
# Refresh Enums
# =============================================================================

class RefreshOutcome(Enum):
    """Result of a refresh() or load_more() call."""

    COMMITTED = "committed"
    BUSY = "busy"
    FAILED = "failed"
    EXHAUSTED = "exhausted"
    NO_SOURCE = "no_source"


class FetchKind(Enum):
    """Which fetch path produced a commit."""

    REFRESH = "refresh"
    LOAD_MORE = "load_more"
    SET_DATA = "set_data"
    APPEND = "append"
    FILTER = "filter"


# =============================================================================
# Error Enums
# =============================================================================

class ErrorLevel(IntEnum):
    """Severity levels, ordered from least to most severe."""

    INFO = 0
    WARNING = 1
    ERROR = 2
    FATAL = 3


# =============================================================================
# Keyboard Enums
# =============================================================================

class KeyKind(Enum):
    """Kinds of key events the dispatcher distinguishes."""

    ESCAPE = auto()
    PAGE_DOWN = auto()
    CHARACTER = auto()
    OTHER = auto()


class DispatchStrategy(Enum):
    """Named resolution strategies for registered character keys."""

    DIRECT_HANDLER = "direct_handler"
    ACTION_CALLBACK = "action_callback"
    BUILTIN_DEFAULT = "builtin_default"


# =============================================================================
# Action Enums
# =============================================================================

class Action(str, Enum):
    """Action names sent to the plugin's action delegate."""

    KEYPRESS = "keypress"
    BACK = "back"
    NAVIGATE_BACK = "navigate_back"
    ROW_SELECTED = "rowSelected"


__all__ = [
    "Action",
    "DispatchStrategy",
    "ErrorLevel",
    "FetchKind",
    "KeyKind",
    "RefreshOutcome",
]
