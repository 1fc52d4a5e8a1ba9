"""Constants module for the OpsDeck dashboard runtime.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (titles, key names, markup styles)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings
"""

from opsdeck.constants.defaults import (
    HELP_ROWS_PER_COLUMN_DEFAULT,
    MAX_LOG_LINES_DEFAULT,
    PAGE_SIZE_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from opsdeck.constants.enums import (
    Action,
    DispatchStrategy,
    ErrorLevel,
    FetchKind,
    KeyKind,
    RefreshOutcome,
)
from opsdeck.constants.limits import (
    REFRESH_INTERVAL_MIN,
    SIGNATURE_COLUMNS,
)
from opsdeck.constants.values import (
    APP_TITLE,
    HELP_TITLE,
    HELP_TITLE_EXPANDED,
    STANDARD_KEYS,
)

__all__ = [
    # Application
    "APP_TITLE",
    # Defaults
    "HELP_ROWS_PER_COLUMN_DEFAULT",
    "HELP_TITLE",
    "HELP_TITLE_EXPANDED",
    "MAX_LOG_LINES_DEFAULT",
    "PAGE_SIZE_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    # Limits
    "REFRESH_INTERVAL_MIN",
    "SIGNATURE_COLUMNS",
    "STANDARD_KEYS",
    # Enums
    "Action",
    "DispatchStrategy",
    "ErrorLevel",
    "FetchKind",
    "KeyKind",
    "RefreshOutcome",
]
