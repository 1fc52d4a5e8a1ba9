"""Default values for dashboard settings."""

from typing import Final

# ============================================================================
# Refresh defaults
# ============================================================================

PAGE_SIZE_DEFAULT: Final = 500
REFRESH_INTERVAL_DEFAULT: Final = 10  # seconds
AUTO_REFRESH_DEFAULT: Final = False
FETCH_TIMEOUT_DEFAULT: Final = None

# ============================================================================
# Panel defaults
# ============================================================================

MAX_LOG_LINES_DEFAULT: Final = 200
HELP_ROWS_PER_COLUMN_DEFAULT: Final = 4

__all__ = [
    "AUTO_REFRESH_DEFAULT",
    "FETCH_TIMEOUT_DEFAULT",
    "HELP_ROWS_PER_COLUMN_DEFAULT",
    "MAX_LOG_LINES_DEFAULT",
    "PAGE_SIZE_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
]
