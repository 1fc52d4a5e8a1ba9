"""Limit and threshold constants for the dashboard runtime.

All limit values, thresholds, and validation ranges.
"""

from typing import Final

# ============================================================================
# Signature limits
# ============================================================================

SIGNATURE_COLUMNS: Final = 3

# ============================================================================
# Validation limits
# ============================================================================

REFRESH_INTERVAL_MIN: Final = 1
PAGE_SIZE_MIN: Final = 1
MAX_LOG_LINES_MIN: Final = 1
HELP_ROWS_PER_COLUMN_MIN: Final = 1

__all__ = [
    "HELP_ROWS_PER_COLUMN_MIN",
    "MAX_LOG_LINES_MIN",
    "PAGE_SIZE_MIN",
    "REFRESH_INTERVAL_MIN",
    "SIGNATURE_COLUMNS",
]
