"""Dashboard settings models."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from opsdeck.constants.defaults import (
    AUTO_REFRESH_DEFAULT,
    FETCH_TIMEOUT_DEFAULT,
    HELP_ROWS_PER_COLUMN_DEFAULT,
    MAX_LOG_LINES_DEFAULT,
    PAGE_SIZE_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from opsdeck.constants.limits import (
    HELP_ROWS_PER_COLUMN_MIN,
    MAX_LOG_LINES_MIN,
    PAGE_SIZE_MIN,
    REFRESH_INTERVAL_MIN,
)


class DashboardSettings(BaseModel):
    """Runtime settings for a dashboard view with validation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Pagination
    page_size: int = Field(default=PAGE_SIZE_DEFAULT, ge=PAGE_SIZE_MIN)

    # Refresh
    auto_refresh: bool = AUTO_REFRESH_DEFAULT
    refresh_interval: float = Field(default=REFRESH_INTERVAL_DEFAULT, ge=REFRESH_INTERVAL_MIN)  # seconds
    fetch_timeout: float | None = Field(default=FETCH_TIMEOUT_DEFAULT, gt=0)  # None waits forever

    # Selection
    selection_key: str | None = None

    # Panels
    max_log_lines: int = Field(default=MAX_LOG_LINES_DEFAULT, ge=MAX_LOG_LINES_MIN)
    help_rows_per_column: int = Field(
        default=HELP_ROWS_PER_COLUMN_DEFAULT, ge=HELP_ROWS_PER_COLUMN_MIN
    )


class TableViewConfig(BaseModel):
    """Declarative description of a standard table view."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    title: str
    headers: list[str] = Field(default_factory=list)
    refresh: Callable[[], Sequence[Sequence[str]]] | None = None
    key_descriptions: dict[str, str] = Field(default_factory=dict)
    on_row_selected: Callable[[int], None] | None = None
    initial_data: list[list[str]] = Field(default_factory=list)
    auto_refresh: bool = False
    refresh_seconds: float = Field(default=REFRESH_INTERVAL_DEFAULT, ge=REFRESH_INTERVAL_MIN)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "DashboardSettings",
    "TableViewConfig",
]
