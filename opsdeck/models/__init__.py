"""Data models for OpsDeck."""

from opsdeck.models.settings import (
    ConfigError,
    ConfigLoadError,
    DashboardSettings,
    TableViewConfig,
)
from opsdeck.models.settings_loader import load_settings

__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "DashboardSettings",
    "TableViewConfig",
    "load_settings",
]
