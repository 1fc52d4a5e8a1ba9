"""Build a standard table view from a TableViewConfig."""

from __future__ import annotations

import logging
from typing import Any

from opsdeck.core.dashboard import DashboardCore
from opsdeck.models.settings import DashboardSettings, TableViewConfig

logger = logging.getLogger(__name__)


def create_table_view(
    config: TableViewConfig,
    settings: DashboardSettings | None = None,
    **core_kwargs: Any,
) -> DashboardCore:
    """Create a DashboardCore configured from ``config``.

    Auto-refresh starts only when the config enables it and provides a
    refresh callback.

    Args:
        config: Declarative view description.
        settings: Runtime settings passed to the core.
        **core_kwargs: Surfaces and hooks forwarded to DashboardCore.

    Returns:
        The configured core.
    """
    core = DashboardCore(config.title, settings, **core_kwargs)

    if config.headers:
        core.set_headers(config.headers)
    if config.refresh is not None:
        core.set_refresh_callback(config.refresh)
    if config.on_row_selected is not None:
        core.set_row_selected_callback(config.on_row_selected)
    for key, description in config.key_descriptions.items():
        core.add_key_binding(key, description)
    if config.initial_data:
        core.set_data(config.initial_data)

    if config.auto_refresh and config.refresh is not None:
        core.start_auto_refresh(config.refresh_seconds)

    logger.debug("Created table view %r", config.title)
    return core


__all__ = ["create_table_view"]
