"""Shared fixtures for the OpsDeck test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime
from typing import Any

import pytest

from opsdeck.core.dashboard import DashboardCore
from opsdeck.core.error_handler import ErrorHandler
from opsdeck.core.message_log import MessageLog
from opsdeck.core.refresh_engine import RefreshEngine
from opsdeck.core.surface import NullPanelSurface, NullTableSurface

FIXED_TIME = datetime(2024, 1, 1, 12, 30, 45)

FRUIT_HEADERS = ["id", "name"]
FRUIT_ROWS = [["1", "apple"], ["2", "banana"], ["3", "cherry"]]


def run_inline(task: Callable[[], Any]) -> None:
    """Runner that executes background work synchronously."""
    task()


@pytest.fixture
def messages() -> MessageLog:
    """Message log with a fixed clock."""
    return MessageLog(max_lines=50, clock=lambda: FIXED_TIME)


@pytest.fixture
def errors(messages: MessageLog) -> ErrorHandler:
    return ErrorHandler(messages)


@pytest.fixture
def engine(messages: MessageLog, errors: ErrorHandler) -> RefreshEngine:
    return RefreshEngine(messages, errors)


@pytest.fixture
def table_surface() -> NullTableSurface:
    return NullTableSurface()


@pytest.fixture
def panel_surface() -> NullPanelSurface:
    return NullPanelSurface()


@pytest.fixture
def core(
    table_surface: NullTableSurface, panel_surface: NullPanelSurface
) -> Iterator[DashboardCore]:
    """DashboardCore running background work inline, with recording surfaces."""
    dashboard = DashboardCore(
        "Fruit",
        table=table_surface,
        panels=panel_surface,
        runner=run_inline,
    )
    dashboard.set_headers(FRUIT_HEADERS)
    dashboard.set_data(FRUIT_ROWS)
    yield dashboard
    dashboard.destroy()
