"""In-memory demo plugin: a paginated process list with a detail view.

Used by ``python -m opsdeck`` to exercise the dashboard runtime without any
external service.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from collections.abc import Mapping
from typing import Any

from opsdeck.core.dashboard import DashboardCore
from opsdeck.core.errors import UnhandledAction
from opsdeck.core.fuzzy import FuzzySearchItem
from opsdeck.models.settings import DashboardSettings

logger = logging.getLogger(__name__)

PROCESS_HEADERS = ["pid", "name", "user", "cpu", "memory", "status"]
DETAIL_HEADERS = ["field", "value"]

_NAMES = ("postgres", "redis-server", "nginx", "python", "node", "sshd", "cron", "dockerd")
_USERS = ("root", "www-data", "postgres", "app")
_STATUSES = ("running", "sleeping", "idle", "stopped")


class DemoProcessSource:
    """Deterministic fake process table with a simulated fetch latency."""

    def __init__(self, total: int = 1200, latency: float = 0.2, seed: int = 7) -> None:
        self.total = total
        self.latency = latency
        self._random = random.Random(seed)
        self._lock = threading.Lock()
        self._processes = [self._make_process(index) for index in range(total)]

    def _make_process(self, index: int) -> list[str]:
        return [
            str(1000 + index),
            self._random.choice(_NAMES),
            self._random.choice(_USERS),
            "0.0",
            "0",
            self._random.choice(_STATUSES),
        ]

    def _sample(self) -> None:
        """Refresh the volatile columns, as a real process list would."""
        for process in self._processes:
            process[3] = f"{self._random.uniform(0, 100):.1f}"
            process[4] = str(self._random.randint(1, 4096))

    def load_page(self, offset: int, limit: int) -> list[list[str]]:
        time.sleep(self.latency)
        with self._lock:
            if offset == 0:
                self._sample()
            return [list(row) for row in self._processes[offset : offset + limit]]

    def names(self) -> list[str]:
        return sorted({process[1] for process in self._processes})


class DemoPlugin:
    """Wires a DashboardCore to the demo source and handles its actions."""

    def __init__(
        self,
        settings: DashboardSettings | None = None,
        source: DemoProcessSource | None = None,
    ) -> None:
        self.source = source or DemoProcessSource()
        self.core = DashboardCore("Processes", settings)
        self.core.set_headers(PROCESS_HEADERS)
        self.core.set_selection_key("pid")
        self.core.set_lazy_loader(self.core.settings.page_size, self.source.load_page)
        self.core.set_action_callback(self.handle_action)
        self.core.add_key_binding("D", "Details")
        self.core.add_key_binding("C", "Clear log", self.core.clear_logs)
        self.core.push_view("processes")
        self.core.set_info_map({"Source": "demo", "Processes": str(self.source.total)})
        self._detail_of: str | None = None

    def search_items(self) -> list[FuzzySearchItem]:
        return [FuzzySearchItem(name, "process name", name) for name in self.source.names()]

    def handle_action(self, action: str, payload: Mapping[str, Any]) -> None:
        if action == "keypress" and payload.get("key") == "D":
            row = self.core.get_selected_row_data()
            if row is None:
                self.core.log("[yellow]No process selected")
                return
            self.show_details(row)
            return
        if action == "rowSelected":
            self.show_details(list(payload["rowData"]))
            return
        if action == "navigate_back":
            self.show_processes()
            return
        if action == "back":
            return
        raise UnhandledAction(action)

    def show_details(self, row: list[str]) -> None:
        if self._detail_of is not None:
            return
        # No new page can start once the loader is gone; one already in
        # flight would commit process rows into the detail table.
        self.core.set_lazy_loader(0, None)
        if self.core.is_loading():
            self.core.set_lazy_loader(self.core.settings.page_size, self.source.load_page)
            self.core.log("[yellow]Still loading processes, try again when done")
            return
        self._detail_of = row[0]
        self.core.push_view(f"pid {row[0]}")
        self.core.set_data([])
        self.core.set_headers(DETAIL_HEADERS)
        self.core.set_data([[header, value] for header, value in zip(PROCESS_HEADERS, row)])

    def show_processes(self) -> None:
        self._detail_of = None
        self.core.set_data([])
        self.core.set_headers(PROCESS_HEADERS)
        self.core.set_lazy_loader(self.core.settings.page_size, self.source.load_page)
        self.core.request_refresh()


__all__ = [
    "DETAIL_HEADERS",
    "DemoPlugin",
    "DemoProcessSource",
    "PROCESS_HEADERS",
]
