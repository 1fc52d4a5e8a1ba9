"""DashboardView - embeddable Textual view driven by a DashboardCore.

The view owns the widgets (info, help and log panels, the table and the
breadcrumb line) and adapts them to the core's surfaces. Everything else,
including key routing, lives in the core.

Threading: fetches requested from keys run in thread workers, and commits
made on those threads reach the widgets through ``App.call_from_thread``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from textual import events
from textual.containers import Container, Horizontal, VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Static

from opsdeck.constants.enums import ErrorLevel
from opsdeck.core.dashboard import DashboardCore
from opsdeck.keyboard import key_event_from_textual
from opsdeck.screens.mixins import WorkerMixin
from opsdeck.widgets.data.tables import VirtualDataTable
from opsdeck.widgets.feedback.filter_prompt import FilterPrompt

if TYPE_CHECKING:
    from textual.app import ComposeResult

logger = logging.getLogger(__name__)

_SEVERITY: dict[ErrorLevel, str] = {
    ErrorLevel.INFO: "information",
    ErrorLevel.WARNING: "warning",
    ErrorLevel.ERROR: "error",
    ErrorLevel.FATAL: "error",
}


class DashboardView(WorkerMixin, Container):
    """Header panels, virtual table and breadcrumbs for one DashboardCore.

    CSS Classes: widget-dashboard-view

    Example:
        ```python
        core = DashboardCore("Containers")
        core.set_headers(["id", "name", "status"])
        core.set_refresh_callback(client.list_containers)
        yield DashboardView(core)
        ```
    """

    DEFAULT_CSS = """
    DashboardView {
        height: 1fr;
        width: 1fr;
        layout: vertical;
    }
    DashboardView > #dashboard-header {
        height: 8;
    }
    DashboardView .dashboard-panel {
        width: 1fr;
        height: 100%;
        border: round $primary;
        padding: 0 1;
    }
    DashboardView #dashboard-breadcrumbs {
        height: 1;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        core: DashboardCore,
        *,
        refresh_on_mount: bool = True,
        id: str | None = None,
        classes: str = "",
    ) -> None:
        """Initialize the dashboard view.

        Args:
            core: The core whose state this view renders.
            refresh_on_mount: Request a background refresh once mounted.
            id: Widget ID.
            classes: CSS classes (widget-dashboard-view is automatically added).
        """
        super().__init__(id=id, classes=f"widget-dashboard-view {classes}".strip())
        self.core = core
        self.refresh_on_mount = refresh_on_mount
        self._ui_thread_id: int | None = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="dashboard-header"):
            info = Static("", id="dashboard-info", classes="dashboard-panel")
            info.border_title = "Info"
            yield info
            help_panel = Static("", id="dashboard-help", classes="dashboard-panel")
            help_panel.border_title = "Keybindings"
            yield help_panel
            log_panel = VerticalScroll(id="dashboard-log", classes="dashboard-panel")
            log_panel.border_title = "Log"
            with log_panel:
                yield Static("", id="dashboard-log-text")
        yield VirtualDataTable(id="dashboard-table")
        yield Static("", id="dashboard-breadcrumbs")

    def on_mount(self) -> None:
        self._ui_thread_id = threading.get_ident()
        self.core.set_ui_dispatch(self.dispatch_to_ui)
        self.core.set_runner(self._run_fetch)
        self.core.errors.notifier = self._notify
        if self.core.filter_prompt is None:
            self.core.filter_prompt = self._prompt_filter
        self.core.attach(table=self.table, panels=self)
        self.table.focus()
        self.core.activate()
        if self.refresh_on_mount:
            self.core.request_refresh()

    def on_unmount(self) -> None:
        self.core.destroy()
        self.core.set_ui_dispatch(None)
        self.core.set_runner(None)
        self.cancel_workers()

    @property
    def table(self) -> VirtualDataTable:
        return self.query_one("#dashboard-table", VirtualDataTable)

    # =========================================================================
    # Threading hooks
    # =========================================================================

    def dispatch_to_ui(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on the UI thread."""
        if self._ui_thread_id is None or threading.get_ident() == self._ui_thread_id:
            callback()
        else:
            self.app.call_from_thread(callback)

    def _run_fetch(self, task: Callable[[], Any]) -> None:
        self.start_worker(task, name=getattr(task, "__name__", "fetch"))

    def _notify(self, title: str, message: str, level: ErrorLevel) -> None:
        self.dispatch_to_ui(
            lambda: self.app.notify(message, title=title, severity=_SEVERITY[level])
        )

    def _prompt_filter(self, current: str, submit: Callable[[str], None]) -> None:
        def on_dismiss(result: str | None) -> None:
            if result is not None:
                submit(result)
            self.table.focus()

        self.app.push_screen(FilterPrompt(current), callback=on_dismiss)

    # =========================================================================
    # Panel surface
    # =========================================================================

    def set_info(self, text: str) -> None:
        self._update_static("#dashboard-info", text)

    def set_help(self, title: str, text: str) -> None:
        try:
            panel = self.query_one("#dashboard-help", Static)
        except NoMatches:
            return
        panel.border_title = title
        panel.update(text)

    def set_log(self, lines: Sequence[str]) -> None:
        self._update_static("#dashboard-log-text", "\n".join(lines))
        try:
            self.query_one("#dashboard-log", VerticalScroll).scroll_end(animate=False)
        except NoMatches:
            pass

    def set_breadcrumbs(self, text: str) -> None:
        self._update_static("#dashboard-breadcrumbs", text)

    def _update_static(self, selector: str, text: str) -> None:
        try:
            self.query_one(selector, Static).update(text)
        except NoMatches:
            logger.debug("Panel %s not mounted, update dropped", selector)

    # =========================================================================
    # Events
    # =========================================================================

    def on_key(self, event: events.Key) -> None:
        if self.core.handle_key(key_event_from_textual(event)) is None:
            event.stop()
            event.prevent_default()

    def on_virtual_data_table_cursor_moved(self, event: VirtualDataTable.CursorMoved) -> None:
        event.stop()
        self.core.move_cursor(event.row)

    def on_virtual_data_table_row_activated(self, event: VirtualDataTable.RowActivated) -> None:
        event.stop()
        self.core.select_row(event.row)


__all__ = ["DashboardView"]
