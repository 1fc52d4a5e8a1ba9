"""DashboardCore - the object every plugin view instantiates.

DashboardCore wires the refresh engine, navigation stack, key binding table
and dispatcher, message panel and error handler together and exposes the
public contract plugins program against. It never draws anything itself:
rendering goes through a table surface and a panel surface (see
``opsdeck.core.surface``), and both are optional so the core can be driven
headless.

Two hooks adapt it to a host toolkit:

- ``runner`` launches background work (refresh and load-more requested from
  keys). The default starts a daemon thread per request.
- ``ui_dispatch`` marshals surface updates onto the UI thread. The default
  calls straight through, which is right for headless use and tests.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import timedelta
from typing import Any

from rich.markup import escape

from opsdeck.constants.enums import Action, ErrorLevel, RefreshOutcome
from opsdeck.constants.values import HELP_TITLE, HELP_TITLE_EXPANDED, KEY_LOAD_MORE
from opsdeck.core.error_handler import ErrorHandler, Notifier
from opsdeck.core.errors import UnhandledAction
from opsdeck.core.message_log import MessageLog
from opsdeck.core.navigation import NavigationStack
from opsdeck.core.refresh_engine import (
    PageLoader,
    RefreshEngine,
    RefreshSource,
    ViewSnapshot,
)
from opsdeck.core.signature import Row
from opsdeck.core.surface import (
    NullPanelSurface,
    NullTableSurface,
    PanelSurface,
    TableSurface,
)
from opsdeck.core.virtual_table import VirtualTableContent
from opsdeck.keyboard.bindings import KeyBindingTable, KeyHandler
from opsdeck.keyboard.dispatcher import KeyDispatcher, KeyEvent, OuterHandler
from opsdeck.keyboard.help import expanded_help_text, help_text
from opsdeck.models.settings import DashboardSettings

logger = logging.getLogger(__name__)

ActionDelegate = Callable[[str, Mapping[str, Any]], None]
RowSelectedCallback = Callable[[int], None]
Runner = Callable[[Callable[[], Any]], None]
UiDispatch = Callable[[Callable[[], None]], None]
FilterPrompt = Callable[[str, Callable[[str], None]], None]


def spawn_thread(task: Callable[[], Any]) -> None:
    """Run ``task`` on a new daemon thread."""
    threading.Thread(target=task, name="opsdeck-fetch", daemon=True).start()


def call_now(callback: Callable[[], None]) -> None:
    callback()


def format_info_map(info: Mapping[str, str]) -> str:
    """Render key/value pairs as aligned markup lines, sorted by key.

    Pairs with an empty key or value are skipped.
    """
    items = [(key, info[key]) for key in sorted(info) if key and info[key]]
    if not items:
        return ""
    width = max(len(key) for key, _ in items)
    lines = []
    for key, value in items:
        padding = " " * (width + 1 - len(key))
        lines.append(f"[bold cyan]{escape(key)}:[/]{padding}[bold white]{escape(value)}[/]")
    return "\n".join(lines)


class DashboardCore:
    """View-state runtime for one dashboard view.

    Args:
        title: Table title, also shown in the filter indicator.
        settings: Runtime settings; defaults are used when omitted.
        table: Table surface to render into.
        panels: Panel surface for info/help/log/breadcrumbs.
        runner: Launches background work; defaults to a daemon thread.
        ui_dispatch: Marshals surface updates onto the UI thread.
        notifier: Receives ERROR and FATAL notifications.
        outer_key_handler: Receives key events the view does not consume.
    """

    def __init__(
        self,
        title: str,
        settings: DashboardSettings | None = None,
        *,
        table: TableSurface | None = None,
        panels: PanelSurface | None = None,
        runner: Runner | None = None,
        ui_dispatch: UiDispatch | None = None,
        notifier: Notifier | None = None,
        outer_key_handler: OuterHandler | None = None,
    ) -> None:
        self.title = title
        self.settings = settings or DashboardSettings()

        self._runner: Runner = runner or spawn_thread
        self._ui: UiDispatch = ui_dispatch or call_now

        self.messages = MessageLog(self.settings.max_log_lines)
        self.errors = ErrorHandler(self.messages, notifier)
        self.engine = RefreshEngine(
            self.messages,
            self.errors,
            selection_key=self.settings.selection_key,
            fetch_timeout=self.settings.fetch_timeout,
        )
        self.navigation = NavigationStack()
        self.bindings = KeyBindingTable()
        self.dispatcher = KeyDispatcher(self, outer_key_handler)
        self.content = VirtualTableContent()

        self.filter_prompt: FilterPrompt | None = None
        self._action_callback: ActionDelegate | None = None
        self._row_selected_callback: RowSelectedCallback | None = None
        self._help_expanded = False
        self._info_text = ""

        self._table: TableSurface = NullTableSurface()
        self._panels: PanelSurface = NullPanelSurface()
        self._table.attach_content(self.content)

        self.engine.subscribe(self._on_commit)
        self.messages.subscribe(self._on_messages)

        if table is not None or panels is not None:
            self.attach(table=table, panels=panels)

    # =========================================================================
    # Surfaces and lifecycle
    # =========================================================================

    def attach(
        self,
        *,
        table: TableSurface | None = None,
        panels: PanelSurface | None = None,
    ) -> None:
        """Attach rendering surfaces and push the full current state to them."""
        if table is not None:
            self._table = table
            table.attach_content(self.content)
        if panels is not None:
            self._panels = panels
        self._ui(self._render_all)

    def detach(self) -> None:
        """Fall back to null surfaces; the view state is kept."""
        self._table = NullTableSurface()
        self._panels = NullPanelSurface()
        self._table.attach_content(self.content)

    def set_ui_dispatch(self, ui_dispatch: UiDispatch | None) -> None:
        self._ui = ui_dispatch or call_now

    def set_runner(self, runner: Runner | None) -> None:
        self._runner = runner or spawn_thread

    def activate(self) -> None:
        """Start auto-refresh when the settings ask for it."""
        if self.settings.auto_refresh:
            self.start_auto_refresh(self.settings.refresh_interval)

    def destroy(self) -> None:
        """Stop background work and detach from every surface."""
        self.stop_auto_refresh()
        self.messages.unsubscribe(self._on_messages)
        self.detach()
        logger.debug("Dashboard %r destroyed", self.title)

    # =========================================================================
    # Data
    # =========================================================================

    def set_headers(self, headers: Sequence[str]) -> DashboardCore:
        self.engine.set_headers(headers)
        return self

    def get_headers(self) -> list[str]:
        return self.engine.headers

    def set_data(self, rows: Sequence[Row]) -> DashboardCore:
        self.engine.set_data(rows)
        return self

    def append_data(self, rows: Sequence[Row]) -> DashboardCore:
        self.engine.append_data(rows)
        return self

    def get_table_data(self) -> list[Row]:
        """Rows of the filtered view, in display order."""
        return list(self.engine.view.rows)

    def update_row(self, index: int, row: Row) -> bool:
        return self.engine.update_row(index, row)

    def set_refresh_callback(self, source: RefreshSource | None) -> DashboardCore:
        self.engine.set_refresh_source(source)
        return self

    def set_lazy_loader(self, page_size: int, loader: PageLoader | None) -> DashboardCore:
        """Enable paginated loading and the ``PgDn`` binding; None disables both."""
        self.engine.set_lazy_loader(page_size, loader)
        if loader is not None:
            self.bindings.add_load_more()
        else:
            self.bindings.remove(KEY_LOAD_MORE)
        self._ui(self._render_help)
        return self

    def has_lazy_loader(self) -> bool:
        return self.engine.has_lazy_loader()

    def set_selection_key(self, column: str | None) -> DashboardCore:
        self.engine.set_selection_key(column)
        return self

    def set_table_title(self, title: str) -> DashboardCore:
        self.title = title
        self._ui(self._render_title)
        return self

    def table_title(self) -> str:
        query = self.engine.query
        title = f"[yellow]{escape(self.title)}[/]"
        if query:
            title += f" [dim](filter: {escape(query)})[/]"
        return title

    # =========================================================================
    # Refresh
    # =========================================================================

    def refresh(self) -> RefreshOutcome:
        """Run a refresh on the calling thread."""
        return self.engine.refresh()

    def load_more(self) -> RefreshOutcome:
        """Load the next page on the calling thread."""
        return self.engine.load_more()

    def request_refresh(self) -> None:
        """Refresh in the background."""
        self._runner(self.engine.refresh)

    def request_load_more(self) -> None:
        """Load the next page in the background."""
        self._runner(self.engine.load_more)

    def start_auto_refresh(self, interval: float | timedelta) -> DashboardCore:
        self.engine.start_auto_refresh(interval)
        return self

    def stop_auto_refresh(self) -> DashboardCore:
        self.engine.stop_auto_refresh()
        return self

    def is_loading(self) -> bool:
        return self.engine.is_loading

    # =========================================================================
    # Filtering
    # =========================================================================

    def set_filter_query(self, query: str) -> bool:
        return self.engine.set_filter_query(query)

    def clear_filter(self) -> bool:
        return self.engine.clear_filter()

    def is_filtered(self) -> bool:
        return self.engine.is_filtered()

    def get_filter_query(self) -> str:
        return self.engine.query

    def open_filter_prompt(self) -> None:
        """Ask the filter prompt for a query, pre-filled with the current one."""
        if self.filter_prompt is None:
            self.messages.log("[red]Filter unavailable")
            return
        self.filter_prompt(self.engine.query, self._submit_filter)

    def _submit_filter(self, query: str) -> None:
        self.set_filter_query(query.strip())

    # =========================================================================
    # Selection
    # =========================================================================

    def move_cursor(self, index: int) -> None:
        """Track a cursor move without firing selection callbacks."""
        if self.engine.select(index):
            self.content.set_selected(index)

    def select_row(self, index: int) -> bool:
        """Confirm the row at ``index`` of the filtered view.

        Fires the row-selected callback and a ``rowSelected`` action whose
        payload carries the row index, its cells and a header-to-cell map.

        Returns:
            False when ``index`` is outside the filtered view.
        """
        if not self.engine.select(index):
            return False
        self.content.set_selected(index)
        row = list(self.engine.selected_row() or [])

        if self._row_selected_callback is not None:
            try:
                self._row_selected_callback(index)
            except Exception as e:
                self.errors.handle_error(f"Row selection callback failed: {e}", ErrorLevel.ERROR)

        headers = self.engine.headers
        payload: dict[str, Any] = {"rowIndex": index, "rowData": row}
        if headers:
            payload["namedData"] = {
                header: row[i] for i, header in enumerate(headers) if i < len(row)
            }
        self.emit_action(Action.ROW_SELECTED.value, payload)
        return True

    def get_selected_row_index(self) -> int | None:
        """Raw-store index of the selected row, or None."""
        return self.engine.selected_source_index()

    def get_selected_row_data(self) -> list[str] | None:
        row = self.engine.selected_row()
        return list(row) if row is not None else None

    def set_row_selected_callback(self, callback: RowSelectedCallback | None) -> DashboardCore:
        self._row_selected_callback = callback
        return self

    # =========================================================================
    # Actions and keys
    # =========================================================================

    def set_action_callback(self, callback: ActionDelegate | None) -> DashboardCore:
        """Register the plugin's action delegate.

        The delegate returns normally when it handled an action and raises
        (conventionally ``UnhandledAction``) to decline it.
        """
        self._action_callback = callback
        return self

    def emit_action(self, action: str, payload: Mapping[str, Any]) -> bool:
        """Send an action to the delegate.

        Returns:
            True when a delegate accepted the action.
        """
        if self._action_callback is None:
            return False
        try:
            self._action_callback(action, payload)
        except UnhandledAction:
            logger.debug("Action %r declined by delegate", action)
            return False
        except Exception as e:
            logger.debug("Action %r failed in delegate: %s", action, e)
            return False
        return True

    def add_key_binding(
        self,
        key: str,
        description: str,
        handler: KeyHandler | None = None,
    ) -> DashboardCore:
        self.bindings.add(key, description, handler)
        self._ui(self._render_help)
        return self

    def clear_key_bindings(self) -> DashboardCore:
        """Keep only the standard bindings and drop every handler."""
        self.bindings.clear_custom()
        self._ui(self._render_help)
        return self

    def run_key_handler(self, key: str, handler: KeyHandler) -> None:
        try:
            handler()
        except Exception as e:
            self.errors.handle_error(f"Key handler for {key} failed: {e}", ErrorLevel.ERROR)

    def handle_key(self, event: KeyEvent) -> KeyEvent | None:
        """Dispatch a key event; None means it was consumed."""
        return self.dispatcher.dispatch(event)

    def toggle_help_expanded(self) -> None:
        self._help_expanded = not self._help_expanded
        self._ui(self._render_help)

    @property
    def help_expanded(self) -> bool:
        return self._help_expanded

    # =========================================================================
    # Navigation
    # =========================================================================

    def push_view(self, name: str) -> None:
        self.navigation.push(name)
        self._on_navigation()

    def pop_view(self) -> str:
        name = self.navigation.pop()
        if name:
            self._on_navigation()
        return name

    def clear_views(self) -> None:
        self.navigation.clear()
        self._on_navigation()

    def get_current_view(self) -> str:
        return self.navigation.current()

    def set_view_stack(self, views: Iterable[str]) -> None:
        self.navigation.set_stack(views)
        self._on_navigation()

    def copy_navigation_stack_from(self, other: DashboardCore) -> None:
        self.navigation.copy_from(other.navigation)
        self._on_navigation()

    def _on_navigation(self) -> None:
        self._ui(self._render_breadcrumbs)
        if self._help_expanded:
            self._ui(self._render_help)

    # =========================================================================
    # Panels
    # =========================================================================

    def set_info_text(self, text: str) -> DashboardCore:
        self._info_text = text
        self._ui(self._render_info)
        return self

    def set_info_map(self, info: Mapping[str, str]) -> DashboardCore:
        return self.set_info_text(format_info_map(info))

    def log(self, message: str) -> DashboardCore:
        self.messages.log(message)
        return self

    def clear_logs(self) -> DashboardCore:
        self.messages.clear()
        return self

    # =========================================================================
    # Rendering
    # =========================================================================

    def _on_commit(self, snapshot: ViewSnapshot) -> None:
        self._ui(lambda: self._render_snapshot(snapshot))

    def _on_messages(self, lines: list[str]) -> None:
        self._ui(lambda: self._panels.set_log(lines))

    def _render_snapshot(self, snapshot: ViewSnapshot) -> None:
        self.content.set_headers(snapshot.headers)
        self.content.set_data(snapshot.view.rows)
        self.content.set_selected(snapshot.selected)
        self._table.set_headers(snapshot.headers)
        self._table.set_row_count(self.content.row_count)
        self._table.select(snapshot.selected)
        self._render_title()

    def _render_title(self) -> None:
        self._table.set_title(self.table_title())

    def _render_help(self) -> None:
        descriptions = self.bindings.descriptions()
        if self._help_expanded:
            self._panels.set_help(
                HELP_TITLE_EXPANDED,
                expanded_help_text(descriptions, self.navigation.current()),
            )
        else:
            self._panels.set_help(
                HELP_TITLE,
                help_text(descriptions, self.settings.help_rows_per_column),
            )

    def _render_breadcrumbs(self) -> None:
        self._panels.set_breadcrumbs(self.navigation.breadcrumb())

    def _render_info(self) -> None:
        self._panels.set_info(self._info_text)

    def _render_all(self) -> None:
        self._render_snapshot(self.engine.snapshot())
        self._render_help()
        self._render_breadcrumbs()
        self._render_info()
        self._panels.set_log(self.messages.lines)


__all__ = [
    "ActionDelegate",
    "DashboardCore",
    "FilterPrompt",
    "RowSelectedCallback",
    "Runner",
    "UiDispatch",
    "call_now",
    "format_info_map",
    "spawn_thread",
]
