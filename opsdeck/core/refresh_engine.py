"""RefreshEngine - owner of the raw row store and its refresh lifecycle.

One data lock guards the raw store, the refresh state, the filter and the
derived FilteredView (with its selection) as a single unit. Every path that
fetches - manual refresh, auto-refresh ticks, load-more - checks and sets
``is_loading`` under that lock, releases it for the fetch itself, and
re-acquires it only to commit. A trigger that finds a fetch in flight is
dropped, never queued, so at most one fetch runs at a time.

Fetch callables return rows or raise. Failures leave the raw store
untouched, clear ``is_loading`` and are surfaced on the message panel.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any

from rich.markup import escape

from opsdeck.constants.defaults import PAGE_SIZE_DEFAULT
from opsdeck.constants.enums import ErrorLevel, FetchKind, RefreshOutcome
from opsdeck.core.error_handler import ErrorHandler
from opsdeck.core.errors import (
    ConcurrencyBusyError,
    ConfigurationError,
    DashboardError,
    FetchError,
    FetchTimeoutError,
)
from opsdeck.core.filter_engine import FilteredView, FilterEngine
from opsdeck.core.message_log import MessageLog
from opsdeck.core.selection import NO_SELECTION, SelectionTracker
from opsdeck.core.signature import Row

logger = logging.getLogger(__name__)

RefreshSource = Callable[[], Sequence[Row]]
PageLoader = Callable[[int, int], Sequence[Row]]


# ============================================================================
# State
# ============================================================================


@dataclass
class RefreshState:
    """Loading/pagination state, mutated only under the data lock."""

    is_loading: bool = False
    offset: int = 0
    page_size: int = PAGE_SIZE_DEFAULT
    has_more: bool = True


@dataclass(frozen=True)
class ViewSnapshot:
    """Consistent copy of the view state taken at commit time."""

    kind: FetchKind
    headers: tuple[str, ...]
    view: FilteredView
    raw_count: int
    selected: int
    query: str
    state: RefreshState


CommitListener = Callable[[ViewSnapshot], None]


def interval_seconds(interval: float | timedelta) -> float:
    """Normalize an interval given as seconds or a timedelta."""
    if isinstance(interval, timedelta):
        return interval.total_seconds()
    return float(interval)


def format_interval(seconds: float) -> str:
    """Format an interval the way the message panel shows it, e.g. ``10s``."""
    return f"{seconds:g}s"


# ============================================================================
# Auto-refresh timer
# ============================================================================


class _AutoRefreshTimer(threading.Thread):
    """Daemon thread calling ``tick`` every ``interval`` until stopped."""

    def __init__(
        self,
        interval: float,
        tick: Callable[[], Any],
        stop_event: threading.Event,
    ) -> None:
        super().__init__(name="opsdeck-auto-refresh", daemon=True)
        self.interval = interval
        self._tick = tick
        self._stop_event = stop_event

    def run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self._tick()
            except Exception:
                logger.exception("Auto-refresh tick failed")
        logger.debug("Auto-refresh timer exited")


# ============================================================================
# Engine
# ============================================================================


class RefreshEngine:
    """Coordinates refresh, auto-refresh, pagination and filtering."""

    def __init__(
        self,
        messages: MessageLog,
        errors: ErrorHandler,
        *,
        selection_key: str | None = None,
        fetch_timeout: float | None = None,
    ) -> None:
        self._messages = messages
        self._errors = errors
        self.fetch_timeout = fetch_timeout

        self._lock = threading.Lock()
        self._raw: list[Row] = []
        self._headers: list[str] = []
        self._state = RefreshState()
        self._filter = FilterEngine()
        self._selection = SelectionTracker(selection_key)
        self._view = FilteredView()

        self._refresh_source: RefreshSource | None = None
        self._loader: PageLoader | None = None
        self._listeners: list[CommitListener] = []
        self.last_rejection: DashboardError | None = None

        self._timer_lock = threading.Lock()
        self._timer: _AutoRefreshTimer | None = None
        self._stop_event = threading.Event()

    # =========================================================================
    # Configuration
    # =========================================================================

    def subscribe(self, listener: CommitListener) -> None:
        """Register a listener called (outside the lock) after every commit."""
        self._listeners.append(listener)

    def set_refresh_source(self, source: RefreshSource | None) -> None:
        self._refresh_source = source

    def set_lazy_loader(self, page_size: int, loader: PageLoader | None) -> None:
        """Enable pagination; a non-positive page size uses the default."""
        if page_size <= 0:
            page_size = PAGE_SIZE_DEFAULT
        with self._lock:
            self._loader = loader
            self._state.page_size = page_size
            self._state.has_more = True

    def has_lazy_loader(self) -> bool:
        return self._loader is not None

    def set_selection_key(self, column: str | None) -> None:
        with self._lock:
            self._selection.selection_key = column

    @property
    def selection_key(self) -> str | None:
        return self._selection.selection_key

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def state(self) -> RefreshState:
        """A copy of the refresh state."""
        with self._lock:
            return replace(self._state)

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._state.is_loading

    @property
    def headers(self) -> list[str]:
        with self._lock:
            return list(self._headers)

    @property
    def raw_rows(self) -> list[Row]:
        with self._lock:
            return list(self._raw)

    @property
    def view(self) -> FilteredView:
        with self._lock:
            return self._view

    @property
    def query(self) -> str:
        return self._filter.query

    def is_filtered(self) -> bool:
        return self._filter.is_filtered()

    def snapshot(self, kind: FetchKind = FetchKind.SET_DATA) -> ViewSnapshot:
        with self._lock:
            return self._snapshot_locked(kind)

    # =========================================================================
    # Selection
    # =========================================================================

    @property
    def selected_index(self) -> int:
        with self._lock:
            return self._selection.selected

    def select(self, index: int) -> bool:
        """Select a filtered-view index; out-of-range indices are ignored."""
        with self._lock:
            return self._selection.select(index, self._view)

    def clear_selection(self) -> None:
        with self._lock:
            self._selection.clear()

    def selected_source_index(self) -> int | None:
        """Raw-store index of the selection, or None."""
        with self._lock:
            return self._selection.source_index(self._view)

    def selected_row(self) -> Row | None:
        with self._lock:
            return self._selection.selected_row(self._view)

    # =========================================================================
    # Direct data mutation
    # =========================================================================

    def set_headers(self, headers: Sequence[str]) -> ViewSnapshot:
        with self._lock:
            snapshot = self._recompute_locked(FetchKind.SET_DATA, headers)
        self._notify(snapshot)
        return snapshot

    def set_data(self, rows: Sequence[Row]) -> ViewSnapshot:
        """Replace the raw store and re-derive the view under the active filter."""
        with self._lock:
            self._raw = list(rows)
            snapshot = self._recompute_locked(FetchKind.SET_DATA)
        self._notify(snapshot)
        return snapshot

    def append_data(self, rows: Sequence[Row]) -> ViewSnapshot | None:
        """Append rows to the raw store; an empty batch is a no-op."""
        if not rows:
            return None
        with self._lock:
            self._raw.extend(rows)
            snapshot = self._recompute_locked(FetchKind.APPEND)
        self._notify(snapshot)
        return snapshot

    def update_row(self, index: int, row: Row) -> bool:
        """Replace the filtered row at ``index`` and its raw-store origin."""
        with self._lock:
            source = self._view.source_index(index)
            if source is None:
                return False
            self._raw[source] = row
            snapshot = self._recompute_locked(FetchKind.SET_DATA)
        self._notify(snapshot)
        return True

    # =========================================================================
    # Filtering
    # =========================================================================

    def set_filter_query(self, query: str) -> bool:
        """Apply (or clear, when blank) the table filter.

        Rejected while a fetch is in flight; the previous filter stays.

        Returns:
            True when the query was applied.
        """
        with self._lock:
            if self._state.is_loading:
                rejected = True
            else:
                rejected = False
                self._filter.set_query(query)
                snapshot = self._recompute_locked(FetchKind.FILTER)
                has_more = self._state.has_more and self._loader is not None

        if rejected:
            self._reject(ConfigurationError("filter change rejected: loading in progress"))
            self._messages.log("[yellow]Loading in progress...")
            return False

        active = snapshot.query
        if not active:
            self._messages.log("[yellow]Filter cleared")
        else:
            self._messages.log(
                f"[green]Filter '{escape(active)}': "
                f"{len(snapshot.view)}/{snapshot.raw_count} rows"
            )
            if not len(snapshot.view) and has_more:
                self._messages.log("[dim]More data available - use PgDn to load more")
        self._notify(snapshot)
        return True

    def clear_filter(self) -> bool:
        return self.set_filter_query("")

    # =========================================================================
    # Fetching
    # =========================================================================

    def refresh(self) -> RefreshOutcome:
        """Fetch a fresh first page (or full data set) and replace the store."""
        with self._lock:
            busy = self._state.is_loading
            loader = self._loader
            source = self._refresh_source
            page_size = self._state.page_size
            if not busy and (loader is not None or source is not None):
                self._state.is_loading = True

        if busy:
            self._reject(ConcurrencyBusyError("refresh skipped: loading in progress"))
            self._messages.log("[yellow]Loading in progress...")
            return RefreshOutcome.BUSY
        if loader is None and source is None:
            logger.debug("Refresh requested without a data source")
            return RefreshOutcome.NO_SOURCE

        self._messages.log("Refreshing data...")
        try:
            if loader is not None:
                rows = list(self._fetch(loader, 0, page_size))
            else:
                rows = list(self._fetch(source))  # type: ignore[arg-type]
        except Exception as exc:
            with self._lock:
                self._state.is_loading = False
            self._surface_fetch_error(exc, "refresh", "Error refreshing data")
            return RefreshOutcome.FAILED

        with self._lock:
            self._state.is_loading = False
            self._raw = rows
            if loader is not None:
                self._state.offset = len(rows)
                self._state.has_more = len(rows) >= page_size
            snapshot = self._recompute_locked(FetchKind.REFRESH)

        self._messages.log("[green]Data refreshed successfully")
        self._notify(snapshot)
        return RefreshOutcome.COMMITTED

    def load_more(self) -> RefreshOutcome:
        """Fetch the next page at the current offset and append it."""
        with self._lock:
            loader = self._loader
            if loader is None:
                outcome = RefreshOutcome.NO_SOURCE
            elif self._state.is_loading:
                outcome = RefreshOutcome.BUSY
            elif not self._state.has_more:
                outcome = RefreshOutcome.EXHAUSTED
            else:
                outcome = None
                self._state.is_loading = True
                offset = self._state.offset
                page_size = self._state.page_size

        if outcome is RefreshOutcome.NO_SOURCE:
            self._reject(
                ConfigurationError("load more ignored: no paginated loader configured")
            )
            return outcome
        if outcome is RefreshOutcome.BUSY:
            self._reject(ConcurrencyBusyError("load more skipped: loading in progress"))
            return outcome
        if outcome is RefreshOutcome.EXHAUSTED:
            logger.info("Load more skipped: no more rows")
            self._messages.log("[yellow]No more rows to load")
            return outcome

        try:
            rows = list(self._fetch(loader, offset, page_size))  # type: ignore[arg-type]
        except Exception as exc:
            with self._lock:
                self._state.is_loading = False
            self._surface_fetch_error(exc, "load_more", "Error loading more")
            return RefreshOutcome.FAILED

        with self._lock:
            self._state.is_loading = False
            if not rows:
                self._state.has_more = False
                snapshot = None
            else:
                self._raw.extend(rows)
                self._state.offset += len(rows)
                if len(rows) < page_size:
                    self._state.has_more = False
                snapshot = self._recompute_locked(FetchKind.LOAD_MORE)

        if snapshot is None:
            logger.info("Load more returned an empty page: no more rows")
            self._messages.log("[yellow]No more rows to load")
            return RefreshOutcome.EXHAUSTED

        self._messages.log(f"[green]Loaded {len(rows)} more rows")
        self._notify(snapshot)
        return RefreshOutcome.COMMITTED

    # =========================================================================
    # Auto-refresh
    # =========================================================================

    def start_auto_refresh(self, interval: float | timedelta) -> None:
        """Start a periodic refresh, replacing any running timer."""
        seconds = interval_seconds(interval)
        if seconds <= 0:
            raise ValueError(f"Auto-refresh interval must be positive, got {interval!r}")

        with self._timer_lock:
            self._stop_timer_locked()
            self._timer = _AutoRefreshTimer(seconds, self.refresh, self._stop_event)
            self._timer.start()
        logger.debug("Auto-refresh timer started (%ss)", seconds)
        self._messages.log(f"Auto-refresh enabled ({format_interval(seconds)})")

    def stop_auto_refresh(self) -> None:
        """Stop the periodic refresh; safe when none is running."""
        with self._timer_lock:
            stopped = self._stop_timer_locked()
        if stopped:
            self._messages.log("Auto-refresh disabled")

    def is_auto_refreshing(self) -> bool:
        with self._timer_lock:
            return self._timer is not None

    # =========================================================================
    # Internals
    # =========================================================================

    def _stop_timer_locked(self) -> bool:
        if self._timer is None:
            return False
        self._stop_event.set()
        self._timer = None
        self._stop_event = threading.Event()
        logger.debug("Auto-refresh timer stopped")
        return True

    def _fetch(self, fetch: Callable[..., Sequence[Row]], *args: int) -> Sequence[Row]:
        """Run a fetch callable, bounded by ``fetch_timeout`` when set."""
        if self.fetch_timeout is None:
            return fetch(*args)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="opsdeck-fetch")
        future = executor.submit(fetch, *args)
        try:
            return future.result(timeout=self.fetch_timeout)
        except FutureTimeoutError as exc:
            if future.done():
                raise
            future.cancel()
            raise FetchTimeoutError(
                f"timed out after {format_interval(self.fetch_timeout)}"
            ) from exc
        finally:
            executor.shutdown(wait=False)

    def _surface_fetch_error(self, exc: Exception, operation: str, prefix: str) -> None:
        if isinstance(exc, FetchError):
            exc.operation = operation
            error: FetchError = exc
        else:
            error = FetchError(str(exc), operation=operation)
        logger.debug("Fetch failed during %s", operation, exc_info=exc)
        self._errors.handle_error(f"{prefix}: {error}", ErrorLevel.WARNING)

    def _reject(self, error: DashboardError) -> None:
        """Record a soft rejection; the caller reports it as an outcome."""
        self.last_rejection = error
        logger.info("%s: %s", type(error).__name__, error)

    def _recompute_locked(
        self, kind: FetchKind, headers: Sequence[str] | None = None
    ) -> ViewSnapshot:
        # The memo is taken against the headers the selected row was shown with.
        memo = self._selection.capture(self._view, self._headers)
        if headers is not None:
            self._headers = list(headers)
        self._view = self._filter.apply(self._raw)
        self._selection.restore(memo, self._view, self._headers)
        return self._snapshot_locked(kind)

    def _snapshot_locked(self, kind: FetchKind) -> ViewSnapshot:
        return ViewSnapshot(
            kind=kind,
            headers=tuple(self._headers),
            view=self._view,
            raw_count=len(self._raw),
            selected=self._selection.selected,
            query=self._filter.query,
            state=replace(self._state),
        )

    def _notify(self, snapshot: ViewSnapshot) -> None:
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = [
    "NO_SELECTION",
    "CommitListener",
    "PageLoader",
    "RefreshEngine",
    "RefreshSource",
    "RefreshState",
    "ViewSnapshot",
    "format_interval",
    "interval_seconds",
]
