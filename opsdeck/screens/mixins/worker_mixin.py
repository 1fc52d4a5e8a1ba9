"""WorkerMixin - thread-worker launching for blocking dashboard fetches.

Refresh and load-more calls block on plugin-supplied fetch callbacks, so
they run in Textual thread workers rather than on the event loop. The
refresh engine already drops overlapping fetches, so workers are never
exclusive: cancelling a thread worker cannot interrupt a blocking call
anyway.

IMPORTANT: WorkerMixin uses Textual's built-in `self.workers` (WorkerManager)
for worker lifecycle management.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from contextlib import suppress
from typing import Any

from textual._context import NoActiveAppError
from textual.reactive import reactive
from textual.worker import Worker, WorkerState

logger = logging.getLogger(__name__)

FETCH_WORKER_GROUP = "opsdeck-fetch"


class WorkerMixin:
    """Mixin providing fetch-worker management for a DOM node.

    - `start_worker()`: run a blocking callable in a thread worker
    - `cancel_workers()`: cancel all workers of this node
    - `on_worker_state_changed()`: logs completion, errors and duration

    Usage:
        ```python
        class MyView(WorkerMixin, Container):
            def action_reload(self) -> None:
                self.start_worker(self.core.refresh, name="refresh")
        ```
    """

    active_workers = reactive(0)
    last_duration_ms = reactive(0.0, init=False)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._worker_started_at: dict[str, float] = {}

    def start_worker(
        self,
        worker_func: Callable[[], Any],
        *,
        name: str | None = None,
        exit_on_error: bool = False,
    ) -> Worker[Any]:
        """Start ``worker_func`` in a thread worker.

        Args:
            worker_func: Blocking callable to run.
            name: Optional worker name for debugging.
            exit_on_error: If False, errors don't crash the app (default False).

        Returns:
            The Worker instance
        """
        worker_name = name or getattr(worker_func, "__name__", "fetch")
        self._worker_started_at[worker_name] = time.monotonic()
        return self.run_worker(  # type: ignore[attr-defined]
            worker_func,
            name=worker_name,
            group=FETCH_WORKER_GROUP,
            thread=True,
            exclusive=False,
            exit_on_error=exit_on_error,
        )

    def cancel_workers(self) -> None:
        """Cancel all running workers using Textual's built-in WorkerManager."""
        with suppress(NoActiveAppError):
            self.workers.cancel_all()  # type: ignore[attr-defined]

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Track running workers and log how each one ended."""
        worker = event.worker
        if event.state == WorkerState.RUNNING:
            self.active_workers += 1
            return
        if event.state not in (WorkerState.SUCCESS, WorkerState.CANCELLED, WorkerState.ERROR):
            return

        self.active_workers = max(0, self.active_workers - 1)
        started = self._worker_started_at.pop(worker.name, None)
        duration_ms = (time.monotonic() - started) * 1000 if started is not None else 0.0
        self.last_duration_ms = duration_ms

        if event.state == WorkerState.CANCELLED:
            logger.debug("Worker '%s' was cancelled (%.2fms)", worker.name, duration_ms)
        elif event.state == WorkerState.ERROR:
            logger.error("Worker '%s' error: %s (%.2fms)", worker.name, worker.error, duration_ms)
        else:
            logger.debug("Worker '%s' completed successfully (%.2fms)", worker.name, duration_ms)


__all__ = ["FETCH_WORKER_GROUP", "WorkerMixin"]
