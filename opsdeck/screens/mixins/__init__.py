"""Screen and view mixins."""

from opsdeck.screens.mixins.worker_mixin import FETCH_WORKER_GROUP, WorkerMixin

__all__ = ["FETCH_WORKER_GROUP", "WorkerMixin"]
