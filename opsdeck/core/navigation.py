"""NavigationStack - ordered view history with a permanent root.

Index 0 is the root and is never popped. An explicitly empty stack (set via
``set_stack([])``) is an allowed degenerate state distinct from "just root".
The stack is mutated only on the UI thread and needs no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from rich.markup import escape

from opsdeck.constants.values import (
    BREADCRUMB_CURRENT_STYLE,
    BREADCRUMB_PREVIOUS_STYLE,
    BREADCRUMB_SEPARATOR,
)

logger = logging.getLogger(__name__)


class NavigationStack:
    """Stack of view names backing back-navigation and breadcrumbs."""

    def __init__(self, views: Iterable[str] = ()) -> None:
        self._views: list[str] = list(views)

    def __len__(self) -> int:
        return len(self._views)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._views))

    def __repr__(self) -> str:
        return f"NavigationStack({self._views!r})"

    @property
    def views(self) -> list[str]:
        """A copy of the stack, root first."""
        return list(self._views)

    def push(self, name: str) -> None:
        self._views.append(name)

    def pop(self) -> str:
        """Remove and return the top view.

        Returns:
            The removed view name, or "" when at (or below) the root.
        """
        if len(self._views) <= 1:
            return ""
        return self._views.pop()

    def clear(self) -> None:
        """Truncate to the root view, if there is one."""
        del self._views[1:]

    def set_stack(self, views: Iterable[str]) -> None:
        """Replace the whole stack; an empty iterable empties it."""
        self._views = list(views)

    def current(self) -> str:
        """The top view name, or "" when the stack is empty."""
        return self._views[-1] if self._views else ""

    def previous(self) -> str:
        """The view below the top, or "" when there is none."""
        return self._views[-2] if len(self._views) > 1 else ""

    def can_go_back(self) -> bool:
        return len(self._views) > 1

    def clone(self) -> NavigationStack:
        return NavigationStack(self._views)

    def copy_from(self, other: NavigationStack) -> None:
        self._views = other.views

    def breadcrumb(self) -> str:
        """Render the stack as rich markup, highlighting the current view."""
        if not self._views:
            return ""
        last = len(self._views) - 1
        parts = []
        for index, view in enumerate(self._views):
            style = BREADCRUMB_CURRENT_STYLE if index == last else BREADCRUMB_PREVIOUS_STYLE
            parts.append(f"[{style}]{escape(view)}[/]")
        return BREADCRUMB_SEPARATOR.join(parts)


__all__ = ["NavigationStack"]
