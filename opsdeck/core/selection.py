"""SelectionTracker - selection that survives refresh, filter and reorder.

The durable identity of a selection is its row signature, never its index.
After every FilteredView recomputation the signature is re-resolved by a
linear scan of the new view (O(n), bounded by pagination). When the
signature is gone the previous index is clamped into the new bounds.
Rows sharing a signature resolve to the first match.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from opsdeck.core.filter_engine import FilteredView
from opsdeck.core.signature import Row, row_signature

logger = logging.getLogger(__name__)

NO_SELECTION = -1


@dataclass(frozen=True)
class SelectionMemo:
    """Selection captured from a view that is about to be replaced."""

    index: int = NO_SELECTION
    signature: str = ""


class SelectionTracker:
    """Tracks the selected row as an index into the current FilteredView."""

    def __init__(self, selection_key: str | None = None) -> None:
        self.selection_key = selection_key
        self._selected: int = NO_SELECTION

    @property
    def selected(self) -> int:
        """Selected filtered-view index, or NO_SELECTION."""
        return self._selected

    def has_selection(self) -> bool:
        return self._selected != NO_SELECTION

    def select(self, index: int, view: FilteredView) -> bool:
        """Select ``index`` if it lies inside ``view``.

        Returns:
            True when the selection changed to ``index``.
        """
        if 0 <= index < len(view):
            self._selected = index
            return True
        return False

    def clear(self) -> None:
        self._selected = NO_SELECTION

    def signature_of(self, row: Row, headers: Sequence[str]) -> str:
        return row_signature(row, headers, self.selection_key)

    def capture(self, view: FilteredView, headers: Sequence[str]) -> SelectionMemo:
        """Remember the current selection before ``view`` is discarded."""
        if 0 <= self._selected < len(view):
            return SelectionMemo(
                index=self._selected,
                signature=self.signature_of(view.rows[self._selected], headers),
            )
        return SelectionMemo(index=self._selected)

    def restore(
        self,
        memo: SelectionMemo,
        view: FilteredView,
        headers: Sequence[str],
    ) -> int:
        """Re-resolve a captured selection against a freshly computed view.

        Args:
            memo: Selection captured from the previous view.
            view: The new view.
            headers: Headers used to compute signatures.

        Returns:
            The new selected index, or NO_SELECTION.
        """
        if memo.signature:
            for index, row in enumerate(view.rows):
                if self.signature_of(row, headers) == memo.signature:
                    self._selected = index
                    return index

        if memo.index == NO_SELECTION or not len(view):
            self._selected = NO_SELECTION
        else:
            self._selected = min(memo.index, len(view) - 1)
        return self._selected

    def source_index(self, view: FilteredView) -> int | None:
        """Raw-store index of the selection, or None when nothing is selected."""
        if self._selected == NO_SELECTION:
            return None
        return view.source_index(self._selected)

    def selected_row(self, view: FilteredView) -> Row | None:
        """The selected row from ``view``, or None."""
        if 0 <= self._selected < len(view):
            return view.rows[self._selected]
        return None


__all__ = ["NO_SELECTION", "SelectionMemo", "SelectionTracker"]
