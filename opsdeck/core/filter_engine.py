"""FilterEngine - live text filtering over the raw row store.

The table filter is a case-insensitive substring match against every cell:
a row is kept when any of its cells contains the query. Filtering never
re-fetches and never mutates the raw rows; it produces a read-only
FilteredView plus the map from filtered positions back to raw positions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from opsdeck.core.signature import Row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilteredView:
    """Read-only projection of the raw store.

    Attributes:
        rows: The rows visible under the current query.
        source_indices: Raw-store position of each visible row, or None when
            no filter is active and the view is the raw store itself.
    """

    rows: tuple[Row, ...] = ()
    source_indices: tuple[int, ...] | None = None

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_identity(self) -> bool:
        """Whether positions map one-to-one onto the raw store."""
        return self.source_indices is None

    def source_index(self, position: int) -> int | None:
        """Resolve a filtered position to its raw-store index.

        Args:
            position: Index into ``rows``.

        Returns:
            The raw-store index, or None if ``position`` is out of range.
        """
        if position < 0 or position >= len(self.rows):
            return None
        if self.source_indices is None:
            return position
        return self.source_indices[position]


def row_matches(row: Row, lowered_query: str) -> bool:
    """Return True when any cell of ``row`` contains ``lowered_query``."""
    return any(lowered_query in cell.lower() for cell in row)


class FilterEngine:
    """Holds the active query and projects raw rows through it."""

    def __init__(self) -> None:
        self._query: str = ""

    @property
    def query(self) -> str:
        """The active (trimmed) query, empty when no filter is set."""
        return self._query

    def is_filtered(self) -> bool:
        """Return True while a non-empty query is active."""
        return self._query != ""

    @staticmethod
    def normalize(query: str) -> str:
        """Trim surrounding whitespace from a query."""
        return query.strip()

    def set_query(self, query: str) -> str:
        """Store a new query.

        Args:
            query: The raw query text.

        Returns:
            The normalized query that is now active.
        """
        self._query = self.normalize(query)
        return self._query

    def clear(self) -> None:
        """Drop the active query."""
        self.set_query("")

    def apply(self, raw: Sequence[Row]) -> FilteredView:
        """Project ``raw`` through the active query.

        Args:
            raw: The complete raw row store.

        Returns:
            A new FilteredView. With no query this is the raw store with
            identity indices.
        """
        if not self._query:
            return FilteredView(rows=tuple(raw), source_indices=None)

        lowered = self._query.lower()
        rows: list[Row] = []
        indices: list[int] = []
        for index, row in enumerate(raw):
            if row_matches(row, lowered):
                rows.append(row)
                indices.append(index)

        logger.debug("Filter %r kept %d/%d rows", self._query, len(rows), len(raw))
        return FilteredView(rows=tuple(rows), source_indices=tuple(indices))


__all__ = ["FilterEngine", "FilteredView", "row_matches"]
