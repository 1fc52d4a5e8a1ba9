"""Fuzzy matching for interactive quick-pick search.

Distinct from the table filter: a candidate matches when the pattern is a
substring of it or when every pattern character appears in it in order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


def fuzzy_match(text: str, pattern: str) -> bool:
    """Case-insensitive substring-or-subsequence match.

    Args:
        text: The candidate text.
        pattern: The typed query.

    Returns:
        True when ``pattern`` is empty, is contained in ``text``, or is a
        subsequence of ``text``.
    """
    if not pattern:
        return True

    text = text.lower()
    pattern = pattern.lower()
    if pattern in text:
        return True

    position = 0
    for char in text:
        if char == pattern[position]:
            position += 1
            if position == len(pattern):
                return True
    return False


@dataclass(frozen=True)
class FuzzySearchItem:
    """An entry offered by a quick-pick search."""

    name: str
    description: str = ""
    data: Any = None


class FuzzyPicker:
    """Tracks the items matching a query and the highlighted match."""

    def __init__(self, items: Sequence[FuzzySearchItem]) -> None:
        self._items = list(items)
        self._query = ""
        self._matches: list[int] = list(range(len(self._items)))
        self.highlighted: int = 0 if self._items else -1

    @property
    def items(self) -> list[FuzzySearchItem]:
        return self._items

    @property
    def query(self) -> str:
        return self._query

    @property
    def matches(self) -> list[int]:
        """Original indices of the items matching the query, in order."""
        return list(self._matches)

    def update(self, query: str) -> list[int]:
        """Re-match against ``query`` and reset the highlight to the top.

        An item matches on its name or its description.
        """
        self._query = query
        pattern = query.strip()
        self._matches = [
            index
            for index, item in enumerate(self._items)
            if fuzzy_match(item.name, pattern) or fuzzy_match(item.description, pattern)
        ]
        self.highlighted = 0 if self._matches else -1
        return self.matches

    def matched_items(self) -> list[FuzzySearchItem]:
        return [self._items[index] for index in self._matches]

    def move(self, delta: int) -> None:
        """Move the highlight, clamped to the match list."""
        if not self._matches:
            self.highlighted = -1
            return
        self.highlighted = max(0, min(self.highlighted + delta, len(self._matches) - 1))

    def resolve(self, position: int | None = None) -> tuple[int, FuzzySearchItem] | None:
        """Map a match position back to ``(original_index, item)``.

        Args:
            position: Position in the match list; the highlight when None.

        Returns:
            The original index and item, or None when nothing is selectable.
        """
        if position is None:
            position = self.highlighted
        if position < 0 or position >= len(self._matches):
            return None
        original = self._matches[position]
        return original, self._items[original]


__all__ = ["FuzzyPicker", "FuzzySearchItem", "fuzzy_match"]
