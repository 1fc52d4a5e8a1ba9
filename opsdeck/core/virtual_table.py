"""VirtualTableContent - lazy cell provider for the dashboard table.

Cells are materialized only when the rendering surface asks for them, so
the cost of a frame depends on the visible window, not on the row count.
Row 0 is the header row; data row ``k`` is served as table row ``k + 1``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rich.text import Text

from opsdeck.constants.values import DATA_CELL_STYLE, HEADER_CELL_STYLE
from opsdeck.core.signature import Row


@dataclass(frozen=True)
class TableCell:
    """A single materialized cell."""

    text: str
    style: str = DATA_CELL_STYLE
    selectable: bool = True
    expansion: int = 1

    def to_text(self) -> Text:
        return Text(self.text, style=self.style, no_wrap=True, overflow="ellipsis")


class VirtualTableContent:
    """Serves header and data cells on demand."""

    def __init__(self) -> None:
        self._headers: tuple[str, ...] = ()
        self._data: Sequence[Row] = ()
        self._selected: int = -1

    @property
    def headers(self) -> tuple[str, ...]:
        return self._headers

    def set_headers(self, headers: Sequence[str]) -> None:
        self._headers = tuple(headers)

    def set_data(self, data: Sequence[Row]) -> None:
        self._data = data

    def set_selected(self, row: int) -> None:
        self._selected = row

    @property
    def selected(self) -> int:
        return self._selected

    def get_cell(self, row: int, column: int) -> TableCell | None:
        """Materialize the cell at ``(row, column)``.

        Args:
            row: Table row; 0 is the header row.
            column: Column index into the headers.

        Returns:
            The cell, an empty cell for a short row, or None outside the table.
        """
        if column < 0 or column >= len(self._headers):
            return None

        if row == 0:
            return TableCell(
                text=self._headers[column].upper(),
                style=HEADER_CELL_STYLE,
                selectable=False,
                expansion=self.expansion(column),
            )

        data_row = row - 1
        if data_row < 0 or data_row >= len(self._data):
            return None

        cells = self._data[data_row]
        text = cells[column] if column < len(cells) else ""
        return TableCell(text=text, expansion=self.expansion(column))

    def expansion(self, column: int) -> int:
        """Relative share of spare width for ``column``."""
        return 2 if column == 0 else 1

    @property
    def row_count(self) -> int:
        """Total rows including the header row."""
        return len(self._data) + 1

    @property
    def data_row_count(self) -> int:
        return len(self._data)

    @property
    def column_count(self) -> int:
        return len(self._headers)

    def clear(self) -> None:
        self._data = ()


__all__ = ["TableCell", "VirtualTableContent"]
