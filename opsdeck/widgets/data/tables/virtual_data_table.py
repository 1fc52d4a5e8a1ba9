"""VirtualDataTable widget - line-rendered table fed by VirtualTableContent.

Only the visible lines are materialized: ``render_line`` asks the attached
VirtualTableContent for the cells of one table row at a time. Row 0 (the
header) stays pinned to the top line; data rows scroll beneath it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.text import Text
from textual.geometry import Size
from textual.message import Message
from textual.scroll_view import ScrollView
from textual.strip import Strip

from opsdeck.constants.values import SELECTED_ROW_STYLE
from opsdeck.core.virtual_table import VirtualTableContent
from opsdeck.keyboard import TABLE_BINDINGS

logger = logging.getLogger(__name__)

_COLUMN_GAP = 1


def column_widths(weights: Sequence[int], width: int) -> list[int]:
    """Split ``width`` between columns in proportion to ``weights``.

    Gaps between columns are taken out first; the last column absorbs
    rounding so the widths always add up.
    """
    if not weights:
        return []
    usable = max(len(weights), width - _COLUMN_GAP * (len(weights) - 1))
    total = sum(weights)
    widths = [max(1, usable * weight // total) for weight in weights]
    widths[-1] = max(1, usable - sum(widths[:-1]))
    return widths


class VirtualDataTable(ScrollView, can_focus=True):
    """Table widget implementing the dashboard table surface.

    CSS Classes: widget-virtual-data-table

    Example:
        ```python
        table = VirtualDataTable(id="dashboard-table")
        content = VirtualTableContent()
        table.attach_content(content)
        content.set_headers(["name", "status"])
        content.set_data(rows)
        table.set_row_count(content.row_count)
        ```
    """

    DEFAULT_CSS = """
    VirtualDataTable {
        height: 1fr;
        width: 1fr;
        min-height: 3;
        overflow-x: hidden;
        overflow-y: auto;
        border: round $accent;
        border-title-align: center;
        background: $surface;
    }
    VirtualDataTable:focus {
        border: round $accent-lighten-2;
    }
    """

    BINDINGS = TABLE_BINDINGS

    class CursorMoved(Message):
        """Posted when the cursor moves to another data row.

        Attributes:
            row: Data row index (header excluded).
        """

        def __init__(self, table: VirtualDataTable, row: int) -> None:
            super().__init__()
            self.table = table
            self.row = row

    class RowActivated(Message):
        """Posted when the cursor row is confirmed with Enter."""

        def __init__(self, table: VirtualDataTable, row: int) -> None:
            super().__init__()
            self.table = table
            self.row = row

    def __init__(
        self,
        *,
        id: str | None = None,
        classes: str = "",
    ) -> None:
        super().__init__(id=id, classes=f"widget-virtual-data-table {classes}".strip())
        self._content = VirtualTableContent()
        self._row_count = 1
        self._cursor_row = -1

    # =========================================================================
    # Table surface
    # =========================================================================

    def attach_content(self, content: VirtualTableContent) -> None:
        self._content = content
        self.set_row_count(content.row_count)

    def set_headers(self, headers: Sequence[str]) -> None:
        self.refresh()

    def set_row_count(self, count: int) -> None:
        """Set the total row count, header row included."""
        self._row_count = max(1, count)
        self.virtual_size = Size(self.size.width, self._row_count)
        if self._cursor_row >= self.data_row_count:
            self._cursor_row = self.data_row_count - 1
        self.refresh()

    def select(self, row: int) -> None:
        """Move the cursor to data ``row`` without posting messages."""
        if row < 0 or row >= self.data_row_count:
            self._cursor_row = -1
        else:
            self._cursor_row = row
            self._scroll_to_cursor()
        self.refresh()

    def set_title(self, title: str) -> None:
        self.border_title = title

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def content(self) -> VirtualTableContent:
        return self._content

    @property
    def cursor_row(self) -> int:
        """Data row under the cursor, or -1."""
        return self._cursor_row

    @property
    def data_row_count(self) -> int:
        return self._row_count - 1

    # =========================================================================
    # Cursor actions
    # =========================================================================

    def action_cursor_up(self) -> None:
        self._move_cursor(self._cursor_row - 1)

    def action_cursor_down(self) -> None:
        self._move_cursor(self._cursor_row + 1)

    def action_cursor_home(self) -> None:
        self._move_cursor(0)

    def action_cursor_end(self) -> None:
        self._move_cursor(self.data_row_count - 1)

    def action_page_up(self) -> None:
        self._move_cursor(self._cursor_row - max(1, self._visible_data_rows()))

    def action_select_cursor(self) -> None:
        if self._cursor_row >= 0:
            self.post_message(self.RowActivated(self, self._cursor_row))

    def _move_cursor(self, row: int) -> None:
        if self.data_row_count <= 0:
            return
        row = min(max(row, 0), self.data_row_count - 1)
        if row == self._cursor_row:
            return
        self._cursor_row = row
        self._scroll_to_cursor()
        self.refresh()
        self.post_message(self.CursorMoved(self, row))

    def _visible_data_rows(self) -> int:
        return max(0, self.scrollable_content_region.height - 1)

    def _scroll_to_cursor(self) -> None:
        visible = self._visible_data_rows()
        if visible <= 0 or self._cursor_row < 0:
            return
        top = round(self.scroll_offset.y)
        if self._cursor_row < top:
            self.scroll_to(y=self._cursor_row, animate=False)
        elif self._cursor_row >= top + visible:
            self.scroll_to(y=self._cursor_row - visible + 1, animate=False)

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_line(self, y: int) -> Strip:
        """Line API: render visible line ``y``."""
        width = self.scrollable_content_region.width
        if y == 0:
            table_row = 0
        else:
            table_row = round(self.scroll_offset.y) + y
        if table_row >= self._row_count or self._content.column_count == 0:
            return Strip.blank(width, self.rich_style)

        line = self._render_row(table_row, width)
        segments = list(line.render(self.app.console))
        return Strip(segments).crop_extend(0, width, self.rich_style)

    def _render_row(self, table_row: int, width: int) -> Text:
        content = self._content
        weights = [content.expansion(column) for column in range(content.column_count)]
        widths = column_widths(weights, width)

        line = Text(no_wrap=True, end="")
        for column, column_width in enumerate(widths):
            if column:
                line.append(" " * _COLUMN_GAP)
            cell = content.get_cell(table_row, column)
            text = cell.to_text() if cell is not None else Text("")
            text.truncate(column_width, overflow="ellipsis", pad=True)
            line.append_text(text)

        if table_row - 1 == self._cursor_row and table_row > 0:
            line.stylize(SELECTED_ROW_STYLE)
        return line

    def on_resize(self) -> None:
        self.virtual_size = Size(self.size.width, self._row_count)


__all__ = ["VirtualDataTable", "column_widths"]
