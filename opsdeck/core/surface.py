"""Narrow rendering interfaces the dashboard core draws through.

The core never draws glyphs. A table surface receives headers, a row count
and a cell provider to pull visible cells from; a panel surface receives the
text of the info/help/log panels and breadcrumbs. Null implementations keep
a core usable before (or without) any widget being attached.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from opsdeck.core.virtual_table import VirtualTableContent


@runtime_checkable
class TableSurface(Protocol):
    """A table/grid widget fed lazily from a cell provider."""

    def attach_content(self, content: VirtualTableContent) -> None: ...

    def set_headers(self, headers: Sequence[str]) -> None: ...

    def set_row_count(self, count: int) -> None: ...

    def select(self, row: int) -> None: ...

    def set_title(self, title: str) -> None: ...


@runtime_checkable
class PanelSurface(Protocol):
    """The header panels and breadcrumb line around the table."""

    def set_info(self, text: str) -> None: ...

    def set_help(self, title: str, text: str) -> None: ...

    def set_log(self, lines: Sequence[str]) -> None: ...

    def set_breadcrumbs(self, text: str) -> None: ...


class NullTableSurface:
    """Table surface that only records what it was last told."""

    def __init__(self) -> None:
        self.content: VirtualTableContent | None = None
        self.headers: list[str] = []
        self.row_count: int = 0
        self.selected: int = -1
        self.title: str = ""

    def attach_content(self, content: VirtualTableContent) -> None:
        self.content = content

    def set_headers(self, headers: Sequence[str]) -> None:
        self.headers = list(headers)

    def set_row_count(self, count: int) -> None:
        self.row_count = count

    def select(self, row: int) -> None:
        self.selected = row

    def set_title(self, title: str) -> None:
        self.title = title


class NullPanelSurface:
    """Panel surface that only records what it was last told."""

    def __init__(self) -> None:
        self.info: str = ""
        self.help_title: str = ""
        self.help: str = ""
        self.log: list[str] = []
        self.breadcrumbs: str = ""

    def set_info(self, text: str) -> None:
        self.info = text

    def set_help(self, title: str, text: str) -> None:
        self.help_title = title
        self.help = text

    def set_log(self, lines: Sequence[str]) -> None:
        self.log = list(lines)

    def set_breadcrumbs(self, text: str) -> None:
        self.breadcrumbs = text


__all__ = [
    "NullPanelSurface",
    "NullTableSurface",
    "PanelSurface",
    "TableSurface",
]
