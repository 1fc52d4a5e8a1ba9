"""DashboardScreen - a full screen hosting one DashboardView."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual.screen import Screen
from textual.widgets import Footer, Header

from opsdeck.core.dashboard import DashboardCore
from opsdeck.widgets.dashboard import DashboardView

if TYPE_CHECKING:
    from textual.app import ComposeResult

logger = logging.getLogger(__name__)


class DashboardScreen(Screen[None]):
    """Screen wrapping a DashboardView with the app header and footer.

    Example:
        ```python
        core = create_table_view(config)
        app.push_screen(DashboardScreen(core))
        ```
    """

    DEFAULT_CSS = """
    DashboardScreen {
        layout: vertical;
    }
    """

    def __init__(self, core: DashboardCore, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.core = core

    @property
    def screen_title(self) -> str:
        return self.core.title

    def compose(self) -> ComposeResult:
        yield Header()
        yield DashboardView(self.core, id="dashboard-view")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.screen_title
        logger.debug("Dashboard screen mounted for %r", self.core.title)

    @property
    def view(self) -> DashboardView:
        return self.query_one("#dashboard-view", DashboardView)


__all__ = ["DashboardScreen"]
