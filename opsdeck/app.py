"""Main application class for the OpsDeck demo host."""

from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from opsdeck.constants import APP_TITLE
from opsdeck.demo import DemoPlugin, DemoProcessSource
from opsdeck.keyboard.app import APP_BINDINGS
from opsdeck.models.settings import ConfigLoadError, DashboardSettings
from opsdeck.models.settings_loader import load_settings
from opsdeck.screens.dashboard_screen import DashboardScreen
from opsdeck.widgets.feedback import FuzzySearchModal, FuzzySearchResult

logger = logging.getLogger(__name__)


class DashboardApp(App[None]):
    """TUI application hosting the demo dashboard."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = [
        *APP_BINDINGS,
        Binding("ctrl+f", "search", "Search"),
    ]

    settings: DashboardSettings

    def __init__(
        self,
        settings_path: Path | None = None,
        source: DemoProcessSource | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.settings_path = settings_path
        self._settings_error: str | None = None
        self._load_settings()
        self.plugin = DemoPlugin(self.settings, source)

    def _load_settings(self) -> None:
        """Load settings, falling back to defaults when the file is invalid."""
        try:
            self.settings = load_settings(self.settings_path)
        except ConfigLoadError as e:
            logger.warning("Using default settings: %s", e)
            self._settings_error = str(e)
            self.settings = DashboardSettings()

    def on_mount(self) -> None:
        self.push_screen(DashboardScreen(self.plugin.core))
        if self._settings_error:
            self.notify(self._settings_error, title="Settings", severity="warning")

    def action_search(self) -> None:
        """Open the fuzzy quick-pick and filter by the chosen process name."""

        def on_pick(result: FuzzySearchResult | None) -> None:
            if result is None:
                return
            _, item = result
            self.plugin.core.set_filter_query(item.name)

        self.push_screen(
            FuzzySearchModal("Find process", self.plugin.search_items()),
            callback=on_pick,
        )

    def action_quit(self) -> None:  # type: ignore[override]
        """Quit the application."""
        self.exit()


__all__ = [
    "DashboardApp",
]
