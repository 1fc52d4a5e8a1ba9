"""Tests for the demo plugin driving a headless DashboardCore."""

from __future__ import annotations

import threading
from collections.abc import Iterator

import pytest

from opsdeck.demo import DETAIL_HEADERS, PROCESS_HEADERS, DemoPlugin, DemoProcessSource
from opsdeck.keyboard import KeyEvent
from opsdeck.models.settings import DashboardSettings


class GatedProcessSource(DemoProcessSource):
    """Demo source whose later pages wait until released."""

    def __init__(self) -> None:
        super().__init__(total=10, latency=0)
        self.started = threading.Event()
        self.release = threading.Event()

    def load_page(self, offset: int, limit: int) -> list[list[str]]:
        if offset > 0:
            self.started.set()
            self.release.wait(5)
        return super().load_page(offset, limit)


@pytest.fixture
def plugin() -> Iterator[DemoPlugin]:
    demo = DemoPlugin(
        DashboardSettings(page_size=4),
        DemoProcessSource(total=10, latency=0),
    )
    demo.core.set_runner(lambda task: task())
    yield demo
    demo.core.destroy()


@pytest.mark.unit
@pytest.mark.fast
class TestDemoPlugin:
    """Tests for DemoPlugin."""

    def test_pages_through_processes(self, plugin: DemoPlugin) -> None:
        """Test first page plus PgDn loads."""
        plugin.core.refresh()
        assert len(plugin.core.get_table_data()) == 4
        plugin.core.handle_key(KeyEvent.page_down())
        plugin.core.handle_key(KeyEvent.page_down())
        assert len(plugin.core.get_table_data()) == 10
        assert plugin.core.get_headers() == PROCESS_HEADERS

    def test_row_selection_opens_details(self, plugin: DemoPlugin) -> None:
        """Test the detail view and back-navigation."""
        plugin.core.refresh()
        first = plugin.core.get_table_data()[0]
        plugin.core.select_row(0)

        assert plugin.core.get_current_view() == f"pid {first[0]}"
        assert plugin.core.get_headers() == DETAIL_HEADERS
        assert plugin.core.get_table_data()[0] == ["pid", first[0]]
        assert not plugin.core.has_lazy_loader()
        assert "PgDn" not in plugin.core.bindings

        assert plugin.core.handle_key(KeyEvent.escape()) is None
        assert plugin.core.get_current_view() == "processes"
        assert plugin.core.get_headers() == PROCESS_HEADERS
        assert len(plugin.core.get_table_data()) == 4
        assert "PgDn" in plugin.core.bindings

    def test_details_key_without_selection(self, plugin: DemoPlugin) -> None:
        """Test the D binding before anything is selected."""
        assert plugin.core.handle_key(KeyEvent.character("D")) is None
        assert plugin.core.messages.last.endswith("[yellow]No process selected")

    def test_details_key_with_selection(self, plugin: DemoPlugin) -> None:
        """Test the D binding on the cursor row."""
        plugin.core.refresh()
        plugin.core.move_cursor(1)
        pid = plugin.core.get_selected_row_data()[0]
        plugin.core.handle_key(KeyEvent.character("D"))
        assert plugin.core.get_current_view() == f"pid {pid}"

    def test_clear_log_key(self, plugin: DemoPlugin) -> None:
        """Test the C binding's direct handler."""
        plugin.core.log("something")
        plugin.core.handle_key(KeyEvent.character("C"))
        assert plugin.core.messages.lines == []

    def test_unknown_action_declined(self, plugin: DemoPlugin) -> None:
        assert not plugin.core.emit_action("custom", {})

    def test_search_items(self, plugin: DemoPlugin) -> None:
        """Test the quick-pick items."""
        names = [item.name for item in plugin.search_items()]
        assert names == sorted(set(names))
        assert names == plugin.source.names()


@pytest.mark.unit
class TestDemoPluginWhileLoading:
    """Tests for opening details while a page is still being fetched."""

    def test_details_wait_for_pending_page(self) -> None:
        """Test that a page in flight never lands in the detail table."""
        source = GatedProcessSource()
        demo = DemoPlugin(DashboardSettings(page_size=4), source)
        demo.core.set_runner(lambda task: task())
        try:
            demo.core.refresh()
            worker = threading.Thread(target=demo.core.load_more)
            worker.start()
            try:
                assert source.started.wait(5)
                demo.core.select_row(0)

                assert demo.core.get_current_view() == "processes"
                assert demo.core.get_headers() == PROCESS_HEADERS
                assert demo.core.has_lazy_loader()
                assert "PgDn" in demo.core.bindings
                assert demo.core.messages.last.endswith(
                    "[yellow]Still loading processes, try again when done"
                )
            finally:
                source.release.set()
                worker.join(5)

            rows = demo.core.get_table_data()
            assert len(rows) == 8
            assert all(len(row) == len(PROCESS_HEADERS) for row in rows)

            demo.core.select_row(0)
            assert demo.core.get_headers() == DETAIL_HEADERS
            assert len(demo.core.get_table_data()) == len(PROCESS_HEADERS)
        finally:
            demo.core.destroy()
