"""Tests for DashboardCore: the public contract plugin views program against."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from unittest.mock import MagicMock

import pytest

from opsdeck.constants.enums import DispatchStrategy
from opsdeck.constants.values import HELP_TITLE, HELP_TITLE_EXPANDED
from opsdeck.core.dashboard import DashboardCore, format_info_map
from opsdeck.core.errors import UnhandledAction
from opsdeck.core.surface import NullPanelSurface, NullTableSurface
from opsdeck.core.view_factory import create_table_view
from opsdeck.keyboard import KeyEvent
from opsdeck.models.settings import DashboardSettings, TableViewConfig

ROWS = [["1", "apple"], ["2", "banana"], ["3", "cherry"]]


class ActionRecorder:
    """Action delegate that records calls and declines selected actions."""

    def __init__(self, decline: tuple[str, ...] = ()) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.decline = decline

    def __call__(self, action: str, payload: Mapping[str, Any]) -> None:
        self.calls.append((action, dict(payload)))
        if action in self.decline:
            raise UnhandledAction(action)


# =============================================================================
# Data, filtering and rendering
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestDataAndFilter:
    """Tests for data and filter operations on the core."""

    def test_attach_renders_current_state(
        self,
        core: DashboardCore,
        table_surface: NullTableSurface,
        panel_surface: NullPanelSurface,
    ) -> None:
        """Test that attached surfaces receive headers, rows and help."""
        assert table_surface.headers == ["id", "name"]
        assert table_surface.row_count == 4
        assert table_surface.title == "[yellow]Fruit[/]"
        assert table_surface.content is core.content
        assert panel_surface.help_title == HELP_TITLE
        assert "[bold magenta]<R>[/]" in panel_surface.help

    def test_filter_and_clear(self, core: DashboardCore, table_surface: NullTableSurface) -> None:
        """Test filtering by 'an' then clearing."""
        assert core.set_filter_query("an")
        assert core.get_table_data() == [["2", "banana"]]
        assert core.is_filtered()
        assert core.get_filter_query() == "an"
        assert table_surface.row_count == 2
        assert table_surface.title == "[yellow]Fruit[/] [dim](filter: an)[/]"

        assert core.clear_filter()
        assert core.get_table_data() == ROWS
        assert not core.is_filtered()
        assert table_surface.title == "[yellow]Fruit[/]"
        assert core.messages.last.endswith("[yellow]Filter cleared")

    def test_whitespace_query_clears(self, core: DashboardCore) -> None:
        """Test that a blank query is the same as clearing."""
        core.set_filter_query("an")
        core.set_filter_query("   ")
        assert not core.is_filtered()
        assert core.get_table_data() == ROWS

    def test_content_serves_filtered_rows(self, core: DashboardCore) -> None:
        """Test that the cell provider follows the filtered view."""
        core.set_filter_query("cherry")
        cell = core.content.get_cell(1, 1)
        assert cell is not None
        assert cell.text == "cherry"
        assert core.content.get_cell(2, 1) is None

    def test_append_and_update(self, core: DashboardCore) -> None:
        """Test append_data and update_row through the core."""
        core.append_data([["4", "date"]])
        assert core.get_table_data()[-1] == ["4", "date"]
        assert core.update_row(0, ["1", "apricot"])
        assert core.get_table_data()[0] == ["1", "apricot"]
        assert not core.update_row(10, ["x", "y"])

    def test_set_table_title(self, core: DashboardCore, table_surface: NullTableSurface) -> None:
        """Test that title changes are escaped and rendered."""
        core.set_table_title("Fruit [basket]")
        assert table_surface.title == "[yellow]Fruit \\[basket][/]"

    def test_refresh_through_core(self, core: DashboardCore) -> None:
        """Test a synchronous refresh replacing the data."""
        core.set_refresh_callback(lambda: [["9", "fig"]])
        core.refresh()
        assert core.get_table_data() == [["9", "fig"]]

    def test_set_lazy_loader_adds_help_entry(
        self, core: DashboardCore, panel_surface: NullPanelSurface
    ) -> None:
        """Test that enabling pagination registers PgDn."""
        assert not core.has_lazy_loader()
        core.set_lazy_loader(2, lambda offset, limit: ROWS[offset : offset + limit])
        assert core.has_lazy_loader()
        assert "PgDn" in core.bindings
        assert "<PgDn>" in panel_surface.help

    def test_headless_core(self) -> None:
        """Test that a core works without any surface attached."""
        core = DashboardCore("Headless")
        core.set_headers(["a"])
        core.set_data([["x"]])
        assert core.get_table_data() == [["x"]]
        assert core.get_headers() == ["a"]
        core.destroy()


# =============================================================================
# Selection and actions
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestSelection:
    """Tests for cursor tracking, row selection and the action delegate."""

    def test_select_row_payload(self, core: DashboardCore) -> None:
        """Test the rowSelected action and row callback."""
        actions = ActionRecorder()
        callback = MagicMock()
        core.set_action_callback(actions)
        core.set_row_selected_callback(callback)

        assert core.select_row(1)
        callback.assert_called_once_with(1)
        assert actions.calls == [
            (
                "rowSelected",
                {
                    "rowIndex": 1,
                    "rowData": ["2", "banana"],
                    "namedData": {"id": "2", "name": "banana"},
                },
            )
        ]
        assert core.get_selected_row_index() == 1
        assert core.get_selected_row_data() == ["2", "banana"]
        assert core.content.selected == 1

    def test_select_out_of_range(self, core: DashboardCore) -> None:
        """Test that invalid rows are not selected."""
        actions = ActionRecorder()
        core.set_action_callback(actions)
        assert not core.select_row(7)
        assert actions.calls == []
        assert core.get_selected_row_index() is None
        assert core.get_selected_row_data() is None

    def test_move_cursor_is_silent(self, core: DashboardCore) -> None:
        """Test that cursor moves fire no callbacks."""
        actions = ActionRecorder()
        core.set_action_callback(actions)
        core.move_cursor(2)
        assert actions.calls == []
        assert core.get_selected_row_data() == ["3", "cherry"]

    def test_selected_index_is_raw_under_filter(self, core: DashboardCore) -> None:
        """Test that the selected index maps back to the raw store."""
        core.set_filter_query("cherry")
        core.select_row(0)
        assert core.get_selected_row_index() == 2

    def test_selection_survives_refresh(self, core: DashboardCore) -> None:
        """Test that the selected row is found again after reordering."""
        core.set_selection_key("id")
        core.move_cursor(1)
        core.set_refresh_callback(lambda: [ROWS[2], ROWS[0], ROWS[1]])
        core.refresh()
        assert core.get_selected_row_data() == ["2", "banana"]
        assert core.get_selected_row_index() == 2

    def test_row_callback_failure_is_logged(self, core: DashboardCore) -> None:
        """Test that a failing row callback does not stop the action."""
        actions = ActionRecorder()
        core.set_action_callback(actions)
        core.set_row_selected_callback(MagicMock(side_effect=RuntimeError("nope")))

        assert core.select_row(0)
        assert [name for name, _ in actions.calls] == ["rowSelected"]
        assert any(
            "[red]ERROR[/] Row selection callback failed: nope" in line
            for line in core.messages.lines
        )

    def test_emit_action_results(self, core: DashboardCore) -> None:
        """Test accepted, declined and failing delegates."""
        assert not core.emit_action("custom", {})

        core.set_action_callback(ActionRecorder(decline=("custom",)))
        assert not core.emit_action("custom", {})
        assert core.emit_action("other", {})

        core.set_action_callback(MagicMock(side_effect=ValueError("bad")))
        assert not core.emit_action("other", {})

    def test_payload_without_headers(self) -> None:
        """Test that namedData is omitted without headers."""
        core = DashboardCore("Bare")
        actions = ActionRecorder()
        core.set_action_callback(actions)
        core.set_data([["a", "b"]])
        core.select_row(0)
        assert actions.calls == [("rowSelected", {"rowIndex": 0, "rowData": ["a", "b"]})]
        core.destroy()


# =============================================================================
# Keys
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestKeys:
    """Tests for key handling through the core."""

    def test_help_toggle(self, core: DashboardCore, panel_surface: NullPanelSurface) -> None:
        """Test that '?' switches between compact and expanded help."""
        assert core.handle_key(KeyEvent.character("?")) is None
        assert core.help_expanded
        assert panel_surface.help_title == HELP_TITLE_EXPANDED
        assert "Keybinding Reference:" in panel_surface.help

        core.handle_key(KeyEvent.character("?"))
        assert not core.help_expanded
        assert panel_surface.help_title == HELP_TITLE

    def test_refresh_key(self, core: DashboardCore) -> None:
        """Test that 'R' runs a refresh through the runner."""
        core.set_refresh_callback(lambda: [["7", "kiwi"]])
        assert core.handle_key(KeyEvent.character("R")) is None
        assert core.dispatcher.last_strategy is DispatchStrategy.BUILTIN_DEFAULT
        assert core.get_table_data() == [["7", "kiwi"]]

    def test_filter_key_without_prompt(self, core: DashboardCore) -> None:
        """Test the message when no filter prompt is wired."""
        assert core.handle_key(KeyEvent.character("/")) is None
        assert core.messages.last.endswith("[red]Filter unavailable")

    def test_filter_key_with_prompt(self, core: DashboardCore) -> None:
        """Test that the prompt is pre-filled and its answer is trimmed."""
        seen: list[str] = []

        def prompt(current: str, submit) -> None:
            seen.append(current)
            submit("  cher ")

        core.set_filter_query("a")
        core.filter_prompt = prompt
        core.handle_key(KeyEvent.character("/"))
        assert seen == ["a"]
        assert core.get_filter_query() == "cher"
        assert core.get_table_data() == [["3", "cherry"]]

    def test_direct_handler(self, core: DashboardCore) -> None:
        """Test that a registered handler runs and the delegate is skipped."""
        handler = MagicMock()
        actions = ActionRecorder()
        core.set_action_callback(actions)
        core.add_key_binding("x", "Extra", handler)

        assert core.handle_key(KeyEvent.character("x")) is None
        handler.assert_called_once_with()
        assert core.dispatcher.last_strategy is DispatchStrategy.DIRECT_HANDLER
        assert actions.calls == []

    def test_failing_handler_is_consumed(self, core: DashboardCore) -> None:
        """Test that handler errors are logged and the key still consumed."""
        core.add_key_binding("x", "Extra", MagicMock(side_effect=RuntimeError("kaput")))
        assert core.handle_key(KeyEvent.character("x")) is None
        assert core.messages.last.endswith("Key handler for x failed: kaput")

    def test_keypress_action(self, core: DashboardCore) -> None:
        """Test that a handler-less binding is offered to the delegate."""
        actions = ActionRecorder()
        core.set_action_callback(actions)
        core.add_key_binding("d", "Describe")

        assert core.handle_key(KeyEvent.character("d")) is None
        assert actions.calls == [("keypress", {"key": "d"})]
        assert core.dispatcher.last_strategy is DispatchStrategy.ACTION_CALLBACK

    def test_declined_keypress_falls_back_to_builtin(self, core: DashboardCore) -> None:
        """Test the built-in default after the delegate declines."""
        core.set_action_callback(ActionRecorder(decline=("keypress",)))
        core.handle_key(KeyEvent.character("?"))
        assert core.help_expanded
        assert core.dispatcher.last_strategy is DispatchStrategy.BUILTIN_DEFAULT

    def test_registered_key_without_any_handler_is_consumed(self, core: DashboardCore) -> None:
        """Test that registered keys never leak to the outer handler."""
        core.add_key_binding("d", "Describe")
        assert core.handle_key(KeyEvent.character("d")) is None

    def test_unregistered_key_passes_through(self, core: DashboardCore) -> None:
        """Test that unknown keys are returned unchanged."""
        event = KeyEvent.character("z")
        assert core.handle_key(event) is event

    def test_outer_handler(self) -> None:
        """Test that forwarded events reach the outer handler."""
        outer = MagicMock(return_value=None)
        core = DashboardCore("Outer", outer_key_handler=outer)
        event = KeyEvent.other("f5")
        assert core.handle_key(event) is None
        outer.assert_called_once_with(event)
        core.destroy()

    def test_clear_key_bindings(self, core: DashboardCore, panel_surface: NullPanelSurface) -> None:
        """Test that only standard keys survive clearing."""
        core.add_key_binding("x", "Extra", MagicMock())
        assert "<x>" in panel_surface.help

        core.clear_key_bindings()
        assert "x" not in core.bindings
        assert "R" in core.bindings
        assert "<x>" not in panel_surface.help
        event = KeyEvent.character("x")
        assert core.handle_key(event) is event

    def test_page_down(self, core: DashboardCore) -> None:
        """Test PgDn with and without a paginated loader."""
        event = KeyEvent.page_down()
        assert core.handle_key(event) is event

        source = [[str(i), f"item-{i}"] for i in range(5)]
        core.set_lazy_loader(2, lambda offset, limit: source[offset : offset + limit])
        core.refresh()
        assert core.handle_key(event) is None
        assert core.get_table_data() == source[:4]


# =============================================================================
# Navigation
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestNavigation:
    """Tests for the navigation stack and back-navigation."""

    def test_escape_at_root_forwards(self, core: DashboardCore) -> None:
        """Test that Escape with nowhere to go back is forwarded."""
        event = KeyEvent.escape()
        assert core.handle_key(event) is event
        core.push_view("root")
        assert core.handle_key(event) is event

    def test_escape_pops_and_emits(self, core: DashboardCore, panel_surface: NullPanelSurface) -> None:
        """Test back-navigation and its actions."""
        actions = ActionRecorder()
        core.set_action_callback(actions)
        core.push_view("pods")
        core.push_view("pod nginx")
        assert "pod nginx" in panel_surface.breadcrumbs

        assert core.handle_key(KeyEvent.escape()) is None
        assert core.get_current_view() == "pods"
        assert actions.calls == [
            ("back", {"from": "pod nginx", "to": "pods"}),
            ("navigate_back", {"current_view": "pods"}),
        ]
        assert panel_surface.breadcrumbs == "[black on dark_orange]pods[/]"

    def test_breadcrumbs(self, core: DashboardCore, panel_surface: NullPanelSurface) -> None:
        """Test breadcrumb markup for a two-level stack."""
        core.set_view_stack(["pods", "logs"])
        assert panel_surface.breadcrumbs == (
            "[black on cyan]pods[/] [yellow]>[/] [black on dark_orange]logs[/]"
        )

    def test_stack_operations(self, core: DashboardCore) -> None:
        """Test pop, clear and copy between cores."""
        assert core.pop_view() == ""
        core.set_view_stack(["a", "b", "c"])
        assert core.pop_view() == "c"
        core.clear_views()
        assert core.navigation.views == ["a"]
        assert core.pop_view() == ""

        other = DashboardCore("Other")
        other.set_view_stack(["x", "y"])
        core.copy_navigation_stack_from(other)
        assert core.navigation.views == ["x", "y"]
        other.set_view_stack(["z"])
        assert core.navigation.views == ["x", "y"]
        other.destroy()

    def test_expanded_help_tracks_view(
        self, core: DashboardCore, panel_surface: NullPanelSurface
    ) -> None:
        """Test that expanded help shows the current view."""
        core.toggle_help_expanded()
        core.push_view("services")
        assert panel_surface.help.endswith("[yellow]Current View:[/] services")


# =============================================================================
# Panels and lifecycle
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestPanels:
    """Tests for info/log panels and lifecycle."""

    def test_info_map(self, core: DashboardCore, panel_surface: NullPanelSurface) -> None:
        """Test aligned, sorted info rendering."""
        core.set_info_map({"context": "prod", "ns": "default", "": "x", "empty": ""})
        assert panel_surface.info == (
            "[bold cyan]context:[/] [bold white]prod[/]\n"
            "[bold cyan]ns:[/]      [bold white]default[/]"
        )

    def test_format_info_map_empty(self) -> None:
        """Test that nothing renders for an empty map."""
        assert format_info_map({}) == ""

    def test_info_text(self, core: DashboardCore, panel_surface: NullPanelSurface) -> None:
        """Test raw info text."""
        core.set_info_text("[b]hello[/]")
        assert panel_surface.info == "[b]hello[/]"

    def test_log_and_clear(self, core: DashboardCore, panel_surface: NullPanelSurface) -> None:
        """Test that the log panel mirrors the message log."""
        core.log("hello")
        assert panel_surface.log[-1].endswith("hello")
        core.clear_logs()
        assert panel_surface.log == []

    def test_detach_keeps_state(
        self, core: DashboardCore, table_surface: NullTableSurface
    ) -> None:
        """Test that a detached core keeps its data."""
        core.detach()
        core.set_data([["5", "elderberry"]])
        assert table_surface.row_count == 4
        assert core.get_table_data() == [["5", "elderberry"]]

    def test_activate_starts_auto_refresh(self) -> None:
        """Test that settings can turn auto-refresh on."""
        core = DashboardCore(
            "Auto", DashboardSettings(auto_refresh=True, refresh_interval=60)
        )
        core.activate()
        try:
            assert core.engine.is_auto_refreshing()
        finally:
            core.destroy()
        assert not core.engine.is_auto_refreshing()

    def test_activate_default_is_manual(self, core: DashboardCore) -> None:
        """Test that auto-refresh is off by default."""
        core.activate()
        assert not core.engine.is_auto_refreshing()


# =============================================================================
# View factory
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestCreateTableView:
    """Tests for create_table_view()."""

    def test_applies_config(self, table_surface: NullTableSurface) -> None:
        """Test headers, data, bindings and callbacks from config."""
        selected = MagicMock()
        config = TableViewConfig(
            title="Pods",
            headers=["name", "status"],
            key_descriptions={"d": "Describe"},
            initial_data=[["nginx", "Running"]],
            on_row_selected=selected,
        )
        core = create_table_view(config, table=table_surface)
        try:
            assert core.title == "Pods"
            assert core.get_headers() == ["name", "status"]
            assert core.get_table_data() == [["nginx", "Running"]]
            assert core.bindings.description("d") == "Describe"
            assert table_surface.title == "[yellow]Pods[/]"
            core.select_row(0)
            selected.assert_called_once_with(0)
            assert not core.engine.is_auto_refreshing()
        finally:
            core.destroy()

    def test_auto_refresh_needs_callback(self) -> None:
        """Test that auto-refresh starts only with a refresh callback."""
        without = create_table_view(TableViewConfig(title="A", auto_refresh=True))
        assert not without.engine.is_auto_refreshing()
        without.destroy()

        config = TableViewConfig(
            title="B", auto_refresh=True, refresh_seconds=30, refresh=lambda: []
        )
        with_refresh = create_table_view(config)
        try:
            assert with_refresh.engine.is_auto_refreshing()
        finally:
            with_refresh.destroy()
