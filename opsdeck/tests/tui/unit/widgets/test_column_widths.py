"""Tests for table column width allocation."""

from __future__ import annotations

import pytest

from opsdeck.widgets.data.tables.virtual_data_table import column_widths


@pytest.mark.unit
@pytest.mark.fast
class TestColumnWidths:
    """Tests for column_widths()."""

    def test_proportional_split(self) -> None:
        """Test weighted widths with gaps and remainder."""
        assert column_widths([2, 1, 1], 41) == [19, 9, 11]

    def test_widths_fill_usable_space(self) -> None:
        """Test that widths plus gaps add up to the total width."""
        widths = column_widths([2, 1, 1, 1], 100)
        assert sum(widths) + 3 == 100

    def test_narrow_width(self) -> None:
        """Test that every column keeps at least one cell."""
        assert column_widths([1, 1], 0) == [1, 1]

    def test_no_columns(self) -> None:
        assert column_widths([], 80) == []
