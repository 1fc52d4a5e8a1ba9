"""Data table widgets for the dashboard."""

from opsdeck.widgets.data.tables.virtual_data_table import VirtualDataTable

__all__ = ["VirtualDataTable"]
