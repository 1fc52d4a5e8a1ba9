"""Data display widgets."""

from opsdeck.widgets.data.tables import VirtualDataTable

__all__ = ["VirtualDataTable"]
