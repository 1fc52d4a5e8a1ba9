"""Widgets module for OpsDeck.

- data: the virtual data table
- dashboard: DashboardView, the embeddable dashboard
- feedback: filter prompt and fuzzy quick-pick modals
"""

from opsdeck.widgets.dashboard import DashboardView
from opsdeck.widgets.data import VirtualDataTable
from opsdeck.widgets.feedback import FilterPrompt, FuzzySearchModal, FuzzySearchResult

__all__ = [
    "DashboardView",
    "FilterPrompt",
    "FuzzySearchModal",
    "FuzzySearchResult",
    "VirtualDataTable",
]
