"""Framework-independent view-state engine.

- dashboard: DashboardCore, the composition root plugins instantiate
- refresh_engine: raw row store, refresh, auto-refresh and pagination
- filter_engine / selection / signature: filtered view and selection identity
- navigation: view history and breadcrumbs
- virtual_table: lazy cell provider
- surface: rendering protocols
"""

from opsdeck.core.dashboard import DashboardCore
from opsdeck.core.errors import (
    ConcurrencyBusyError,
    ConfigurationError,
    DashboardError,
    FetchError,
    FetchTimeoutError,
    UnhandledAction,
)
from opsdeck.core.filter_engine import FilteredView, FilterEngine
from opsdeck.core.navigation import NavigationStack
from opsdeck.core.refresh_engine import RefreshEngine, RefreshState
from opsdeck.core.selection import SelectionTracker
from opsdeck.core.signature import row_signature
from opsdeck.core.view_factory import create_table_view
from opsdeck.core.virtual_table import VirtualTableContent

__all__ = [
    "ConcurrencyBusyError",
    "ConfigurationError",
    "DashboardCore",
    "DashboardError",
    "FetchError",
    "FetchTimeoutError",
    "FilterEngine",
    "FilteredView",
    "NavigationStack",
    "RefreshEngine",
    "RefreshState",
    "SelectionTracker",
    "UnhandledAction",
    "VirtualTableContent",
    "create_table_view",
    "row_signature",
]
