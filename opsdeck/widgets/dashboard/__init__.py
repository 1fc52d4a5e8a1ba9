"""Dashboard view widgets."""

from opsdeck.widgets.dashboard.dashboard_view import DashboardView

__all__ = ["DashboardView"]
