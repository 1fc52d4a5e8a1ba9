"""Screens for OpsDeck.

- dashboard_screen: DashboardScreen, a screen hosting one DashboardView
- mixins: WorkerMixin for thread-worker fetches

Import screens from their modules; widgets depend on the mixins package, so
this package does not import its screens eagerly.
"""
