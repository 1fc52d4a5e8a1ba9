"""OpsDeck - a reusable terminal-dashboard runtime.

Plugins embed a DashboardCore to get consistent navigation, data refresh,
filtering and key handling; DashboardView renders it with Textual.
"""

__version__ = "0.1.0"
