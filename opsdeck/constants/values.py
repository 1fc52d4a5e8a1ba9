"""Scalar constants: titles, key names, markup styles."""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "OpsDeck"

# ============================================================================
# Standard key names (as shown in the help panel)
# ============================================================================

KEY_REFRESH: Final = "R"
KEY_HELP: Final = "?"
KEY_FILTER: Final = "/"
KEY_BACK: Final = "ESC"
KEY_LOAD_MORE: Final = "PgDn"

STANDARD_KEYS: Final = (KEY_REFRESH, KEY_HELP, KEY_BACK, KEY_FILTER, KEY_LOAD_MORE)

# ============================================================================
# Panel titles
# ============================================================================

HELP_TITLE: Final = "Keybindings"
HELP_TITLE_EXPANDED: Final = "Keybindings (expanded)"

# ============================================================================
# Markup styles
# ============================================================================

BREADCRUMB_SEPARATOR: Final = " [yellow]>[/] "
BREADCRUMB_CURRENT_STYLE: Final = "black on dark_orange"
BREADCRUMB_PREVIOUS_STYLE: Final = "black on cyan"
HEADER_CELL_STYLE: Final = "bold yellow"
DATA_CELL_STYLE: Final = "cyan"
SELECTED_ROW_STYLE: Final = "bold black on cyan"

__all__ = [
    "APP_TITLE",
    "BREADCRUMB_CURRENT_STYLE",
    "BREADCRUMB_PREVIOUS_STYLE",
    "BREADCRUMB_SEPARATOR",
    "DATA_CELL_STYLE",
    "HEADER_CELL_STYLE",
    "HELP_TITLE",
    "HELP_TITLE_EXPANDED",
    "KEY_BACK",
    "KEY_FILTER",
    "KEY_HELP",
    "KEY_LOAD_MORE",
    "KEY_REFRESH",
    "SELECTED_ROW_STYLE",
    "STANDARD_KEYS",
]
