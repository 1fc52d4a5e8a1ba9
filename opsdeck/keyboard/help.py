"""Help panel text built from the key binding table."""

from __future__ import annotations

from collections.abc import Mapping

from rich.markup import escape

from opsdeck.constants.defaults import HELP_ROWS_PER_COLUMN_DEFAULT
from opsdeck.constants.values import KEY_BACK, KEY_HELP, KEY_REFRESH
from opsdeck.keyboard.bindings import KeyBinding

_MAX_COLUMNS = 2


def _capitalize(description: str) -> str:
    return description[:1].upper() + description[1:].lower()


def _is_special(key: str) -> bool:
    return len(key) > 1 or any(char in key for char in "^_")


def build_sorted_bindings(descriptions: Mapping[str, str]) -> list[KeyBinding]:
    """Return bindings with capitalized descriptions, plain keys first.

    Single-character keys sort before named keys (``ESC``, ``PgDn``), and
    each group is ordered by key.
    """
    bindings = [KeyBinding(key, _capitalize(text)) for key, text in descriptions.items()]
    return sorted(bindings, key=lambda binding: (_is_special(binding.key), binding.key))


def format_bindings_columns(
    bindings: list[KeyBinding],
    rows_per_column: int = HELP_ROWS_PER_COLUMN_DEFAULT,
) -> str:
    """Lay bindings out column-major in at most two columns."""
    if not bindings:
        return ""

    rows_per_column = max(1, rows_per_column)
    shown = bindings[: rows_per_column * _MAX_COLUMNS]
    width = max(len(binding.description) for binding in shown)

    lines: list[str] = []
    for index, binding in enumerate(shown):
        padding = " " * max(1, width - len(binding.description) + 1)
        entry = f"[bold magenta]<{escape(binding.key)}>[/]  {escape(binding.description)}{padding}"
        row = index % rows_per_column
        if row == len(lines):
            lines.append(entry)
        else:
            lines[row] += entry
    return "\n".join(line.rstrip() for line in lines)


def help_text(
    descriptions: Mapping[str, str],
    rows_per_column: int = HELP_ROWS_PER_COLUMN_DEFAULT,
) -> str:
    """Compact help shown in the header panel."""
    return format_bindings_columns(build_sorted_bindings(descriptions), rows_per_column)


def expanded_help_text(descriptions: Mapping[str, str], current_view: str) -> str:
    """Detailed keybinding reference shown after toggling help."""
    lines = [
        "[yellow]Keybinding Reference:[/]",
        "",
        "[yellow]Standard Navigation:[/]",
        "  [cyan]ESC[/]    - Navigate back to previous view",
        "  [cyan]R[/]      - Refresh current data",
        "  [cyan]?[/]      - Toggle between basic and detailed help",
        "",
        "[yellow]Custom Actions:[/]",
    ]
    for key, description in sorted(descriptions.items()):
        if key in (KEY_REFRESH, KEY_BACK, KEY_HELP):
            continue
        lines.append(f"  [cyan]{escape(key)}[/]      - {escape(description)}")
    lines += [
        "",
        "[yellow]Navigation Tips:[/]",
        "  - Use arrow keys to navigate the table",
        "  - Press Enter to select an item",
        "  - Use ESC to go back through navigation history",
        "",
        f"[yellow]Current View:[/] {escape(current_view)}",
    ]
    return "\n".join(lines)


__all__ = [
    "build_sorted_bindings",
    "expanded_help_text",
    "format_bindings_columns",
    "help_text",
]
