"""Content-derived row identity used to restore selection after mutations."""

from __future__ import annotations

from collections.abc import Sequence

from opsdeck.constants.limits import SIGNATURE_COLUMNS

Row = Sequence[str]


def row_signature(
    row: Row,
    headers: Sequence[str],
    selection_key: str | None = None,
) -> str:
    """Return the signature identifying ``row``.

    When ``selection_key`` names a header column that the row has a cell for,
    that cell is the signature. Otherwise the first (up to three) cells are
    joined, each followed by ``|``.

    Args:
        row: The row cells.
        headers: The table headers the row is interpreted against.
        selection_key: Optional column name whose value identifies a row.

    Returns:
        The signature string. Empty for an empty row without a key column.
    """
    if selection_key:
        for index, header in enumerate(headers):
            if header == selection_key and index < len(row):
                return row[index]

    return "".join(f"{cell}|" for cell in row[:SIGNATURE_COLUMNS])


__all__ = ["Row", "row_signature"]
