"""
Row classifier.

A row's nesting depth is the column of its first bracket-delimited cell:

    {CRITERION                 open    - children follow on later rows
        {QUESTION}             inline  - complete leaf on one row
    CRITERION}                 close   - ends the innermost open node

Cells that carry a brace only in the middle of the text are ordinary
content and the scan continues past them.
"""

from __future__ import annotations

from typing import Optional

from detection.constants import SCAN_WINDOW
from dto.cell_row import CellRow
from dto.marker import BLANK_MARKER, MarkerKind, TagMarker


def _strip_braces(text: str) -> str:
    return text.replace("{", "", 1).replace("}", "", 1).strip()


def marker_kind(text: str) -> Optional[MarkerKind]:
    """Return the marker kind of a single trimmed cell value, if any."""
    opens = text.startswith("{")
    closes = text.endswith("}")
    if opens and closes:
        return MarkerKind.INLINE
    if opens:
        return MarkerKind.OPEN
    if closes:
        return MarkerKind.CLOSE
    return None


def classify_row(row: CellRow, window: int = SCAN_WINDOW) -> TagMarker:
    """
    Classify *row* by the first marker cell in columns ``1..window``.

    Returns ``BLANK_MARKER`` when no marker is found; consumers must skip
    such rows without touching any stacked state.
    """
    for col in range(1, window + 1):
        value = row.value(col)
        if value is None:
            continue
        value = value.strip()
        if not value:
            continue

        kind = marker_kind(value)
        if kind is None:
            continue

        return TagMarker(
            kind=kind,
            tag=_strip_braces(value),
            column=col,
            label=row.value(col - 1),
        )

    return BLANK_MARKER
