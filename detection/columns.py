"""
Label-based column discovery.

Two pure phases: ``scan_header`` turns a row into a new ``ColumnMap``
snapshot (any cell whose text equals a known label moves that field to the
cell's column), and ``extract_fields`` reads the discovered fields of a row
against a snapshot.
"""

from __future__ import annotations

from typing import Dict, Optional

from detection.constants import FIELD_LABELS
from dto.cell_row import CellRow
from dto.column_map import ColumnMap

_LABEL_TO_FIELD: Dict[str, str] = {label: field for field, label in FIELD_LABELS.items()}


def scan_header(row: CellRow, previous: Optional[ColumnMap] = None) -> ColumnMap:
    """Return the column map in effect after *row* has been seen."""
    previous = previous or ColumnMap()

    found: Dict[str, int] = {}
    for col in sorted(row.cells):
        field = _LABEL_TO_FIELD.get(row.cells[col].strip())
        if field is not None and field not in found:
            found[field] = col

    return previous.merged(found)


def extract_fields(row: CellRow, columns: ColumnMap) -> Dict[str, str]:
    """Return ``field -> text`` for every discovered, non-empty field."""
    fields: Dict[str, str] = {}
    for field in FIELD_LABELS:
        col = columns.column(field)
        if not col:
            continue
        value = row.value(col)
        if value is not None and value.strip():
            fields[field] = value.strip()
    return fields


def field_value(row: CellRow, columns: ColumnMap, field: str) -> str:
    """Return one field's trimmed text, or ``""`` when absent."""
    col = columns.column(field)
    if not col:
        return ""
    return (row.value(col) or "").strip()
