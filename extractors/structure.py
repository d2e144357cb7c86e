"""
Structure reports over the raw marker stream.

  - ``outline_sheet``   one line per marker, indented by column, with the
                        row's cardinality.
  - ``ChildStructure``  for every open tag, the distinct ``TAG  cardinality``
                        pairs found directly below it, across all sheets.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from detection.columns import field_value, scan_header
from detection.markers import classify_row
from dto.cell_row import CellRow
from dto.column_map import ColumnMap
from dto.diagnostics import OutlineLine
from dto.element import Tag
from dto.marker import MarkerKind

logger = logging.getLogger(__name__)

# Shown instead of a missing cardinality
_NO_CARDINALITY = "?!?"


def outline_sheet(sheet_name: str, rows: Iterable[CellRow]) -> List[OutlineLine]:
    columns = ColumnMap()
    lines: List[OutlineLine] = []
    for row in rows:
        columns = scan_header(row, columns)
        marker = classify_row(row)
        if marker.is_blank:
            continue
        lines.append(
            OutlineLine(
                sheet=sheet_name,
                row=row.index,
                depth=max(marker.column - 2, 0),
                tag=marker.tag,
                cardinality=field_value(row, columns, "cardinality"),
            )
        )
    return lines


def format_outline(lines: Iterable[OutlineLine]) -> str:
    return "\n".join(
        ("\t" * line.depth + f"{line.tag}\t{line.cardinality}").rstrip() for line in lines
    )


class ChildStructure:
    """Accumulates the parent -> child tag relation over several sheets."""

    def __init__(self) -> None:
        self.children: Dict[str, List[str]] = {}
        self.missing_cardinality: List[str] = []

    def add_sheet(self, sheet_name: str, rows: Iterable[CellRow]) -> None:
        columns = ColumnMap()
        # (tag, column) of the open markers, innermost last
        stack: List[Tuple[str, int]] = []

        for row in rows:
            columns = scan_header(row, columns)
            marker = classify_row(row)
            if marker.is_blank:
                continue

            cardinality = field_value(row, columns, "cardinality")
            parent = stack[-1][0] if stack else None

            if marker.kind is MarkerKind.CLOSE:
                while stack and stack[-1][1] >= marker.column:
                    closed, _ = stack.pop()
                    if closed == marker.tag:
                        break
                continue

            if marker.kind is MarkerKind.OPEN:
                self.children.setdefault(marker.tag, [])

            if parent is not None:
                entry = f"{marker.tag}  {cardinality or _NO_CARDINALITY}"
                if entry not in self.children[parent]:
                    self.children[parent].append(entry)

            if not cardinality and marker.tag != Tag.CRITERION.value:
                missing = f"{parent or '-'}:{marker.tag}"
                logger.warning("[%s] row %d: no cardinality for %s", sheet_name, row.index, missing)
                self.missing_cardinality.append(missing)

            if marker.kind is MarkerKind.OPEN:
                stack.append((marker.tag, marker.column))


def format_children(children: Dict[str, List[str]]) -> str:
    lines: List[str] = []
    for parent, entries in children.items():
        lines.append(parent)
        lines.extend(f"\t{entry}" for entry in entries)
    return "\n".join(lines)
