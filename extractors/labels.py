"""
Tag-label checker.

Every marker cell is preceded by a short label (``C12``, ``RG2``, ``Q5``).
The rules the labels follow:
  - labels are unique per level inside one criterion;
  - numbering of the same tag on the same level is continuous;
  - CRITERION numbering is continuous over the whole workbook, skipping
    withdrawn numbers.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from detection.columns import field_value, scan_header
from detection.markers import classify_row
from dto.cell_row import CellRow
from dto.column_map import ColumnMap
from dto.diagnostics import LabelCheck
from dto.element import Tag
from dto.marker import MarkerKind, TagMarker
from extractors.cardinality import has_parenthetical
from extractors.context import EngineContext
from extractors.paths import ValidationMode, open_increments

logger = logging.getLogger(__name__)


class TagLabelChecker:

    def __init__(self, context: EngineContext, sheet_name: str) -> None:
        self.context = context
        self.sheet_name = sheet_name
        self.columns = ColumnMap()
        self.checks: List[LabelCheck] = []

    def check(self, rows: Iterable[CellRow]) -> List[LabelCheck]:
        self.context.begin_sheet()
        for row in rows:
            self.consume(row)
        return self.checks

    def consume(self, row: CellRow) -> None:
        self.columns = scan_header(row, self.columns)

        marker = classify_row(row)
        if marker.is_blank:
            return
        tag = Tag.parse(marker.tag)
        if tag is None:
            return

        cardinality = field_value(row, self.columns, "cardinality")

        if marker.kind is MarkerKind.CLOSE:
            if tag is Tag.CRITERION:
                self.context.reset_levels()
            else:
                self.context.drop_level(marker.column + 1)
            return

        if marker.kind is MarkerKind.OPEN and tag is Tag.CRITERION:
            number = self.context.next_criterion_number()
        elif marker.kind is MarkerKind.OPEN:
            # labels follow the response numbering of repeated variants
            number = self.context.next_sequence(
                marker.column,
                tag.abbreviation,
                increment=open_increments(cardinality, ValidationMode.RESPONSE),
            )
        else:
            number = self.context.next_sequence(
                marker.column,
                tag.abbreviation,
                increment=not has_parenthetical(cardinality),
            )

        self._record(row, marker, f"{tag.abbreviation}{number}")

    def _record(self, row: CellRow, marker: TagMarker, expected: str) -> None:
        ok = (marker.label or "") == expected
        self.checks.append(
            LabelCheck(
                sheet=self.sheet_name,
                row=row.index,
                tag=marker.tag,
                column=marker.column,
                label=marker.label,
                expected=expected,
                ok=ok,
            )
        )
        indent = "\t" * max(marker.column - 2, 0)
        if ok:
            logger.debug("[OK]  %s\t%s%s", marker.label, indent, marker.tag)
        else:
            logger.warning(
                "[NOK] %s\t%s%s (expected %s, row %d)",
                marker.label,
                indent,
                marker.tag,
                expected,
                row.index,
            )
