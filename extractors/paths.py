"""
Path computer & validator.

Re-derives the "XML PATH like" identifier of every element from the row
stream and compares it with the paths already written in the worksheet:

    C12_SC_SELECTION/RG1/RSG2/RQ1/R3
    └─ root segment: C<n> + namespace code + element code
                     └─ one <abbrev><n> segment per open ancestor
                                           └─ response-cardinality suffixes

Purely diagnostic: the checks never influence tree building or rendering.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from detection.columns import field_value, scan_header
from detection.constants import NAMESPACE_CODES
from detection.markers import classify_row
from dto.cell_row import CellRow
from dto.column_map import ColumnMap
from dto.data_types import PropertyDataType
from dto.diagnostics import PathCheck
from dto.element import Tag
from dto.marker import MarkerKind, TagMarker
from extractors.cardinality import (
    has_parenthetical,
    leaf_suffix,
    response_suffix,
    variant_number,
)
from extractors.context import EngineContext

logger = logging.getLogger(__name__)


class ValidationMode(str, Enum):
    REQUEST = "request"
    RESPONSE = "response"

    @classmethod
    def from_file_name(cls, file_name: str) -> "ValidationMode":
        """Request workbooks carry ``-request-`` in their file name."""
        return cls.REQUEST if "-request-" in file_name else cls.RESPONSE


# Only these groups contribute a suffix to the request-side path
_SUFFIX_GROUPS = (Tag.REQUIREMENT_GROUP, Tag.REQUIREMENT_SUBGROUP)


def namespace_code(sheet_name: str) -> str:
    for prefix, code in NAMESPACE_CODES:
        if sheet_name.startswith(prefix):
            return code
    return ""


def value_suffix(property_data_type: Optional[str]) -> str:
    """Leaf suffix of a response value path, chosen by data type."""
    data_type = PropertyDataType.parse(property_data_type)
    if data_type is PropertyDataType.PERIOD:
        return "/" + Tag.APPLICABLE_PERIOD.abbreviation
    if data_type is PropertyDataType.EVIDENCE_IDENTIFIER:
        return "/" + Tag.EVIDENCE_SUPPLIED.abbreviation
    return "/" + Tag.RESPONSE_VALUE.abbreviation


def open_increments(cardinality: str, mode: ValidationMode) -> bool:
    """
    Whether an open marker advances its level counter.

    Request: only rows without a variant parenthetical advance.
    Response: rows without a parenthetical advance, and so does variant
    ``(1)``; variants ``(2)``.. re-address the number of their ``(1)``.
    """
    if not has_parenthetical(cardinality):
        return True
    if mode is ValidationMode.REQUEST:
        return False
    return variant_number(cardinality) == 1


def _joined(suffixes: List[Tuple[Tag, str]]) -> str:
    return "".join(suffix for _, suffix in suffixes if suffix)


class PathValidator:
    """
    Consumes one sheet's rows and records a ``PathCheck`` per compared path.

    Usage::

        validator = PathValidator(context, "SC-Selection", ValidationMode.RESPONSE)
        checks = validator.validate(rows)
    """

    def __init__(
        self,
        context: EngineContext,
        sheet_name: str,
        mode: ValidationMode,
    ) -> None:
        self.context = context
        self.sheet_name = sheet_name
        self.mode = mode
        self.namespace = namespace_code(sheet_name)
        self.columns = ColumnMap()
        self.checks: List[PathCheck] = []

        self._path: List[str] = []
        # (tag, suffix) pairs; a close pops only when its tag is on top
        self._request_suffixes: List[Tuple[Tag, str]] = []
        self._response_suffixes: List[Tuple[Tag, str]] = []

    @property
    def depth(self) -> int:
        return len(self._path)

    def validate(self, rows: Iterable[CellRow]) -> List[PathCheck]:
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
            logger.debug(
                "[%s] row %d: ignoring unknown tag %r", self.sheet_name, row.index, marker.tag
            )
            return

        if marker.kind is MarkerKind.OPEN:
            self._on_open(tag, marker, row)
        elif marker.kind is MarkerKind.INLINE:
            self._on_inline(tag, marker, row)
        elif marker.kind is MarkerKind.CLOSE:
            self._on_close(tag, marker)

    # ------------------------------------------------------------------
    # Marker handlers
    # ------------------------------------------------------------------

    def _on_open(self, tag: Tag, marker: TagMarker, row: CellRow) -> None:
        cardinality = field_value(row, self.columns, "cardinality")

        if tag is Tag.CRITERION:
            number = self.context.next_criterion_number()
            element_code = field_value(row, self.columns, "element_code")
            self._path.append(f"{tag.abbreviation}{number}{self.namespace}{element_code}")
        else:
            number = self.context.next_sequence(
                marker.column,
                tag.abbreviation,
                increment=open_increments(cardinality, self.mode),
            )
            self._path.append(f"{tag.abbreviation}{number}")

        if tag in _SUFFIX_GROUPS:
            self._request_suffixes.append((tag, response_suffix(cardinality)))
        if self.mode is ValidationMode.RESPONSE:
            self._response_suffixes.append((tag, response_suffix(cardinality)))

        self._check(row, marker, "request_path", "/".join(self._path))

    def _on_inline(self, tag: Tag, marker: TagMarker, row: CellRow) -> None:
        if tag is Tag.CRITERION:
            return
        cardinality = field_value(row, self.columns, "cardinality")

        number = self.context.next_sequence(
            marker.column,
            tag.abbreviation,
            increment=not has_parenthetical(cardinality),
        )
        self._path.append(f"{tag.abbreviation}{number}")
        base = "/".join(self._path)

        computed = base
        if tag is Tag.REQUIREMENT:
            computed = base + _joined(self._request_suffixes) + leaf_suffix(cardinality)
        elif tag is Tag.QUESTION:
            computed = base + _joined(self._request_suffixes)

        if tag is Tag.QUESTION and self.mode is ValidationMode.RESPONSE:
            structural = base + _joined(self._response_suffixes) + "/R1"
            self._check(row, marker, "response_content_1", structural)

            data_type = field_value(row, self.columns, "property_data_type")
            self._check(row, marker, "response_content_3", structural + value_suffix(data_type))

        self._check(row, marker, "request_path", computed)
        self._path.pop()

    def _on_close(self, tag: Tag, marker: TagMarker) -> None:
        if tag is Tag.CRITERION:
            self._reset()
            return

        # children of the closed node restart their numbering
        self.context.drop_level(marker.column + 1)
        if self._path:
            self._path.pop()

        if self._request_suffixes and self._request_suffixes[-1][0] is tag:
            self._request_suffixes.pop()
        if self._response_suffixes and self._response_suffixes[-1][0] is tag:
            self._response_suffixes.pop()

    def _reset(self) -> None:
        self.context.reset_levels()
        self._path = []
        self._request_suffixes = []
        self._response_suffixes = []

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _check(self, row: CellRow, marker: TagMarker, field: str, computed: str) -> None:
        stored = field_value(row, self.columns, field)
        ok = stored == computed
        self.checks.append(
            PathCheck(
                sheet=self.sheet_name,
                row=row.index,
                tag=marker.tag,
                column=marker.column,
                label=marker.label,
                field=field,
                stored=stored,
                computed=computed,
                ok=ok,
            )
        )
        if ok:
            logger.debug("[OK]  %-6s %-60s %s", marker.label or "", stored, marker.tag)
        else:
            logger.warning(
                "[NOK] %-6s %-60s %-60s %s (%s, row %d)",
                marker.label or "",
                stored,
                computed,
                marker.tag,
                field,
                row.index,
            )
