"""
HierarchyTreeBuilder: rebuilds the element tree of one worksheet.

Responsibilities:
  1. Rediscover field columns on every row (header rows repeat per sheet).
  2. Classify the row's tag marker.
  3. Open / attach / close element nodes, tracking the identifiers of the
     currently open ancestors.
  4. File each finished CRITERION subtree into the shared forest.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from detection.columns import extract_fields, scan_header
from detection.markers import classify_row
from dto.cell_row import CellRow
from dto.column_map import ColumnMap
from dto.element import CONTAINER_TAGS, LEAF_TAGS, Category, ElementNode, Tag
from dto.marker import MarkerKind, TagMarker
from extractors.context import EngineContext

logger = logging.getLogger(__name__)


class HierarchyTreeBuilder:
    """
    Consumes one sheet's rows in physical order.

    Usage::

        builder = HierarchyTreeBuilder(context, "EG-Exclusion grounds")
        keys = builder.build(rows)
    """

    def __init__(self, context: EngineContext, sheet_name: str) -> None:
        self.context = context
        self.sheet_name = sheet_name
        self.category = Category.from_sheet_name(sheet_name)
        self.columns = ColumnMap()

        self._root: Optional[ElementNode] = None
        self._root_key: Optional[str] = None
        # identifiers of the open containers, outermost first
        self._ancestors: Tuple[str, ...] = ()
        self._filed: List[str] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, rows: Iterable[CellRow]) -> List[str]:
        """Process every row and return the forest keys filed by this sheet."""
        self.context.begin_sheet()
        for row in rows:
            self.consume(row)
        self.finish()
        return list(self._filed)

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
            if tag is Tag.CRITERION:
                self._open_criterion(row)
            elif tag in CONTAINER_TAGS:
                self._add_child(tag, marker, row, push=True)
        elif marker.kind is MarkerKind.INLINE:
            if tag in LEAF_TAGS:
                self._add_child(tag, marker, row, push=False)
        elif marker.kind is MarkerKind.CLOSE:
            if tag is Tag.CRITERION:
                self._close_criterion()
            elif tag in CONTAINER_TAGS and self._ancestors:
                self._ancestors = self._ancestors[:-1]

    def finish(self) -> None:
        if self._root is not None:
            logger.warning(
                "[%s] criterion %s was never closed - discarding it",
                self.sheet_name,
                self._root_key,
            )
        self._root = None
        self._root_key = None
        self._ancestors = ()

    # ------------------------------------------------------------------
    # CRITERION boundaries
    # ------------------------------------------------------------------

    def _open_criterion(self, row: CellRow) -> None:
        if self._root is not None:
            logger.warning(
                "[%s] row %d: new criterion opened before %s was closed",
                self.sheet_name,
                row.index,
                self._root_key,
            )

        number = self.context.next_criterion_number()
        identifier = f"{Tag.CRITERION.abbreviation}{number}"

        self._root = ElementNode(
            type=Tag.CRITERION,
            identifier=identifier,
            tag=f"{identifier} - {self.category.value}",
            attributes=extract_fields(row, self.columns),
        )
        self._root_key = identifier
        self._ancestors = ()

    def _close_criterion(self) -> None:
        if self._root is None:
            return
        if self.context.file_criterion(self._root_key, self._root):
            self._filed.append(self._root_key)
        self.context.reset_levels()
        self._root = None
        self._root_key = None
        self._ancestors = ()

    # ------------------------------------------------------------------
    # Nested elements
    # ------------------------------------------------------------------

    def _current_parent(self) -> ElementNode:
        node = self._root
        for identifier in self._ancestors:
            node = node.components[identifier]
        return node

    def _add_child(self, tag: Tag, marker: TagMarker, row: CellRow, *, push: bool) -> None:
        if self._root is None:
            logger.debug(
                "[%s] row %d: %s outside of a criterion", self.sheet_name, row.index, tag.value
            )
            return

        parent = self._current_parent()
        number = self.context.next_sequence(marker.column, tag.abbreviation)
        identifier = f"{tag.abbreviation}{number}"
        if identifier in parent.components:
            # same tag opened at another column under this parent
            while identifier in parent.components:
                number = self.context.next_sequence(marker.column, tag.abbreviation)
                identifier = f"{tag.abbreviation}{number}"
            logger.warning(
                "[%s] row %d: %s at column %d clashes with a sibling - renumbered to %s",
                self.sheet_name,
                row.index,
                tag.value,
                marker.column,
                identifier,
            )

        attributes = extract_fields(row, self.columns)
        attributes.setdefault("cardinality", "1")

        node = ElementNode(type=tag, identifier=identifier, attributes=attributes)
        parent.attach(node)

        if push:
            self._ancestors = self._ancestors + (node.identifier,)

