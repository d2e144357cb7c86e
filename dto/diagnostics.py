"""
Diagnostic DTOs produced by the validators and structure reports.

None of these feed back into tree building or rendering; they are written
to the log and, on request, dumped as JSON.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel


class PathCheck(BaseModel):
    """Computed path versus the path stored in the worksheet."""

    sheet: str
    row: int
    tag: str
    column: int
    label: Optional[str] = None
    field: str                  # request_path / response_content_1 / ...
    stored: str = ""
    computed: str
    ok: bool


class LabelCheck(BaseModel):
    """Label written left of a marker versus the recomputed sequence label."""

    sheet: str
    row: int
    tag: str
    column: int
    label: Optional[str] = None
    expected: str
    ok: bool


class OutlineLine(BaseModel):
    """One marker of the indented structure outline."""

    sheet: str
    row: int
    depth: int
    tag: str
    cardinality: str = ""


class CheckReport(BaseModel):
    """Top-level JSON output of the ``check-*`` commands."""

    file_name: str
    mode: str
    path_checks: List[PathCheck] = []
    label_checks: List[LabelCheck] = []

    @property
    def failures(self) -> int:
        return sum(1 for c in self.path_checks if not c.ok) + sum(
            1 for c in self.label_checks if not c.ok
        )


class StructureReport(BaseModel):
    """Top-level JSON output of the ``outline`` / ``structure`` commands."""

    file_name: str
    outline: List[OutlineLine] = []
    children: Dict[str, List[str]] = {}
    missing_cardinality: List[str] = []
