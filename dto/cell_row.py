"""
Row-level DTOs for questionnaire worksheets.

A worksheet is reduced to an ordered list of sparse rows: only cells with
non-empty (trimmed) text are kept, addressed by their 1-based column index.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel


class CellRow(BaseModel):
    """One physical worksheet row."""

    # 1-based physical row number, for diagnostics
    index: int

    # 1-based column -> trimmed text
    cells: Dict[int, str] = {}

    def value(self, column: int) -> Optional[str]:
        if column <= 0:
            return None
        return self.cells.get(column)


class SheetRows(BaseModel):
    """All rows of a single worksheet, in physical order."""

    name: str
    rows: List[CellRow] = []
