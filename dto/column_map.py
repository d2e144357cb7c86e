"""
Snapshot of where each semantic field lives in the current worksheet.

Header rows re-appear inside a sheet and their columns may shift between
sheets, so a ``ColumnMap`` is never mutated: every rescan returns a new
snapshot that keeps earlier assignments for labels the row does not name.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class ColumnMap(BaseModel):
    model_config = ConfigDict(frozen=True)

    # field name -> 1-based column
    columns: Dict[str, int] = {}

    def column(self, field: str) -> Optional[int]:
        return self.columns.get(field)

    def merged(self, found: Dict[str, int]) -> "ColumnMap":
        if not found:
            return self
        return ColumnMap(columns={**self.columns, **found})
