from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class MarkerKind(str, Enum):
    OPEN = "open"        # {TAG   - node continues on the following rows
    INLINE = "inline"    # {TAG}  - complete node on one row
    CLOSE = "close"      # TAG}   - ends the most recently opened node
    BLANK = "blank"      # no marker inside the scan window


class TagMarker(BaseModel):
    """Classification of one row by its first bracket-delimited cell."""

    kind: MarkerKind
    tag: str = ""
    column: int = 0
    label: Optional[str] = None  # text of the cell left of the marker

    @property
    def is_blank(self) -> bool:
        return self.kind is MarkerKind.BLANK


BLANK_MARKER = TagMarker(kind=MarkerKind.BLANK)
