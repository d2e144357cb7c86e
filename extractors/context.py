"""
EngineContext: the state shared by every sheet of a conversion run.

Holds the workbook-wide CRITERION counter, the per-(column, tag) level
counters, and the forest of finished CRITERION subtrees.  Callers reset it
explicitly at workbook, sheet and criterion boundaries.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from detection.constants import INVALID_CRITERION_NUMBERS
from dto.element import ElementNode

logger = logging.getLogger(__name__)


class EngineContext:

    def __init__(self) -> None:
        self.criterion_counter: int = 0
        self.level_counters: Dict[Tuple[int, str], int] = {}
        self.forest: Dict[str, ElementNode] = {}
        self.duplicate_keys: List[str] = []

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------

    def begin_workbook(self) -> None:
        """CRITERION numbering is continuous over one workbook."""
        self.criterion_counter = 0
        self.reset_levels()

    def begin_sheet(self) -> None:
        self.reset_levels()

    def reset_levels(self) -> None:
        self.level_counters.clear()

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def next_criterion_number(self) -> int:
        self.criterion_counter += 1
        while self.criterion_counter in INVALID_CRITERION_NUMBERS:
            self.criterion_counter += 1
        return self.criterion_counter

    def next_sequence(self, column: int, abbreviation: str, increment: bool = True) -> int:
        """
        Sequence number of a tag at a column.

        The first occurrence is always 1; later ones advance only when
        *increment* is set, so repeated variants can share a number.
        """
        key = (column, abbreviation)
        if key not in self.level_counters:
            self.level_counters[key] = 1
        elif increment:
            self.level_counters[key] += 1
        return self.level_counters[key]

    def drop_level(self, column: int) -> None:
        for key in [k for k in self.level_counters if k[0] == column]:
            del self.level_counters[key]

    # ------------------------------------------------------------------
    # Forest
    # ------------------------------------------------------------------

    def file_criterion(self, key: str, root: ElementNode) -> bool:
        """
        Add a finished CRITERION subtree to the forest.

        The first subtree filed under a key wins; a later one is rejected,
        logged and recorded in ``duplicate_keys``.
        """
        if key in self.forest:
            logger.warning(
                "Duplicate criterion key %s (%s) - keeping the first occurrence",
                key,
                root.name,
            )
            self.duplicate_keys.append(key)
            return False
        self.forest[key] = root
        return True
