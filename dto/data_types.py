from __future__ import annotations

from enum import Enum
from typing import Optional


class PropertyDataType(str, Enum):
    """Value types a TenderingCriterionProperty can declare."""

    AMOUNT = "AMOUNT"
    IDENTIFIER = "IDENTIFIER"
    EVIDENCE_IDENTIFIER = "EVIDENCE_IDENTIFIER"
    ECONOMIC_OPERATOR_IDENTIFIER = "ECONOMIC_OPERATOR_IDENTIFIER"
    LOT_IDENTIFIER = "LOT_IDENTIFIER"
    QUAL_IDENTIFIER = "QUAL_IDENTIFIER"
    CODE_BOOLEAN = "CODE_BOOLEAN"
    CODE_COUNTRY = "CODE_COUNTRY"
    ECONOMIC_OPERATOR_ROLE_CODE = "ECONOMIC_OPERATOR_ROLE_CODE"
    DESCRIPTION = "DESCRIPTION"
    PERCENTAGE = "PERCENTAGE"
    DATE = "DATE"
    PERIOD = "PERIOD"
    TIME = "TIME"
    QUANTITY_INTEGER = "QUANTITY_INTEGER"
    QUANTITY_YEAR = "QUANTITY_YEAR"
    QUANTITY = "QUANTITY"
    MAXIMUM_AMOUNT = "MAXIMUM_AMOUNT"
    MINIMUM_AMOUNT = "MINIMUM_AMOUNT"
    MAXIMUM_VALUE_NUMERIC = "MAXIMUM_VALUE_NUMERIC"
    MINIMUM_VALUE_NUMERIC = "MINIMUM_VALUE_NUMERIC"
    TRANSLATION_TYPE_CODE = "TRANSLATION_TYPE_CODE"
    COPY_QUALITY_TYPE_CODE = "COPY_QUALITY_TYPE_CODE"
    CERTIFICATION_LEVEL_DESCRIPTION = "CERTIFICATION_LEVEL_DESCRIPTION"
    CODE = "CODE"
    INDICATOR = "INDICATOR"
    URL = "URL"
    NONE = "NONE"

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["PropertyDataType"]:
        if not text:
            return None
        try:
            return cls(text.strip().upper())
        except ValueError:
            return None
