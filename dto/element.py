"""
Element tree DTOs.

    Forest  (Dict[str, ElementNode], keyed "C1", "C2", ...)
      └─ ElementNode  type=CRITERION, identifier="C1", tag="C1 - EG"
           └─ components: {"RG1": ElementNode, "Q1": ElementNode, ...}

``components`` keeps insertion order, which is the order the rows appear in
the worksheet and therefore the order the renderers emit.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel


class Tag(str, Enum):
    CRITERION = "CRITERION"
    ADDITIONAL_DESCRIPTION_LINE = "ADDITIONAL_DESCRIPTION_LINE"
    SUBCRITERION = "SUBCRITERION"
    LEGISLATION = "LEGISLATION"
    REQUIREMENT_GROUP = "REQUIREMENT_GROUP"
    QUESTION_GROUP = "QUESTION_GROUP"
    REQUIREMENT_SUBGROUP = "REQUIREMENT_SUBGROUP"
    QUESTION_SUBGROUP = "QUESTION_SUBGROUP"
    CAPTION = "CAPTION"
    REQUIREMENT = "REQUIREMENT"
    QUESTION = "QUESTION"
    # Response-only kinds: they only appear as path suffixes
    RESPONSE = "RESPONSE"
    RESPONSE_VALUE = "RESPONSE VALUE"
    EVIDENCE_SUPPLIED = "EVIDENCE SUPPLIED"
    APPLICABLE_PERIOD = "APPLICABLE PERIOD"

    @property
    def abbreviation(self) -> str:
        return TAG_ABBREVIATIONS[self]

    @classmethod
    def parse(cls, text: str) -> Optional["Tag"]:
        """Return the Tag for a marker's text, or ``None`` if unknown."""
        try:
            return cls(text.strip())
        except ValueError:
            return None


TAG_ABBREVIATIONS: Dict[Tag, str] = {
    Tag.CRITERION: "C",
    Tag.ADDITIONAL_DESCRIPTION_LINE: "ADL",
    Tag.SUBCRITERION: "SBC",
    Tag.LEGISLATION: "L",
    Tag.REQUIREMENT_GROUP: "RG",
    Tag.QUESTION_GROUP: "QG",
    Tag.REQUIREMENT_SUBGROUP: "RSG",
    Tag.QUESTION_SUBGROUP: "QSG",
    Tag.CAPTION: "CA",
    Tag.REQUIREMENT: "RQ",
    Tag.QUESTION: "Q",
    Tag.RESPONSE: "R",
    Tag.RESPONSE_VALUE: "RV",
    Tag.EVIDENCE_SUPPLIED: "RES",
    Tag.APPLICABLE_PERIOD: "RAP",
}

# Tags that open a subtree spanning several rows
CONTAINER_TAGS = frozenset({
    Tag.SUBCRITERION,
    Tag.REQUIREMENT_GROUP,
    Tag.QUESTION_GROUP,
    Tag.REQUIREMENT_SUBGROUP,
    Tag.QUESTION_SUBGROUP,
})

# Tags that describe a complete node on a single row
LEAF_TAGS = frozenset({
    Tag.ADDITIONAL_DESCRIPTION_LINE,
    Tag.LEGISLATION,
    Tag.CAPTION,
    Tag.QUESTION,
    Tag.REQUIREMENT,
})


class Category(str, Enum):
    """Criterion category, derived from the worksheet name."""

    EXCLUSION_GROUNDS = "EG"
    SELECTION_CRITERIA = "SC"
    OTHER = "OT"

    @classmethod
    def from_sheet_name(cls, sheet_name: str) -> "Category":
        if sheet_name.startswith("EG"):
            return cls.EXCLUSION_GROUNDS
        if sheet_name.startswith("SC"):
            return cls.SELECTION_CRITERIA
        return cls.OTHER


class ElementNode(BaseModel):
    """A questionnaire element recovered from one marker row."""

    type: Tag
    identifier: str

    # field name (see detection.constants.FIELD_LABELS) -> cell text
    attributes: Dict[str, str] = {}

    # child identifier -> child node, in worksheet order
    components: Dict[str, "ElementNode"] = {}

    # Only set on CRITERION roots, e.g. "C12 - SC"
    tag: Optional[str] = None

    def attr(self, field: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(field, default)

    @property
    def name(self) -> Optional[str]:
        return self.attributes.get("name")

    @property
    def description(self) -> Optional[str]:
        return self.attributes.get("description")

    @property
    def cardinality(self) -> str:
        return self.attributes.get("cardinality", "")

    @property
    def element_code(self) -> Optional[str]:
        return self.attributes.get("element_code")

    @property
    def property_data_type(self) -> Optional[str]:
        return self.attributes.get("property_data_type")

    @property
    def seller_value(self) -> Optional[str]:
        return self.attributes.get("seller_value")

    def attach(self, child: "ElementNode") -> None:
        self.components[child.identifier] = child

    def is_category(self, category: Category) -> bool:
        return bool(self.tag) and self.tag.endswith(f"- {category.value}")
