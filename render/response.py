"""
Response renderer.

Depth-first walk of the criterion forest producing the answers of the
``QualificationApplicationResponse``: one ``cac:TenderingCriterionResponse``
per QUESTION, every other element kind is walked through silently.

Indicator branching: a QUESTION_GROUP / QUESTION_SUBGROUP whose immediate
children include an INDICATOR question with a seller value drops its
``ONTRUE`` child groups when the indicator is false, and its ``ONFALSE``
child groups when it is true.  Each group evaluates its own children only.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional

from lxml import etree

from dto.data_types import PropertyDataType
from dto.element import ElementNode, Tag
from render.constants import CODE_LIST_ATTRS, COUNTRY_LIST_ATTRS, RESPONSE_ID_ATTRS
from render.xml import comment, sub

logger = logging.getLogger(__name__)

_QUESTION_GROUPS = (Tag.QUESTION_GROUP, Tag.QUESTION_SUBGROUP)

_PASS_THROUGH = frozenset({
    Tag.REQUIREMENT_GROUP,
    Tag.REQUIREMENT_SUBGROUP,
    Tag.SUBCRITERION,
    Tag.LEGISLATION,
    Tag.ADDITIONAL_DESCRIPTION_LINE,
    Tag.REQUIREMENT,
    Tag.CAPTION,
})


def indicator_value(group: ElementNode) -> Optional[str]:
    """Seller value of the group's INDICATOR question, lower-cased, if any."""
    value = None
    for child in group.components.values():
        if (
            child.type is Tag.QUESTION
            and PropertyDataType.parse(child.property_data_type) is PropertyDataType.INDICATOR
            and child.seller_value is not None
        ):
            value = child.seller_value.strip().lower()
    return value


def select_branch(group: ElementNode) -> List[ElementNode]:
    """Return the children of *group* that survive indicator branching."""
    children = list(group.components.values())
    indicator = indicator_value(group)
    if indicator is None:
        return children

    def excluded(child: ElementNode) -> bool:
        if child.type not in _QUESTION_GROUPS:
            return False
        return (child.element_code == "ONTRUE" and indicator == "false") or (
            child.element_code == "ONFALSE" and indicator == "true"
        )

    return [child for child in children if not excluded(child)]


# ---------------------------------------------------------------------------
# Answer values of a QUESTION, by property data type
# ---------------------------------------------------------------------------

AnswerWriter = Callable[[etree._Element, ElementNode], None]


def _seller(node: ElementNode, default=None):
    return node.seller_value if node.seller_value else default


def _response_value(response: etree._Element, node: ElementNode) -> etree._Element:
    value = sub(response, "cac:ResponseValue")
    sub(value, "cbc:ID", node.attr("response_content_3"), RESPONSE_ID_ATTRS)
    return value


def _value(name: str, default=None, attrs=None) -> AnswerWriter:
    def write(response: etree._Element, node: ElementNode) -> None:
        sub(_response_value(response, node), name, _seller(node, default), attrs)
    return write


def _answer_period(response: etree._Element, node: ElementNode) -> None:
    period = sub(response, "cac:ApplicablePeriod")
    sub(period, "cbc:StartDate", "2017-01-01")
    sub(period, "cbc:EndDate", "2017-12-12")


def _answer_indicator(response: etree._Element, node: ElementNode) -> None:
    indicator = (node.seller_value or "").strip().lower()
    if indicator not in ("true", "false"):
        indicator = "true"
    sub(_response_value(response, node), "cbc:ResponseIndicator", indicator)


def _answer_code(response: etree._Element, node: ElementNode) -> None:
    attrs = CODE_LIST_ATTRS.get((node.attr("code_list") or "").strip().lower())
    if attrs is None:
        return
    sub(_response_value(response, node), "cbc:ResponseCode", _seller(node, "dummy-value"), attrs)


ANSWER_WRITERS: Dict[PropertyDataType, AnswerWriter] = {
    PropertyDataType.PERIOD: _answer_period,
    PropertyDataType.DESCRIPTION: _value("cbc:Description", "Dummy Description"),
    PropertyDataType.INDICATOR: _answer_indicator,
    PropertyDataType.IDENTIFIER: _value("cbc:ResponseID", "Dummy ID", {"schemeAgencyID": "OP"}),
    PropertyDataType.ECONOMIC_OPERATOR_IDENTIFIER: _value(
        "cbc:ResponseID", "Dummy EO_ID", {"schemeAgencyID": "XXXEOIDXXX"}
    ),
    PropertyDataType.QUAL_IDENTIFIER: _value(
        "cbc:ResponseID", "Dummy QUAL_ID", {"schemeAgencyID": "XXXQUALIDXXX"}
    ),
    PropertyDataType.URL: _value("cbc:ResponseURI", "www.no-such-site.eu"),
    PropertyDataType.AMOUNT: _value("cbc:ResponseAmount", 1000000000, {"currencyID": "EUR"}),
    PropertyDataType.PERCENTAGE: _value("cbc:ResponseNumeric", 3.14, {"format": "PERCENTAGE"}),
    PropertyDataType.QUANTITY_INTEGER: _value("cbc:ResponseQuantity", 42, {"unitCode": "INTEGER"}),
    PropertyDataType.QUANTITY_YEAR: _value("cbc:ResponseQuantity", 2000, {"unitCode": "YEAR"}),
    PropertyDataType.QUANTITY: _value("cbc:ResponseQuantity", 60),
    PropertyDataType.DATE: _value("cbc:ResponseDate", "2000-01-01"),
    PropertyDataType.TIME: _value("cbc:ResponseTime", "00:00:00+00:00"),
    PropertyDataType.CODE_COUNTRY: _value("cbc:ResponseCode", "BEL", COUNTRY_LIST_ATTRS),
    PropertyDataType.CODE: _answer_code,
}


# ---------------------------------------------------------------------------
# Tree walk
# ---------------------------------------------------------------------------


class ResponseRenderer:
    """
    Renders the answers of a criterion forest.

    Evidence identifiers met on the way are collected in ``evidence_ids``
    (one entry per occurrence) for the evidence blocks written after the
    answers.
    """

    def __init__(self) -> None:
        self.evidence_ids: List[str] = []

    def render(self, forest: Mapping[str, ElementNode], parent: etree._Element) -> None:
        for node in forest.values():
            self._render(node, parent, "NONE")

    def _render(self, node: ElementNode, parent: etree._Element, criterion: str) -> None:
        if node.type is Tag.CRITERION:
            for child in node.components.values():
                self._render(child, parent, node.name or node.identifier)
        elif node.type in _QUESTION_GROUPS:
            for child in select_branch(node):
                self._render(child, parent, criterion)
        elif node.type is Tag.QUESTION:
            self._question(node, parent, criterion)
        elif node.type in _PASS_THROUGH:
            for child in node.components.values():
                self._render(child, parent, criterion)
        else:
            logger.debug("No response mapping for %s (%s)", node.type.value, node.identifier)

    def _question(self, node: ElementNode, parent: etree._Element, criterion: str) -> None:
        comment(parent, f"  Answer to Criterion:{criterion}  ")
        comment(parent, f" Property: {node.description} (PropertyID: {node.attr('response_path')}) ")

        response = sub(parent, "cac:TenderingCriterionResponse")
        sub(response, "cbc:ID", node.attr("response_content_1"), RESPONSE_ID_ATTRS)
        sub(response, "cbc:ValidatedCriterionPropertyID", node.attr("response_content_2"), RESPONSE_ID_ATTRS)

        data_type = PropertyDataType.parse(node.property_data_type)
        if data_type is PropertyDataType.EVIDENCE_IDENTIFIER:
            evidence_id = node.attr("response_content_3")
            supplied = sub(response, "cac:EvidenceSupplied")
            sub(supplied, "cbc:ID", evidence_id, {"schemeAgencyID": "OP"})
            if evidence_id:
                self.evidence_ids.append(evidence_id)
            return

        writer = ANSWER_WRITERS.get(data_type) if data_type else None
        if writer is not None:
            writer(response, node)
