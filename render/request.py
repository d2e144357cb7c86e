"""
Request renderer.

Depth-first walk of the criterion forest producing the
``QualificationApplicationRequest`` body:

    CRITERION                       -> cac:TenderingCriterion
    SUBCRITERION                    -> cac:SubTenderingCriterion
    LEGISLATION                     -> cac:Legislation
    ADDITIONAL_DESCRIPTION_LINE     -> cbc:Description
    REQUIREMENT_GROUP/QUESTION_GROUP        -> cac:TenderingCriterionPropertyGroup
    REQUIREMENT_SUBGROUP/QUESTION_SUBGROUP  -> cac:SubsidiaryTenderingCriterionPropertyGroup
    QUESTION/CAPTION/REQUIREMENT    -> cac:TenderingCriterionProperty

Only the first variant of a repeated group is issued: groups whose
cardinality names variant (2), (3) or (4) are skipped with their subtree.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Mapping

from lxml import etree

from dto.data_types import PropertyDataType
from dto.element import Category, ElementNode, Tag
from extractors.cardinality import names_alternate_variant
from render.constants import (
    CODE_LIST_ATTRS,
    COUNTRY_LIST_ATTRS,
    CRITERION_ID_ATTRS,
    EO_ROLE_LIST_ATTRS,
    LOT_ID,
    SCHEME_VERSION_ID,
)
from render.xml import comment, sub

logger = logging.getLogger(__name__)

ValueWriter = Callable[[etree._Element, ElementNode], None]


def _op_list(list_id: str) -> Dict[str, str]:
    return {"listID": list_id, "listAgencyID": "OP", "listVersionID": SCHEME_VERSION_ID}


# ---------------------------------------------------------------------------
# Expected values of a REQUIREMENT, by property data type
# ---------------------------------------------------------------------------


def _seller(node: ElementNode, default=None):
    return node.seller_value if node.seller_value else default


def _expected_code_from_list(prop: etree._Element, node: ElementNode) -> None:
    attrs = CODE_LIST_ATTRS.get((node.attr("code_list") or "").strip().lower())
    if attrs is None:
        comment(prop, f" Code list {node.attr('code_list')} not defined ")
        return
    sub(prop, "cbc:ExpectedCode", _seller(node), attrs)


def _expected_period(prop: etree._Element, node: ElementNode) -> None:
    period = sub(prop, "cac:ApplicablePeriod")
    sub(period, "cbc:StartDate", _seller(node, "2000-01-01"))
    sub(period, "cbc:EndDate", _seller(node, "2000-12-31"))


def _expected_percentage(prop: etree._Element, node: ElementNode) -> None:
    sub(prop, "cbc:ValueUnitCode", "PERCENTAGE")
    sub(prop, "cbc:ExpectedValueNumeric", _seller(node, 0))


def _simple(name: str, default=None, attrs=None) -> ValueWriter:
    def write(prop: etree._Element, node: ElementNode) -> None:
        sub(prop, name, _seller(node, default), attrs)
    return write


_EXPECTED_ID = _simple("cbc:ExpectedID", attrs={"schemeAgencyID": "OP"})
_EXPECTED_NUMERIC = _simple("cbc:ExpectedValueNumeric", 0)

EXPECTED_VALUE_WRITERS: Dict[PropertyDataType, ValueWriter] = {
    PropertyDataType.AMOUNT: _simple("cbc:ExpectedAmount", 0, {"currencyID": "EUR"}),
    PropertyDataType.IDENTIFIER: _EXPECTED_ID,
    PropertyDataType.EVIDENCE_IDENTIFIER: _EXPECTED_ID,
    PropertyDataType.ECONOMIC_OPERATOR_IDENTIFIER: _EXPECTED_ID,
    PropertyDataType.LOT_IDENTIFIER: _EXPECTED_ID,
    PropertyDataType.CODE_BOOLEAN: _simple("cbc:ExpectedCode", attrs=_op_list("boolean-gui-control-type")),
    PropertyDataType.CODE_COUNTRY: _simple("cbc:ExpectedCode", attrs=COUNTRY_LIST_ATTRS),
    PropertyDataType.ECONOMIC_OPERATOR_ROLE_CODE: _simple("cbc:ExpectedCode", attrs=EO_ROLE_LIST_ATTRS),
    PropertyDataType.DESCRIPTION: _simple("cbc:ExpectedDescription"),
    PropertyDataType.PERCENTAGE: _expected_percentage,
    PropertyDataType.DATE: _expected_period,
    PropertyDataType.PERIOD: _expected_period,
    PropertyDataType.QUANTITY_INTEGER: _EXPECTED_NUMERIC,
    PropertyDataType.QUANTITY_YEAR: _EXPECTED_NUMERIC,
    PropertyDataType.QUANTITY: _EXPECTED_NUMERIC,
    PropertyDataType.MAXIMUM_AMOUNT: _simple("cbc:MaximumAmount", 0, {"currencyID": "EUR"}),
    PropertyDataType.MINIMUM_AMOUNT: _simple("cbc:MinimumAmount", 0, {"currencyID": "EUR"}),
    PropertyDataType.MAXIMUM_VALUE_NUMERIC: _simple("cbc:MaximumValueNumeric"),
    PropertyDataType.MINIMUM_VALUE_NUMERIC: _simple("cbc:MinimumValueNumeric"),
    PropertyDataType.TRANSLATION_TYPE_CODE: _simple("cbc:TranslationTypeCode"),
    PropertyDataType.COPY_QUALITY_TYPE_CODE: _simple("cbc:CopyQualityTypeCode"),
    PropertyDataType.CERTIFICATION_LEVEL_DESCRIPTION: _simple("cbc:CertificationLevelDescription"),
    PropertyDataType.CODE: _expected_code_from_list,
}


def write_expected_value(prop: etree._Element, node: ElementNode) -> None:
    data_type = PropertyDataType.parse(node.property_data_type)
    writer = EXPECTED_VALUE_WRITERS.get(data_type) if data_type else None
    if writer is None:
        comment(prop, " PropertyDataType not defined")
        return
    writer(prop, node)


# ---------------------------------------------------------------------------
# Tree walk
# ---------------------------------------------------------------------------


class RequestRenderer:
    """
    Renders a criterion forest into a request (or response) document root.

    Usage::

        RequestRenderer().render(context.forest, root)
    """

    def __init__(self) -> None:
        self._handlers: Dict[Tag, Callable[[ElementNode, etree._Element, bool], None]] = {
            Tag.CRITERION: self._criterion,
            Tag.SUBCRITERION: self._subcriterion,
            Tag.LEGISLATION: self._legislation,
            Tag.ADDITIONAL_DESCRIPTION_LINE: self._description_line,
            Tag.REQUIREMENT_GROUP: self._group,
            Tag.QUESTION_GROUP: self._group,
            Tag.REQUIREMENT_SUBGROUP: self._group,
            Tag.QUESTION_SUBGROUP: self._group,
            Tag.QUESTION: self._property_only,
            Tag.CAPTION: self._property_only,
            Tag.REQUIREMENT: self._requirement,
        }

    def render(self, forest: Mapping[str, ElementNode], parent: etree._Element) -> None:
        self._render_all(forest.values(), parent, True)

    def _render_all(self, nodes: Iterable[ElementNode], parent: etree._Element, eg_flag: bool) -> None:
        for node in nodes:
            handler = self._handlers.get(node.type)
            if handler is None:
                logger.warning("No request mapping for %s (%s)", node.type.value, node.identifier)
                comment(parent, f" Unknown {node.type.value} - UBL mapping not implemented ")
                continue
            handler(node, parent, eg_flag)

    # -- containers ----------------------------------------------------

    def _criterion(self, node: ElementNode, parent: etree._Element, eg_flag: bool) -> None:
        comment(parent, f" Criterion: {node.name} ")
        element = sub(parent, "cac:TenderingCriterion")
        sub(element, "cbc:ID", node.attr("request_path"), CRITERION_ID_ATTRS)
        sub(
            element,
            "cbc:CriterionTypeCode",
            node.element_code,
            {
                "listID": "http://publications.europa.eu/resource/authority/criterion",
                "listAgencyID": "OP",
                "listVersionID": "20230315-0",
            },
        )
        sub(element, "cbc:Name", node.name)
        sub(element, "cbc:Description", node.description)

        if node.is_category(Category.SELECTION_CRITERIA):
            lot = sub(element, "cac:ProcurementProjectLotReference")
            sub(lot, "cbc:ID", LOT_ID, CRITERION_ID_ATTRS)

        self._render_all(
            node.components.values(),
            element,
            node.is_category(Category.EXCLUSION_GROUNDS),
        )

    def _subcriterion(self, node: ElementNode, parent: etree._Element, eg_flag: bool) -> None:
        element = sub(parent, "cac:SubTenderingCriterion")
        sub(element, "cbc:ID", node.attr("request_path"), CRITERION_ID_ATTRS)
        sub(element, "cbc:Name", node.name)
        sub(element, "cbc:Description", node.description)
        self._render_all(node.components.values(), element, eg_flag)

    def _legislation(self, node: ElementNode, parent: etree._Element, eg_flag: bool) -> None:
        element = sub(parent, "cac:Legislation")
        sub(element, "cbc:ID", node.attr("request_path"), CRITERION_ID_ATTRS)
        sub(element, "cbc:Title", node.name or "[Legislation Title]")
        sub(element, "cbc:Description", node.description or "[Legislation Description]")
        sub(element, "cbc:JurisdictionLevel", "EU")
        sub(element, "cbc:Article", "[Article, e.g. Article 2.I.a]")
        sub(element, "cbc:URI", "http://eur-lex.europa.eu/")
        language = sub(element, "cac:Language")
        sub(
            language,
            "cbc:LocaleCode",
            "ENG",
            {
                "listID": "http://publications.europa.eu/resource/authority/language",
                "listAgencyID": "ISO",
                "listVersionID": "20220928-0",
            },
        )
        self._render_all(node.components.values(), element, eg_flag)

    def _description_line(self, node: ElementNode, parent: etree._Element, eg_flag: bool) -> None:
        sub(parent, "cbc:Description", node.description)
        self._render_all(node.components.values(), parent, eg_flag)

    def _group(self, node: ElementNode, parent: etree._Element, eg_flag: bool) -> None:
        if names_alternate_variant(node.cardinality):
            logger.debug("Skipping %s %s (%s) in request", node.type.value, node.identifier, node.cardinality)
            return

        if node.type in (Tag.REQUIREMENT_GROUP, Tag.QUESTION_GROUP):
            name = "cac:TenderingCriterionPropertyGroup"
        else:
            name = "cac:SubsidiaryTenderingCriterionPropertyGroup"

        element = sub(parent, name)
        sub(element, "cbc:ID", node.attr("request_path"), CRITERION_ID_ATTRS)
        sub(element, "cbc:PropertyGroupTypeCode", node.element_code, _op_list("property-group-type"))
        self._render_all(node.components.values(), element, eg_flag)

    # -- leaves --------------------------------------------------------

    def _property(self, node: ElementNode, parent: etree._Element) -> etree._Element:
        prop = sub(parent, "cac:TenderingCriterionProperty")
        sub(prop, "cbc:ID", node.attr("request_path"), CRITERION_ID_ATTRS)
        sub(prop, "cbc:Name", node.name)
        sub(prop, "cbc:Description", node.description)
        sub(prop, "cbc:TypeCode", node.type.value, _op_list("criterion-element-type"))
        sub(
            prop,
            "cbc:ValueDataTypeCode",
            node.property_data_type or PropertyDataType.NONE.value,
            _op_list("response-data-type"),
        )
        return prop

    def _property_only(self, node: ElementNode, parent: etree._Element, eg_flag: bool) -> None:
        self._property(node, parent)

    def _requirement(self, node: ElementNode, parent: etree._Element, eg_flag: bool) -> None:
        prop = self._property(node, parent)
        comment(
            prop,
            " No answer is expected here from the economic operator, as this is a REQUIREMENT"
            " issued by the contracting authority. Hence the element \"cbc:ValueDataTypeCode\""
            " contains the type of value of the requirement issued by the contracting authority ",
        )
        write_expected_value(prop, node)
