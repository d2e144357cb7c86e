from lxml import etree

from dto.element import ElementNode, Tag
from render.constants import NAMESPACES
from render.request import RequestRenderer, write_expected_value

NS = {"cac": NAMESPACES["cac"], "cbc": NAMESPACES["cbc"]}


def node(tag, identifier, children=(), criterion_tag=None, **attributes):
    element = ElementNode(type=tag, identifier=identifier, attributes=attributes, tag=criterion_tag)
    for child in children:
        element.attach(child)
    return element


def criterion(*children, category="EG", **attributes):
    return node(Tag.CRITERION, "C1", children, criterion_tag=f"C1 - {category}", **attributes)


def render(*roots):
    parent = etree.Element("root")
    RequestRenderer().render({root.identifier: root for root in roots}, parent)
    return parent


def comments(element):
    return [c.text for c in element if c.tag is etree.Comment]


def test_single_question_yields_one_property_without_expected_value():
    root = criterion(
        node(Tag.QUESTION, "Q1", property_data_type="AMOUNT", request_path="C1_EG_X1/Q1"),
        element_code="X1",
        name="Conviction",
    )

    parent = render(root)

    criteria = parent.findall("cac:TenderingCriterion", NS)
    assert len(criteria) == 1
    assert criteria[0].findtext("cbc:CriterionTypeCode", namespaces=NS) == "X1"
    assert criteria[0].findtext("cbc:Name", namespaces=NS) == "Conviction"

    properties = criteria[0].findall(".//cac:TenderingCriterionProperty", NS)
    assert len(properties) == 1
    prop = properties[0]
    assert prop.findtext("cbc:ID", namespaces=NS) == "C1_EG_X1/Q1"
    assert prop.findtext("cbc:TypeCode", namespaces=NS) == "QUESTION"
    assert prop.findtext("cbc:ValueDataTypeCode", namespaces=NS) == "AMOUNT"
    assert prop.find("cbc:ExpectedAmount", NS) is None
    assert " Criterion: Conviction " in comments(parent)


def test_alternate_variant_groups_are_skipped_with_their_subtree():
    root = criterion(
        node(Tag.REQUIREMENT_GROUP, "RG1", [node(Tag.REQUIREMENT, "RQ1")], cardinality="(1)"),
        node(Tag.REQUIREMENT_GROUP, "RG2", [node(Tag.REQUIREMENT, "RQ1")], cardinality="(2)"),
        node(Tag.QUESTION_SUBGROUP, "QSG1", [node(Tag.QUESTION, "Q1")], cardinality="(4)"),
    )

    parent = render(root)

    assert len(parent.findall(".//cac:TenderingCriterionPropertyGroup", NS)) == 1
    assert parent.find(".//cac:SubsidiaryTenderingCriterionPropertyGroup", NS) is None
    assert len(parent.findall(".//cac:TenderingCriterionProperty", NS)) == 1


def test_subgroups_and_group_type_codes():
    root = criterion(
        node(
            Tag.QUESTION_GROUP,
            "QG1",
            [node(Tag.QUESTION_SUBGROUP, "QSG1", [node(Tag.CAPTION, "CA1")], element_code="ONTRUE")],
            element_code="ON*",
        )
    )

    parent = render(root)

    group = parent.find(".//cac:TenderingCriterionPropertyGroup", NS)
    assert group.findtext("cbc:PropertyGroupTypeCode", namespaces=NS) == "ON*"
    subgroup = group.find("cac:SubsidiaryTenderingCriterionPropertyGroup", NS)
    assert subgroup.findtext("cbc:PropertyGroupTypeCode", namespaces=NS) == "ONTRUE"
    caption = subgroup.find("cac:TenderingCriterionProperty", NS)
    assert caption.findtext("cbc:ValueDataTypeCode", namespaces=NS) == "NONE"


def test_selection_criteria_carry_a_lot_reference():
    selection = render(criterion(category="SC"))
    exclusion = render(criterion(category="EG"))

    assert selection.find(".//cac:ProcurementProjectLotReference/cbc:ID", NS) is not None
    assert exclusion.find(".//cac:ProcurementProjectLotReference", NS) is None


def test_legislation_and_description_lines():
    root = criterion(
        node(Tag.ADDITIONAL_DESCRIPTION_LINE, "ADL1", description="Second line"),
        node(Tag.LEGISLATION, "L1"),
        node(Tag.SUBCRITERION, "SBC1", [node(Tag.QUESTION, "Q1")], name="Sub"),
    )

    element = render(root).find("cac:TenderingCriterion", NS)

    assert [d.text for d in element.findall("cbc:Description", NS)] == [None, "Second line"]
    legislation = element.find("cac:Legislation", NS)
    assert legislation.findtext("cbc:Title", namespaces=NS) == "[Legislation Title]"
    assert legislation.findtext("cac:Language/cbc:LocaleCode", namespaces=NS) == "ENG"
    sub = element.find("cac:SubTenderingCriterion", NS)
    assert sub.findtext("cbc:Name", namespaces=NS) == "Sub"
    assert sub.find("cac:TenderingCriterionProperty", NS) is not None


def test_unknown_node_type_becomes_a_comment():
    root = criterion(node(Tag.RESPONSE_VALUE, "RV1"), node(Tag.QUESTION, "Q1"))

    element = render(root).find("cac:TenderingCriterion", NS)

    assert " Unknown RESPONSE VALUE - UBL mapping not implemented " in comments(element)
    assert element.find("cac:TenderingCriterionProperty", NS) is not None


def test_requirement_expected_values():
    amount = etree.Element("prop")
    write_expected_value(amount, node(Tag.REQUIREMENT, "RQ1", property_data_type="AMOUNT"))
    assert amount.find("cbc:ExpectedAmount", NS).text == "0"
    assert amount.find("cbc:ExpectedAmount", NS).get("currencyID") == "EUR"

    period = etree.Element("prop")
    write_expected_value(period, node(Tag.REQUIREMENT, "RQ1", property_data_type="PERIOD"))
    assert period.findtext("cac:ApplicablePeriod/cbc:StartDate", namespaces=NS) == "2000-01-01"
    assert period.findtext("cac:ApplicablePeriod/cbc:EndDate", namespaces=NS) == "2000-12-31"

    percentage = etree.Element("prop")
    write_expected_value(
        percentage, node(Tag.REQUIREMENT, "RQ1", property_data_type="percentage", seller_value="12")
    )
    assert percentage.findtext("cbc:ValueUnitCode", namespaces=NS) == "PERCENTAGE"
    assert percentage.findtext("cbc:ExpectedValueNumeric", namespaces=NS) == "12"


def test_requirement_code_lists():
    known = etree.Element("prop")
    write_expected_value(
        known, node(Tag.REQUIREMENT, "RQ1", property_data_type="CODE", code_list="OCCUPATION")
    )
    assert known.find("cbc:ExpectedCode", NS).get("listAgencyID") == "EMPL"

    unknown = etree.Element("prop")
    write_expected_value(
        unknown, node(Tag.REQUIREMENT, "RQ1", property_data_type="CODE", code_list="Colours")
    )
    assert comments(unknown) == [" Code list Colours not defined "]


def test_requirement_with_undefined_data_type():
    root = criterion(node(Tag.REQUIREMENT, "RQ1", property_data_type="BLOB"), node(Tag.REQUIREMENT, "RQ2"))

    properties = render(root).findall(".//cac:TenderingCriterionProperty", NS)

    assert len(properties) == 2
    for prop in properties:
        assert " PropertyDataType not defined" in comments(prop)
