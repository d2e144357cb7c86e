import logging

from dto.element import Tag
from extractors.context import EngineContext
from extractors.tree import HierarchyTreeBuilder
from tests.sheets import FIELD_COLUMNS, SheetBuilder


def build(rows, sheet_name="EG-Exclusion grounds", context=None):
    context = context or EngineContext()
    keys = HierarchyTreeBuilder(context, sheet_name).build(rows)
    return context, keys


def test_single_question_criterion():
    rows = (
        SheetBuilder()
        .open("CRITERION", 1, element_code="X1", name="Conviction")
        .inline("QUESTION", 3, property_data_type="AMOUNT")
        .close("CRITERION", 1)
        .rows
    )

    context, keys = build(rows)

    assert keys == ["C1"]
    assert list(context.forest) == ["C1"]
    root = context.forest["C1"]
    assert root.type is Tag.CRITERION
    assert root.tag == "C1 - EG"
    assert root.element_code == "X1"
    assert root.name == "Conviction"
    assert list(root.components) == ["Q1"]
    assert root.components["Q1"].type is Tag.QUESTION
    assert root.components["Q1"].property_data_type == "AMOUNT"


def test_one_subtree_per_criterion_close():
    sheet = SheetBuilder()
    for _ in range(3):
        sheet.open("CRITERION", 2).inline("QUESTION", 3).close("CRITERION", 2)

    context, keys = build(sheet.rows)

    assert keys == ["C1", "C2", "C3"]
    assert len(context.forest) == 3


def test_withdrawn_criterion_numbers_are_skipped():
    context = EngineContext()
    context.criterion_counter = 32
    rows = SheetBuilder().open("CRITERION", 2).close("CRITERION", 2).rows

    _, keys = build(rows, context=context)

    assert keys == ["C34"]


def test_category_follows_sheet_name():
    rows = SheetBuilder().open("CRITERION", 2).close("CRITERION", 2).rows

    sc, _ = build(rows, "SC-Selection criteria")
    other, _ = build(rows, "Other criteria")

    assert sc.forest["C1"].tag == "C1 - SC"
    assert other.forest["C1"].tag == "C1 - OT"


def test_containers_nest_and_leaves_attach_to_the_innermost_open_node():
    rows = (
        SheetBuilder()
        .open("CRITERION", 2)
        .open("REQUIREMENT_GROUP", 3)
        .inline("REQUIREMENT", 4)
        .open("REQUIREMENT_SUBGROUP", 4)
        .inline("REQUIREMENT", 5)
        .close("REQUIREMENT_SUBGROUP", 4)
        .inline("REQUIREMENT", 4)
        .close("REQUIREMENT_GROUP", 3)
        .inline("QUESTION", 3)
        .close("CRITERION", 2)
        .rows
    )

    context, _ = build(rows)

    root = context.forest["C1"]
    assert list(root.components) == ["RG1", "Q1"]
    group = root.components["RG1"]
    assert list(group.components) == ["RQ1", "RSG1", "RQ2"]
    assert list(group.components["RSG1"].components) == ["RQ1"]
    assert root.components["Q1"].components == {}


def test_sibling_identifiers_are_unique():
    rows = (
        SheetBuilder()
        .open("CRITERION", 2)
        .inline("QUESTION", 3)
        .inline("QUESTION", 3)
        .open("QUESTION_GROUP", 3)
        .inline("QUESTION", 4)
        .close("QUESTION_GROUP", 3)
        .open("QUESTION_GROUP", 3)
        .inline("QUESTION", 4)
        .close("QUESTION_GROUP", 3)
        .close("CRITERION", 2)
        .rows
    )

    context, _ = build(rows)

    root = context.forest["C1"]
    assert list(root.components) == ["Q1", "Q2", "QG1", "QG2"]
    assert len(root.components) == 4


def test_level_counters_restart_at_each_criterion():
    rows = (
        SheetBuilder()
        .open("CRITERION", 2)
        .open("REQUIREMENT_GROUP", 3)
        .close("REQUIREMENT_GROUP", 3)
        .open("REQUIREMENT_GROUP", 3)
        .close("REQUIREMENT_GROUP", 3)
        .close("CRITERION", 2)
        .open("CRITERION", 2)
        .open("REQUIREMENT_GROUP", 3)
        .close("REQUIREMENT_GROUP", 3)
        .close("CRITERION", 2)
        .rows
    )

    context, _ = build(rows)

    assert list(context.forest["C1"].components) == ["RG1", "RG2"]
    assert list(context.forest["C2"].components) == ["RG1"]


def test_nested_nodes_default_their_cardinality():
    rows = (
        SheetBuilder()
        .open("CRITERION", 2)
        .open("QUESTION_GROUP", 3)
        .inline("QUESTION", 4, cardinality="0..1")
        .close("QUESTION_GROUP", 3)
        .close("CRITERION", 2)
        .rows
    )

    context, _ = build(rows)

    group = context.forest["C1"].components["QG1"]
    assert group.cardinality == "1"
    assert group.components["Q1"].cardinality == "0..1"
    assert "cardinality" not in context.forest["C1"].attributes


def test_blank_unknown_and_stray_rows_are_inert():
    rows = (
        SheetBuilder()
        .close("REQUIREMENT_GROUP", 3)
        .inline("QUESTION", 3)
        .open("CRITERION", 2)
        .text(c3="just a note")
        .inline("NOT_A_TAG", 3)
        .close("QUESTION_GROUP", 3)
        .inline("QUESTION", 3)
        .close("CRITERION", 2)
        .rows
    )

    context, keys = build(rows)

    assert keys == ["C1"]
    assert list(context.forest["C1"].components) == ["Q1"]


def test_unclosed_criterion_is_discarded():
    rows = SheetBuilder().open("CRITERION", 2).inline("QUESTION", 3).rows

    context, keys = build(rows)

    assert keys == []
    assert context.forest == {}


def test_duplicate_criterion_key_keeps_the_first_subtree():
    context = EngineContext()
    first = SheetBuilder().open("CRITERION", 2, name="First").close("CRITERION", 2).rows
    second = SheetBuilder().open("CRITERION", 2, name="Second").close("CRITERION", 2).rows

    context.begin_workbook()
    build(first, context=context)
    context.begin_workbook()
    _, keys = build(second, context=context)

    assert keys == []
    assert context.forest["C1"].name == "First"
    assert context.duplicate_keys == ["C1"]


def test_criterion_numbers_continue_across_sheets_of_a_workbook():
    context = EngineContext()
    rows = SheetBuilder().open("CRITERION", 2).close("CRITERION", 2).rows

    build(rows, "EG-1", context)
    _, keys = build(rows, "EG-2", context)

    assert keys == ["C2"]


def test_shifted_header_moves_field_columns():
    shifted = {field: col + 10 for field, col in FIELD_COLUMNS.items()}
    rows = (
        SheetBuilder()
        .open("CRITERION", 2, name="Before")
        .close("CRITERION", 2)
        .header(shifted)
        .open("CRITERION", 2, name="After")
        .close("CRITERION", 2)
        .rows
    )

    context, _ = build(rows)

    assert context.forest["C1"].name == "Before"
    assert context.forest["C2"].name == "After"


def test_same_tag_at_two_columns_keeps_both_siblings(caplog):
    rows = (
        SheetBuilder()
        .open("CRITERION", 2)
        .inline("QUESTION", 3, name="first")
        .inline("QUESTION", 4, name="second")
        .close("CRITERION", 2)
        .rows
    )

    with caplog.at_level(logging.WARNING, logger="extractors.tree"):
        context, _ = build(rows)

    components = context.forest["C1"].components
    assert [(key, child.name) for key, child in components.items()] == [
        ("Q1", "first"),
        ("Q2", "second"),
    ]
    assert "renumbered to Q2" in caplog.text
    assert "row 4" in caplog.text
