from extractors.structure import ChildStructure, format_children, format_outline, outline_sheet
from tests.sheets import SheetBuilder


def sample_rows():
    return (
        SheetBuilder()
        .open("CRITERION", 2)
        .open("REQUIREMENT_GROUP", 3, cardinality="1")
        .inline("REQUIREMENT", 4, cardinality="1")
        .inline("REQUIREMENT", 4)
        .close("REQUIREMENT_GROUP", 3)
        .inline("QUESTION", 3, cardinality="0..1")
        .close("CRITERION", 2)
        .rows
    )


def test_outline_indents_by_marker_column():
    lines = outline_sheet("EG-1", sample_rows())

    assert [(l.depth, l.tag) for l in lines] == [
        (0, "CRITERION"),
        (1, "REQUIREMENT_GROUP"),
        (2, "REQUIREMENT"),
        (2, "REQUIREMENT"),
        (1, "REQUIREMENT_GROUP"),
        (1, "QUESTION"),
        (0, "CRITERION"),
    ]
    assert lines[1].cardinality == "1"


def test_format_outline():
    text = format_outline(outline_sheet("EG-1", sample_rows()))

    assert text.splitlines()[:3] == ["CRITERION", "\tREQUIREMENT_GROUP\t1", "\t\tREQUIREMENT\t1"]


def test_child_structure_collects_distinct_children():
    structure = ChildStructure()
    structure.add_sheet("EG-1", sample_rows())
    structure.add_sheet("EG-2", sample_rows())

    assert structure.children["CRITERION"] == ["REQUIREMENT_GROUP  1", "QUESTION  0..1"]
    assert structure.children["REQUIREMENT_GROUP"] == ["REQUIREMENT  1", "REQUIREMENT  ?!?"]
    assert structure.missing_cardinality == ["REQUIREMENT_GROUP:REQUIREMENT"] * 2
    assert format_children(structure.children).splitlines()[:3] == [
        "CRITERION",
        "\tREQUIREMENT_GROUP  1",
        "\tQUESTION  0..1",
    ]
