from extractors.context import EngineContext
from extractors.labels import TagLabelChecker
from tests.sheets import SheetBuilder


def check(rows, context=None):
    return TagLabelChecker(context or EngineContext(), "EG-Exclusion grounds").check(rows)


def test_well_labelled_sheet_passes():
    rows = (
        SheetBuilder()
        .open("CRITERION", 2, "C1")
        .open("REQUIREMENT_GROUP", 3, "RG1")
        .inline("REQUIREMENT", 4, "RQ1")
        .inline("REQUIREMENT", 4, "RQ2")
        .close("REQUIREMENT_GROUP", 3)
        .open("REQUIREMENT_GROUP", 3, "RG2")
        .inline("REQUIREMENT", 4, "RQ1")
        .close("REQUIREMENT_GROUP", 3)
        .close("CRITERION", 2)
        .open("CRITERION", 2, "C2")
        .inline("QUESTION", 3, "Q1")
        .close("CRITERION", 2)
        .rows
    )

    checks = check(rows)

    assert len(checks) == 8
    assert all(c.ok for c in checks)


def test_wrong_label_is_reported_with_the_expected_one():
    rows = (
        SheetBuilder()
        .open("CRITERION", 2, "C1")
        .inline("QUESTION", 3, "Q1")
        .inline("QUESTION", 3, "Q3")
        .close("CRITERION", 2)
        .rows
    )

    failed = [c for c in check(rows) if not c.ok]

    assert len(failed) == 1
    assert failed[0].label == "Q3"
    assert failed[0].expected == "Q2"


def test_repeated_variants_share_their_number():
    rows = (
        SheetBuilder()
        .open("CRITERION", 2, "C1")
        .open("QUESTION_GROUP", 3, "QG1", cardinality="(1)")
        .close("QUESTION_GROUP", 3)
        .open("QUESTION_GROUP", 3, "QG1", cardinality="(2)")
        .close("QUESTION_GROUP", 3)
        .close("CRITERION", 2)
        .rows
    )

    assert all(c.ok for c in check(rows))


def test_criterion_labels_skip_withdrawn_numbers():
    context = EngineContext()
    context.criterion_counter = 61
    rows = SheetBuilder().open("CRITERION", 2, "C63").close("CRITERION", 2).rows

    checks = check(rows, context)

    assert checks[0].expected == "C63"
    assert checks[0].ok


def test_mislabelled_requirement_group_is_flagged():
    rows = (
        SheetBuilder()
        .open("CRITERION", 2, "C1")
        .open("REQUIREMENT_GROUP", 3, "RG1")
        .close("REQUIREMENT_GROUP", 3)
        .open("REQUIREMENT_GROUP", 3, "RG1")
        .close("REQUIREMENT_GROUP", 3)
        .close("CRITERION", 2)
        .rows
    )

    checks = check(rows)

    assert [(c.label, c.expected, c.ok) for c in checks[1:]] == [
        ("RG1", "RG1", True),
        ("RG1", "RG2", False),
    ]
