from detection.columns import extract_fields, field_value, scan_header
from dto.cell_row import CellRow
from dto.column_map import ColumnMap


def test_scan_header_discovers_label_columns():
    columns = scan_header(CellRow(index=1, cells={5: "Name", 7: "Cardinality", 9: "unrelated"}))

    assert columns.column("name") == 5
    assert columns.column("cardinality") == 7
    assert columns.column("description") is None


def test_discovered_columns_persist_until_overwritten():
    columns = scan_header(CellRow(index=1, cells={5: "Name", 7: "Cardinality"}))
    columns = scan_header(CellRow(index=2, cells={5: "Tender", 7: "1"}), columns)
    assert columns.column("name") == 5

    columns = scan_header(CellRow(index=3, cells={8: "Name"}), columns)
    assert columns.column("name") == 8
    assert columns.column("cardinality") == 7


def test_leftmost_label_wins_within_a_row():
    columns = scan_header(CellRow(index=1, cells={9: "Name", 4: "Name"}))
    assert columns.column("name") == 4


def test_scan_header_never_mutates_the_previous_snapshot():
    first = scan_header(CellRow(index=1, cells={5: "Name"}))
    second = scan_header(CellRow(index=2, cells={6: "Name"}), first)

    assert first.column("name") == 5
    assert second.column("name") == 6


def test_extract_fields_keeps_only_discovered_non_empty_values():
    columns = ColumnMap(columns={"name": 5, "description": 6, "cardinality": 7})
    row = CellRow(index=4, cells={2: "{QUESTION}", 5: " Turnover ", 7: "(2)"})

    assert extract_fields(row, columns) == {"name": "Turnover", "cardinality": "(2)"}


def test_field_value_defaults_to_empty_string():
    columns = ColumnMap(columns={"name": 5})
    row = CellRow(index=1, cells={5: "Turnover"})

    assert field_value(row, columns, "name") == "Turnover"
    assert field_value(row, columns, "cardinality") == ""
    assert field_value(CellRow(index=2), columns, "name") == ""
