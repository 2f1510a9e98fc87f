from src.sheet_attendance.sheet_attendance.sheets.columns import (
    cell,
    column_letter,
    extract_spreadsheet_id,
    find_column,
    is_bool_like,
    parse_bool,
)


def test_column_letter_rolls_over_after_z():
    assert column_letter(0) == "A"
    assert column_letter(25) == "Z"
    assert column_letter(26) == "AA"
    assert column_letter(27) == "AB"
    assert column_letter(701) == "ZZ"
    assert column_letter(702) == "AAA"


def test_extract_spreadsheet_id_from_share_link():
    link = "https://docs.google.com/spreadsheets/d/1AbC-d_E2/edit#gid=0"
    assert extract_spreadsheet_id(link) == "1AbC-d_E2"
    assert extract_spreadsheet_id("https://example.com/not-a-sheet") is None
    assert extract_spreadsheet_id(None) is None


def test_find_column_is_case_insensitive_and_supports_substring():
    headers = ["Name", " Roll No ", "Mail_ID", "Attendance"]
    assert find_column(headers, exact=("name",)) == 0
    assert find_column(headers, exact=("roll_number",), contains=("roll",)) == 1
    assert find_column(headers, exact=("attendance", "status")) == 3
    assert find_column(headers, exact=("commit",)) == -1


def test_parse_bool_accepts_checkbox_spellings_only():
    assert parse_bool(True) is True
    assert parse_bool("true") is True
    assert parse_bool(" YES ") is True
    assert parse_bool("FALSE") is False
    assert parse_bool("no") is False
    assert parse_bool("1") is False
    assert parse_bool(None) is False


def test_is_bool_like():
    assert is_bool_like(False)
    assert is_bool_like("No")
    assert not is_bool_like("present")
    assert not is_bool_like(1)


def test_cell_defaults_for_ragged_rows():
    row = ["Asha", "101", ""]
    assert cell(row, 1) == "101"
    assert cell(row, 2, "FALSE") == "FALSE"
    assert cell(row, 9, "FALSE") == "FALSE"
    assert cell(row, -1, "x") == "x"
