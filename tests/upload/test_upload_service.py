from __future__ import annotations

import pytest

from src.sheet_attendance.sheet_attendance.core.exceptions import (
    ConflictError,
    SheetNotAccessibleError,
    ValidationError,
)
from src.sheet_attendance.sheet_attendance.upload.service import HEADER_ERROR, UploadService, check_headers, check_rows

LINK = "https://docs.google.com/spreadsheets/d/event-1/edit"


@pytest.fixture
def upload_service(container, fixed_now):
    return UploadService(container.attendance_repo, container.history_repo, clock=lambda: fixed_now)


def test_check_headers_accepts_required_then_optional():
    headers = ["name", "roll_number", "mail_id", "department", "attendance", "commit", "marked_by", ""]
    assert check_headers(headers) == headers[:-1]


@pytest.mark.parametrize(
    "headers",
    [
        ["name", "roll_number", "mail_id", "department"],
        ["name", "mail_id", "roll_number", "department", "attendance"],
        ["Name", "roll_number", "mail_id", "department", "attendance"],
        ["name", "roll_number", "mail_id", "department", "attendance", "notes"],
        ["name", "roll_number", "mail_id", "department", "attendance", "commit", "commit"],
    ],
)
def test_check_headers_rejects_bad_header_rows(headers):
    with pytest.raises(ValidationError) as exc:
        check_headers(headers)
    assert str(exc.value) == HEADER_ERROR
    assert "expected" in exc.value.details
    assert "error" in exc.value.details


def test_check_rows_reports_every_bad_cell_and_skips_blank_rows():
    headers = ["name", "roll_number", "mail_id", "department", "attendance", "commit"]
    rows = [
        ["Asha", "101", "asha@example.com", "CSE", "TRUE"],
        [],
        ["", "x1", "not-an-email", "", "maybe", "sure"],
        ["Chen", "103", "chen@example.com", "MECH", "no", ""],
    ]

    validated, errors = check_rows(headers, rows)

    assert validated == 3
    assert {(e.row, e.column) for e in errors} == {
        (4, "name"),
        (4, "roll_number"),
        (4, "mail_id"),
        (4, "department"),
        (4, "attendance"),
        (4, "commit"),
    }


def test_validate_good_sheet(upload_service):
    report = upload_service.validate(LINK)
    assert report.spreadsheet_id == "event-1"
    assert report.rows_validated == 3


def test_validate_reports_row_errors(upload_service, sheets_client):
    sheets_client.add_sheet(
        "bad-rows",
        [
            ["name", "roll_number", "mail_id", "department", "attendance"],
            ["Asha", "abc", "asha@example.com", "CSE", "TRUE"],
        ],
    )
    with pytest.raises(ValidationError) as exc:
        upload_service.validate("https://docs.google.com/spreadsheets/d/bad-rows/edit")
    [error] = exc.value.details["errors"]
    assert error == {"row": 2, "column": "roll_number", "error": "Roll number must be a valid integer", "value": "abc"}


def test_validate_inaccessible_sheet(upload_service, sheets_client):
    sheets_client.denied.add("event-1")
    with pytest.raises(SheetNotAccessibleError) as exc:
        upload_service.validate(LINK)
    assert "event-1" in exc.value.reason


def test_upload_appends_active_history_row(upload_service, sheets_client):
    record = upload_service.upload(LINK, event_name=" Hackathon ", uploaded_by="alice")

    assert record.sheet_id == "event-1"
    assert record.sheet_name == "Hackathon Registrations"
    assert record.event_name == "Hackathon"
    assert record.status == "active"
    assert record.uploaded_at == "2026-03-14T09:30:00.000Z"
    assert sheets_client.grids["history-sheet"][1] == record.to_row()


def test_duplicate_upload_is_a_conflict_carrying_existing_record(upload_service):
    upload_service.upload(LINK, event_name="Hackathon", uploaded_by="alice")

    with pytest.raises(ConflictError) as exc:
        upload_service.upload(LINK, event_name="Again", uploaded_by="bob")
    assert exc.value.existing["event_name"] == "Hackathon"
    assert exc.value.existing["uploaded_by"] == "alice"

    with pytest.raises(ConflictError):
        upload_service.validate(LINK)


def test_upload_requires_all_fields(upload_service):
    with pytest.raises(ValidationError):
        upload_service.upload(LINK, event_name="", uploaded_by="alice")
