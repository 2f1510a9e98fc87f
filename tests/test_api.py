from __future__ import annotations

import io
import zipfile

import pytest

from src.sheet_attendance.sheet_attendance.main import create_app

LINK = "https://docs.google.com/spreadsheets/d/event-1/edit"


@pytest.fixture
def client(container):
    app = create_app(container=container)
    return app.test_client()


def _signup(client, username="alice", password="secret1"):
    return client.post(
        "/api/createuser",
        json={
            "username": username,
            "name": "Alice",
            "password": password,
            "roll_number": "101",
            "department": "CSE",
            "team": "Tech",
            "role": "volunteer",
        },
    )


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.get_json()["success"] is True


def test_signup_login_and_profile(client):
    assert _signup(client).status_code == 201

    res = client.post("/api/login", json={"username": "alice", "password": "secret1"})
    body = res.get_json()
    assert res.status_code == 200
    assert body["user"]["username"] == "alice"
    assert body["admin"] is False

    # session cookie carries the username
    res = client.post("/api/profile", json={})
    assert res.status_code == 200
    assert res.get_json()["user"]["department"] == "CSE"


def test_login_errors(client):
    _signup(client)
    assert client.post("/api/login", json={"username": "alice"}).status_code == 400
    assert client.post("/api/login", json={"username": "alice", "password": "nope12"}).status_code == 401


def test_duplicate_signup(client):
    _signup(client)
    res = _signup(client)
    assert res.status_code == 409
    assert res.get_json()["success"] is False


def test_upload_flow_and_duplicate(client):
    res = client.post("/api/upload/validate", json={"sheetlink": LINK})
    assert res.status_code == 200
    assert res.get_json()["rows_validated"] == 3

    payload = {"sheet_link": LINK, "event_name": "Hackathon", "uploaded_by": "alice"}
    res = client.post("/api/upload/uploadSheet", json=payload)
    assert res.status_code == 200
    assert res.get_json()["data"]["status"] == "active"

    res = client.post("/api/upload/uploadSheet", json=payload)
    body = res.get_json()
    assert res.status_code == 409
    assert body["data"]["event_name"] == "Hackathon"


def test_validate_errors(client, sheets_client):
    assert client.post("/api/upload/validate", json={}).status_code == 400

    sheets_client.add_sheet("bad", [["name", "roll_number"], ["A", "1"]])
    res = client.post("/api/upload/validate", json={"sheet_link": "https://docs.google.com/spreadsheets/d/bad/edit"})
    body = res.get_json()
    assert res.status_code == 400
    assert body["message"] == "Header error, check the headers"
    assert body["received"] == ["name", "roll_number"]

    sheets_client.denied.add("event-1")
    res = client.post("/api/upload/validate", json={"sheetlink": LINK})
    assert res.status_code == 403


def test_attendance_fetch_display_commit(client, sheets_client):
    res = client.get("/api/attendance", query_string={"sheet_link": LINK})
    body = res.get_json()
    assert res.status_code == 200
    assert body["cached"] is False
    assert body["commit_column_added"] is True
    assert body["data"]["total_rows"] == 3

    res = client.get("/api/attendance", query_string={"sheet_link": LINK})
    assert res.get_json()["cached"] is True

    res = client.get("/api/attendance/display", query_string={"spreadsheet_id": "event-1"})
    data = res.get_json()["data"]
    assert data["present"] + data["absent"] == data["registered"] + data["on_spot"]
    assert [s["id"] for s in data["students"]] == [1, 2, 3]

    res = client.post(
        "/api/attendance/commit",
        json={"spreadsheet_id": "event-1", "roll_numbers": ["101"], "marked_by": "volunteer1"},
    )
    assert res.status_code == 200
    assert res.get_json()["data"]["committed_roll_numbers"] == ["101"]
    assert sheets_client.cell("event-1", 2, "marked_by") == "volunteer1"

    # commit invalidated the cache
    res = client.get("/api/attendance/display", query_string={"spreadsheet_id": "event-1"})
    assert res.status_code == 404


def test_display_ids_point_at_sheet_rows(client):
    client.post(
        "/api/attendance/commit",
        json={"spreadsheet_id": "event-1", "roll_numbers": ["101"], "marked_by": "volunteer1"},
    )
    client.get("/api/attendance", query_string={"sheet_link": LINK})

    res = client.get("/api/attendance/display", query_string={"spreadsheet_id": "event-1"})
    students = res.get_json()["data"]["students"]
    assert [(s["id"], s["roll_number"]) for s in students] == [(2, "102"), (3, "103")]


def test_commit_uses_session_user_as_marker(client, sheets_client):
    _signup(client)
    client.post("/api/login", json={"username": "alice", "password": "secret1"})

    res = client.post("/api/attendance/commit", json={"spreadsheet_id": "event-1", "roll_numbers": ["103"]})

    assert res.status_code == 200
    assert sheets_client.cell("event-1", 4, "marked_by") == "alice"


def test_add_on_spot_conflict(client):
    body = {
        "spreadsheet_id": "event-1",
        "name": "Dev",
        "roll_number": "104",
        "mail_id": "dev@example.com",
        "department": "CSE",
        "marked_by": "volunteer1",
    }
    res = client.post("/api/attendance/addonspot", json=body)
    assert res.status_code == 200
    assert res.get_json()["data"]["is_on_spot"] is True

    res = client.post("/api/attendance/addonspot", json=body)
    assert res.status_code == 409
    assert res.get_json()["data"]["roll_number"] == "104"


def test_clear_cache_endpoint(client):
    client.get("/api/attendance", query_string={"sheet_link": LINK})
    assert client.delete("/api/attendance/cache", json={"spreadsheet_id": "other"}).status_code == 404
    res = client.delete("/api/attendance/cache")
    assert res.status_code == 200
    assert res.get_json()["cleared"] == 1


def test_export_download(client):
    res = client.get("/api/attendance/export", query_string={"spreadsheet_id": "event-1"})
    assert res.status_code == 200
    assert res.mimetype == "application/zip"
    assert "attendance_export_" in res.headers["Content-Disposition"]
    with zipfile.ZipFile(io.BytesIO(res.data)) as zf:
        assert "present_students.xlsx" in zf.namelist()


def test_history_and_close_session(client):
    client.post(
        "/api/upload/uploadSheet",
        json={"sheet_link": LINK, "event_name": "Hackathon", "uploaded_by": "alice"},
    )

    res = client.get("/api/history")
    [record] = res.get_json()["data"]
    assert record["sheet_id"] == "event-1"

    res = client.get("/api/history/event", query_string={"sheet_link": LINK})
    assert res.get_json()["data"]["total"] == 3

    res = client.post("/api/profile/getsession", json={"username": "alice"})
    assert len(res.get_json()["sessions"]) == 1

    res = client.post("/api/profile/close", json={"sheet_id": "event-1", "username": "alice"})
    assert res.status_code == 200
    assert res.get_json()["data"]["status"] == "Complete"

    res = client.post("/api/profile/close", json={"sheet_id": "event-1", "username": "alice"})
    assert res.status_code == 409


def test_unexpected_errors_are_500_with_raw_message(client, sheets_client):
    sheets_client.denied.add("event-1")
    res = client.get("/api/history/event", query_string={"sheet_link": LINK})
    body = res.get_json()
    assert res.status_code == 500
    assert body["message"] == "Failed to fetch event details"
    assert "event-1" in body["error"]

    res = client.post(
        "/api/attendance/commit",
        json={"spreadsheet_id": "event-1", "roll_numbers": ["101"], "marked_by": "volunteer1"},
    )
    assert res.status_code == 500
    assert res.get_json()["message"] == "Failed to commit attendance"


def test_json_keys_keep_insertion_order(client):
    assert client.application.json.sort_keys is False
    body = client.get("/api/health").get_data(as_text=True)
    assert body.index("\"success\"") < body.index("\"message\"") < body.index("\"status\"")
