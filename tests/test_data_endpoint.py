"""End-to-end tests of the data endpoint against the in-memory store."""

from conftest import AGENT, CALL_TIME, LAST_CONTACT, NOTES, NOW_TEXT, TODAY
from sheet_gateway_api.app.core.config import settings

COMPANIES = settings.contact_collection
ROLE = settings.contact_role


def _post(client, action, payload=None, collection=COMPANIES, path="/api/v1/data"):
    body = {"action": action, "collection": collection}
    if payload is not None:
        body["payload"] = payload
    return client.post(path, json=body)


class TestRead:
    def test_filtered_page(self, client) -> None:
        response = _post(client, "read", {"filter": {AGENT: "kim"}, "page": 1, "limit": 1})
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [row["기업명"] for row in body["data"]] == ["Alpha Foods"]

    def test_second_page_keeps_original_index(self, client) -> None:
        body = _post(client, "read", {"filter": {AGENT: "kim"}, "page": 2, "limit": 1}).json()
        assert body["data"][0]["기업명"] == "Beta Logistics"
        assert body["data"][0]["originalIndex"] == 1

    def test_filter_on_later_rows(self, client) -> None:
        body = _post(client, "read", {"filter": {"지역": "INCHEON", AGENT: ""}}).json()
        assert body["total"] == 1
        assert body["data"][0]["originalIndex"] == 3

    def test_read_without_payload(self, client) -> None:
        body = _post(client, "read").json()
        assert body["total"] == 4

    def test_read_all(self, client) -> None:
        response = _post(client, "readAll", {"page": 1, "limit": 1})
        assert response.status_code == 200
        rows = response.json()
        assert [row["originalIndex"] for row in rows] == [0, 1, 2, 3]

    def test_legacy_path_and_sheet_name(self, client) -> None:
        response = client.post(
            "/.netlify/functions/handleData",
            json={"action": "readAll", "sheetName": "Specialists"},
        )
        assert response.status_code == 200
        assert response.json()[1] == {"이름": "Lee", "팀": "B", "originalIndex": 1}


class TestWrite:
    def test_write_appends_row_with_new_field(self, client, companies) -> None:
        response = _post(client, "write", {"data": {"기업명": "Epsilon", "메모": "new column"}})
        assert response.json() == {"success": True}
        rows = companies.fetch_all()
        assert len(rows) == 5
        assert rows[-1].get("메모") == "new column"
        assert rows[0].get("메모") == ""

    def test_contact_write_stamps_date_and_time(self, client, companies) -> None:
        response = _post(client, "write", {"data": {AGENT: "Choi", NOTES: "first call"}, "userRole": ROLE})
        assert response.json() == {"success": True}
        row = companies.fetch_all()[-1]
        assert row.get(LAST_CONTACT) == TODAY
        assert row.get(CALL_TIME) == NOW_TEXT


class TestUpdate:
    def test_second_contact_today_is_softly_declined(self, client, companies) -> None:
        before = companies.fetch_all()
        response = _post(client, "update", {"data": {AGENT: "Kim", NOTES: "another call"}, "rowIndex": 1, "userRole": ROLE})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["confirmationRequired"] is True
        assert body["message"]
        assert companies.fetch_all() == before

    def test_force_save_overrides_decline(self, client, companies) -> None:
        response = _post(
            client,
            "update",
            {"data": {AGENT: "Kim", NOTES: "another call"}, "rowIndex": 1, "userRole": ROLE, "forceSave": True},
        )
        assert response.json() == {"success": True}
        row = companies.fetch_all()[1]
        assert row.get(LAST_CONTACT) == TODAY
        assert row.get(NOTES) == "another call"
        assert row.get(CALL_TIME) == NOW_TEXT

    def test_same_notes_do_not_bump_call_time(self, client, companies) -> None:
        response = _post(client, "update", {"data": {AGENT: "Lee", NOTES: "old notes"}, "rowIndex": 2, "userRole": ROLE})
        assert response.json() == {"success": True}
        row = companies.fetch_all()[2]
        assert row.get(CALL_TIME) == "2026-10-10 11:00"
        assert row.get(LAST_CONTACT) == TODAY

    def test_update_merges_only_given_fields(self, client, companies) -> None:
        _post(client, "update", {"data": {"지역": "Ulsan"}, "rowIndex": 3})
        row = companies.fetch_all()[3]
        assert row.get("지역") == "Ulsan"
        assert row.get("기업명") == "Delta Retail"
        assert row.get(AGENT) == "Park"


class TestDelete:
    def test_delete_shifts_following_rows(self, client, companies) -> None:
        response = _post(client, "delete", {"rowIndex": 0})
        assert response.json() == {"success": True}
        body = _post(client, "read", {"filter": {"기업명": "delta"}}).json()
        assert body["data"][0]["originalIndex"] == 2
        assert len(companies.fetch_all()) == 3

    def test_delete_missing_row(self, client, companies) -> None:
        response = _post(client, "delete", {"rowIndex": 4})
        assert response.status_code == 404
        assert response.json() == {"error": "Row not found."}
        assert len(companies.fetch_all()) == 4

    def test_negative_index_is_not_found(self, client) -> None:
        response = _post(client, "delete", {"rowIndex": -1})
        assert response.status_code == 404


class TestErrors:
    def test_empty_body(self, client) -> None:
        response = client.post("/api/v1/data", content=b"")
        assert response.status_code == 400
        assert response.json() == {"error": "Empty body"}

    def test_unknown_sheet(self, client) -> None:
        response = _post(client, "read", collection="Missing")
        assert response.status_code == 400
        assert response.json() == {"error": "Sheet 'Missing' not found."}

    def test_invalid_action(self, client) -> None:
        response = _post(client, "purge")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid action."}


def test_health_reports_backend(client) -> None:
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "backend": "memory"}
