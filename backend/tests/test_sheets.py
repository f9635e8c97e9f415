"""Google Sheets web app client tests against a mock transport."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from taquero.config import settings
from taquero.services.sheets import (
    NOT_CONFIGURED,
    SheetsClient,
    from_sheet_row,
    to_sheet_payload,
)


def client_for(handler) -> SheetsClient:
    return SheetsClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def incidents_url(monkeypatch):
    monkeypatch.setattr(settings, "sheets_url_incidents", "https://sheets.test/incidents")


@pytest.mark.unit
class TestPayloads:
    def test_camel_case_without_local_fields(self):
        payload = to_sheet_payload({
            "what_went_wrong": "Seal split",
            "sync_error": "old",
            "synced_at": None,
            "id": "incident-1",
        })
        assert payload == {"whatWentWrong": "Seal split", "id": "incident-1"}

    def test_rows_back_to_snake_case(self):
        assert from_sheet_row({"incidentDate": "2025-11-03", "id": "x"}) == {
            "incident_date": "2025-11-03",
            "id": "x",
        }


@pytest.mark.unit
@pytest.mark.asyncio
class TestSheetsClient:
    async def test_push_json(self, incidents_url):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"success": True})

        result = await client_for(handler).push("incidents", "create", {"person_responsible": "Hugo"})
        assert result.success is True
        assert seen["action"] == "create"
        assert seen["personResponsible"] == "Hugo"
        assert isinstance(seen["unixTimestamp"], int)

    async def test_push_form(self, monkeypatch):
        monkeypatch.setattr(settings, "sheets_url_staff_training", "https://sheets.test/staff")
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update({k: v[0] for k, v in parse_qs(request.content.decode()).items()})
            return httpx.Response(200, text="OK")

        result = await client_for(handler).push_form("staff_training", "addStaff", {"staff_id": "s-1"})
        assert result.success is True
        assert seen["action"] == "addStaff"
        assert json.loads(seen["data"]) == {"staffId": "s-1"}
        assert "timestamp" in seen

    async def test_rejected_write(self, incidents_url):
        def handler(request):
            return httpx.Response(200, json={"status": "error", "message": "No such sheet"})

        result = await client_for(handler).push("incidents", "update", {"id": "x"})
        assert result.success is False
        assert result.error == "No such sheet"

    async def test_http_error(self, incidents_url):
        def handler(request):
            return httpx.Response(500, text="boom")

        result = await client_for(handler).push("incidents", "update", {"id": "x"})
        assert result.success is False
        assert result.error

    async def test_not_configured(self):
        def handler(request):
            raise AssertionError("no request expected")

        client = client_for(handler)
        assert (await client.push("incidents", "create", {})).error == NOT_CONFIGURED
        assert (await client.fetch("incidents")).error == NOT_CONFIGURED

    async def test_fetch_data_shape(self, incidents_url):
        def handler(request):
            return httpx.Response(200, json={"success": True, "data": [{"whatWentWrong": "x"}, "junk"]})

        result = await client_for(handler).fetch("incidents")
        assert result.success
        assert result.rows == [{"what_went_wrong": "x"}]

    async def test_fetch_events_shape(self, incidents_url):
        def handler(request):
            return httpx.Response(200, json={"status": "success", "events": [{"eventStatus": "paid"}]})

        result = await client_for(handler).fetch("incidents")
        assert result.rows == [{"event_status": "paid"}]

    async def test_fetch_failure_message(self, incidents_url):
        def handler(request):
            return httpx.Response(200, json={"success": False, "error": "Quota exceeded"})

        result = await client_for(handler).fetch("incidents")
        assert not result.success
        assert result.error == "Quota exceeded"

    async def test_fetch_invalid_json(self, incidents_url):
        def handler(request):
            return httpx.Response(200, text="<html>login</html>")

        result = await client_for(handler).fetch("incidents")
        assert result.error == "Invalid JSON from Google Sheets"
