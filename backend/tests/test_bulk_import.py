"""Bulk CSV import of suppliers and staff."""

import pytest
from httpx import AsyncClient

from taquero.utils.csv_import import coerce_date, coerce_email, coerce_weekdays

SUPPLIERS_CSV = (
    "business_name,contact_person,phone,email,order_days,delivery_days,goods_supplied\n"
    "Gilmours,Sam Lee,09 555 0101,ORDERS@gilmours.co.nz,mon|thu,Tuesday|friday,Dry goods\n"
    "Davis Trading,,,not-an-email,,,Tortillas\n"
    ",Nobody,,,,,\n"
    "Mexi-Can,Ana,021 555 0202,,Wed,,Chiles\n"
)


def upload(text: str) -> dict:
    return {"file": ("import.csv", text.encode(), "text/csv")}


@pytest.mark.unit
class TestCoercion:
    def test_weekdays(self):
        assert coerce_weekdays("mon|Thursday|thu") == ["Monday", "Thursday"]
        assert coerce_weekdays("") == []
        with pytest.raises(ValueError):
            coerce_weekdays("Funday")
        with pytest.raises(ValueError):
            coerce_weekdays("mo")

    def test_email_and_date(self):
        assert coerce_email(" Orders@Example.com ") == "orders@example.com"
        with pytest.raises(ValueError):
            coerce_email("nope")
        assert coerce_date("2024-02-01") == "2024-02-01"
        with pytest.raises(ValueError):
            coerce_date("01/02/2024")


@pytest.mark.api
@pytest.mark.asyncio
class TestBulkImport:
    async def test_supplier_template(self, client: AsyncClient, auth_headers):
        resp = await client.get("/api/bulk-import/suppliers/template", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        header, sample = resp.text.strip().splitlines()
        assert header.startswith("business_name,site_registration_number")
        assert "Monday|Thursday" in sample

    async def test_supplier_upload(self, client: AsyncClient, auth_headers, fake_sheets):
        resp = await client.post(
            "/api/bulk-import/suppliers/upload", files=upload(SUPPLIERS_CSV), headers=auth_headers
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["total_rows"] == 4
        assert body["created"] == 2
        assert body["updated"] == 0
        assert body["failed"] == 2
        assert [e["row"] for e in body["errors"]] == [3, 4]
        assert fake_sheets.calls == []

        listing = (await client.get("/api/suppliers/", headers=auth_headers)).json()
        by_name = {s["business_name"]: s for s in listing["items"]}
        assert by_name["Gilmours"]["email"] == "orders@gilmours.co.nz"
        assert by_name["Gilmours"]["order_days"] == ["Monday", "Thursday"]
        assert by_name["Gilmours"]["delivery_days"] == ["Tuesday", "Friday"]
        assert by_name["Mexi-Can"]["delivery_days"] == []
        assert by_name["Mexi-Can"]["created_by"] == "Martin"

    async def test_reupload_updates_by_name(self, client: AsyncClient, auth_headers):
        await client.post(
            "/api/bulk-import/suppliers/upload", files=upload(SUPPLIERS_CSV), headers=auth_headers
        )
        resp = await client.post(
            "/api/bulk-import/suppliers/upload",
            files=upload("business_name,phone\nGilmours,09 555 9999\n"),
            headers=auth_headers,
        )
        assert resp.json()["updated"] == 1
        assert resp.json()["created"] == 0

        listing = (await client.get("/api/suppliers/", headers=auth_headers)).json()
        gilmours = next(s for s in listing["items"] if s["business_name"] == "Gilmours")
        assert gilmours["phone"] == "09 555 9999"
        assert gilmours["contact_person"] == "Sam Lee"
        assert gilmours["updated_at"] is not None

    async def test_staff_upload(self, client: AsyncClient, auth_headers):
        text = "name,role,start_date\nAlex,Cook,2024-02-01\nSam,Porter,Feb 2024\n"
        resp = await client.post("/api/bulk-import/staff/upload", files=upload(text), headers=auth_headers)
        body = resp.json()
        assert body["created"] == 1
        assert body["errors"] == [{"row": 3, "errors": ["'start_date': invalid value 'Feb 2024'"]}]

        listing = (await client.get("/api/staff/", headers=auth_headers)).json()
        assert [s["name"] for s in listing["items"]] == ["Alex"]
        assert listing["items"][0]["training_records"] == []

    async def test_import_is_logged(self, client: AsyncClient, auth_headers):
        await client.post("/api/bulk-import/staff/upload", files=upload("name\nAlex\n"), headers=auth_headers)
        resp = await client.get(
            "/api/activity/", params={"action": "bulk_import"}, headers=auth_headers
        )
        entries = resp.json()["items"]
        assert entries[0]["entity_type"] == "staff"
        assert entries[0]["summary"] == "CSV import: 1 created, 0 updated, 0 failed"
