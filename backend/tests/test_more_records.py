"""Maintenance, traceability and fridge temperature records."""

import pytest
from httpx import AsyncClient

MAINTENANCE = {
    "equipment_name": "Water filter",
    "date_completed": "2025-11-03",
    "performed_by": "Andres",
    "maintenance_description": "Replaced cartridge and flushed the line",
    "checking_frequency": "Every 6 months",
}

TRACE = {
    "trace_date": "2025-11-04",
    "product_type": "Corn tortillas",
    "brand": "La Tortilleria",
    "batch_lot_info": "LT-2025-311",
    "supplier_name": "Davis Trading",
    "supplier_contact": "09 555 0303",
    "performed_by": "Martin",
}


@pytest.mark.api
@pytest.mark.asyncio
class TestMaintenance:
    async def test_create_and_sync(self, client: AsyncClient, auth_headers, fake_sheets):
        resp = await client.post("/api/maintenance/", json=MAINTENANCE, headers=auth_headers)
        assert resp.status_code == 201
        item = resp.json()["item"]
        assert item["id"].startswith("maintenance-")
        assert item["created_by"] == "Martin"

        domain, action, payload = fake_sheets.calls[0]
        assert (domain, action) == ("maintenance", "create")
        assert payload["equipmentName"] == "Water filter"
        assert payload["checkingFrequency"] == "Every 6 months"

    async def test_description_required(self, client: AsyncClient, auth_headers):
        resp = await client.post(
            "/api/maintenance/",
            json={**MAINTENANCE, "maintenance_description": " "},
            headers=auth_headers,
        )
        assert resp.status_code == 422


@pytest.mark.api
@pytest.mark.asyncio
class TestTraceability:
    async def test_manufacturer_defaults_to_supplier(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/traceability/", json=TRACE, headers=auth_headers)
        assert resp.status_code == 201
        item = resp.json()["item"]
        assert item["id"].startswith("trace-")
        assert item["manufacturer_name"] == "Davis Trading"
        assert item["manufacturer_contact"] == "09 555 0303"

    async def test_separate_manufacturer(self, client: AsyncClient, auth_headers):
        resp = await client.post(
            "/api/traceability/",
            json={**TRACE, "manufacturer_name": "Tortilleria Ltd", "manufacturer_contact": "info@lt.nz"},
            headers=auth_headers,
        )
        item = resp.json()["item"]
        assert item["manufacturer_name"] == "Tortilleria Ltd"

        resp = await client.patch(
            f"/api/traceability/{item['id']}",
            json={"manufacturer_name": "", "manufacturer_contact": None},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["item"]["manufacturer_name"] == "Davis Trading"
        assert resp.json()["item"]["manufacturer_contact"] == "09 555 0303"

    async def test_refresh_from_sheet(self, client: AsyncClient, auth_headers, fake_sheets):
        fake_sheets.rows["traceability"] = [{
            "id": "trace-1-remote",
            "traceDate": "2025-10-01",
            "productType": "Black beans",
            "brand": "Goya",
            "batchLotInfo": "GB-77",
            "supplierName": "Gilmours",
            "supplierContact": "09 555 0101",
            "manufacturerName": "Goya Foods",
            "manufacturerContact": "goya.com",
            "performedBy": "Hugo",
        }]
        resp = await client.post("/api/traceability/refresh", headers=auth_headers)
        assert resp.json()["created"] == 1

        item = (await client.get("/api/traceability/trace-1-remote", headers=auth_headers)).json()
        assert item["manufacturer_name"] == "Goya Foods"


@pytest.mark.api
@pytest.mark.asyncio
class TestFridgeTemps:
    async def test_all_units_in_range(self, client: AsyncClient, auth_headers):
        resp = await client.post(
            "/api/fridge-temps/",
            json={
                "check_date": "2025-11-03",
                "chillers": [3, 3, 4, 2.5, 5, 0],
                "freezer": -18,
                "checked_by": "Hugo",
            },
            headers=auth_headers,
        )
        assert resp.status_code == 201
        item = resp.json()["item"]
        assert item["id"].startswith("fridge-")
        assert item["all_in_range"] is True
        assert item["out_of_range"] == []

    async def test_flags_units_and_rechecks_on_update(self, client: AsyncClient, auth_headers):
        resp = await client.post(
            "/api/fridge-temps/",
            json={
                "check_date": "2025-11-04",
                "chillers": [3, 7.5, 4],
                "freezer": -12,
                "checked_by": "Hugo",
            },
            headers=auth_headers,
        )
        item = resp.json()["item"]
        assert item["all_in_range"] is False
        assert item["out_of_range"] == ["Chiller #2", "Freezer"]

        resp = await client.patch(
            f"/api/fridge-temps/{item['id']}",
            json={"chillers": [3, 4, 4], "freezer": -19},
            headers=auth_headers,
        )
        assert resp.json()["item"]["all_in_range"] is True
        assert resp.json()["item"]["out_of_range"] == []

    async def test_chiller_count_limits(self, client: AsyncClient, auth_headers):
        base = {"check_date": "2025-11-05", "freezer": -18, "checked_by": "Hugo"}
        resp = await client.post(
            "/api/fridge-temps/", json={**base, "chillers": []}, headers=auth_headers
        )
        assert resp.status_code == 422
        resp = await client.post(
            "/api/fridge-temps/", json={**base, "chillers": [3] * 7}, headers=auth_headers
        )
        assert resp.status_code == 422

    async def test_wizard_flow(self, client: AsyncClient, auth_headers, fake_sheets):
        steps = {
            1: {"check_date": "2025-11-06", "checked_by": "Martin"},
            2: {"chillers": [2, 3, 3, 4, 4, 5]},
            3: {"freezer": -20},
        }
        for step, data in steps.items():
            resp = await client.patch(
                f"/api/wizards/fridge_temps/step/{step}",
                params={"complete": True},
                json=data,
                headers=auth_headers,
            )
            assert resp.status_code == 200, resp.text

        resp = await client.post("/api/wizards/fridge_temps/submit", headers=auth_headers)
        assert resp.status_code == 201
        assert resp.json()["domain"] == "fridge_temps"
        assert resp.json()["item"]["all_in_range"] is True
        assert fake_sheets.actions("fridge_temps") == ["create"]
