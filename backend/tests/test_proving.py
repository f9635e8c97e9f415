"""Proving method tests: three passing batches prove a method."""

import pytest
from httpx import AsyncClient

from taquero.middleware.exceptions import BusinessLogicError
from taquero.schemas.proving import BatchInput
from taquero.services.proving import check_batch


def cooking_batch(temperature=72.0, day="2025-11-03") -> dict:
    return {"date": day, "completed_by": "Hugo", "temperature": temperature, "time_at_temp": "2 min"}


def cooling_batch(**overrides) -> dict:
    body = {
        "date": "2025-11-03",
        "completed_by": "Hugo",
        "start_time": "14:00",
        "start_temp": 62,
        "second_time": "15:45",
        "second_temp": 20,
        "third_time": "19:30",
        "third_temp": 4,
    }
    body.update(overrides)
    return body


async def start_method(client, headers, kind="cooking", first_batch=None, **overrides):
    body = {
        "kind": kind,
        "item_description": "Carnitas",
        "process_description": "Slow braise in lard, 3 hours",
        "first_batch": first_batch or cooking_batch(),
    }
    body.update(overrides)
    return await client.post("/api/proving/", json=body, headers=headers)


@pytest.mark.unit
class TestBatchRules:
    def test_cooking_cutoff(self):
        check_batch("cooking", BatchInput(**cooking_batch(65)))
        with pytest.raises(BusinessLogicError) as exc:
            check_batch("cooking", BatchInput(**cooking_batch(64.9)))
        assert exc.value.error_code == "BATCH_FAILED"

    def test_reheating_cutoff(self):
        check_batch("reheating", BatchInput(**cooking_batch(75)))
        with pytest.raises(BusinessLogicError):
            check_batch("reheating", BatchInput(**cooking_batch(74)))

    def test_cooling_needs_all_readings(self):
        with pytest.raises(BusinessLogicError) as exc:
            check_batch("cooling", BatchInput(**cooling_batch(third_time=None)))
        assert exc.value.error_code == "BATCH_INCOMPLETE"
        assert exc.value.details == {"missing": ["third_time"]}

    def test_cooling_too_slow(self):
        with pytest.raises(BusinessLogicError) as exc:
            check_batch("cooling", BatchInput(**cooling_batch(second_time="16:30")))
        assert exc.value.error_code == "BATCH_FAILED"
        check_batch("cooling", BatchInput(**cooling_batch()))


@pytest.mark.api
class TestProvingApi:
    @pytest.mark.asyncio
    async def test_start_with_first_batch(self, client: AsyncClient, auth_headers, fake_sheets):
        resp = await start_method(client, auth_headers)
        assert resp.status_code == 201
        item = resp.json()["item"]
        assert item["id"].startswith("method-")
        assert item["method_status"] == "in-progress"
        assert [b["batch_number"] for b in item["batches"]] == [1]
        assert item["batches_remaining"] == 2

        domain, action, payload = fake_sheets.calls[0]
        assert (domain, action) == ("proving_cooking", "addBatch")
        assert payload["methodId"] == item["id"]
        assert payload["batchNumber"] == 1
        assert payload["itemDescription"] == "Carnitas"
        assert payload["cookingMethod"] == "Slow braise in lard, 3 hours"
        assert payload["status"] == "in-progress"

    @pytest.mark.asyncio
    async def test_failing_first_batch_stores_nothing(self, client: AsyncClient, auth_headers, fake_sheets):
        resp = await start_method(client, auth_headers, first_batch=cooking_batch(60))
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "BATCH_FAILED"
        assert fake_sheets.calls == []

        listing = (await client.get("/api/proving/", headers=auth_headers)).json()
        assert listing["total"] == 0

    @pytest.mark.asyncio
    async def test_three_batches_prove_method(self, client: AsyncClient, auth_headers, fake_sheets):
        method = (await start_method(client, auth_headers)).json()["item"]

        resp = await client.post(
            f"/api/proving/{method['id']}/batches", json=cooking_batch(70, "2025-11-04"), headers=auth_headers
        )
        assert resp.json()["item"]["method_status"] == "in-progress"

        resp = await client.post(
            f"/api/proving/{method['id']}/batches", json=cooking_batch(68, "2025-11-05"), headers=auth_headers
        )
        assert resp.status_code == 201
        item = resp.json()["item"]
        assert item["method_status"] == "proven"
        assert item["proven_at"] is not None
        assert item["batches_remaining"] == 0
        assert fake_sheets.calls[-1][2]["status"] == "proven"
        assert fake_sheets.calls[-1][2]["batchNumber"] == 3

        resp = await client.post(
            f"/api/proving/{method['id']}/batches", json=cooking_batch(), headers=auth_headers
        )
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "METHOD_ALREADY_PROVEN"

        resp = await client.delete(f"/api/proving/{method['id']}", headers=auth_headers)
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_failed_batch_does_not_count(self, client: AsyncClient, auth_headers):
        method = (await start_method(client, auth_headers)).json()["item"]

        resp = await client.post(
            f"/api/proving/{method['id']}/batches", json=cooking_batch(50), headers=auth_headers
        )
        assert resp.status_code == 422
        assert resp.json()["error"]["details"] == {"temperature": 50.0, "minimum": 65.0}

        current = (await client.get(f"/api/proving/{method['id']}", headers=auth_headers)).json()
        assert len(current["batches"]) == 1

    @pytest.mark.asyncio
    async def test_reset_then_delete(self, client: AsyncClient, auth_headers):
        method = (await start_method(client, auth_headers)).json()["item"]
        for day in ("2025-11-04", "2025-11-05"):
            await client.post(
                f"/api/proving/{method['id']}/batches", json=cooking_batch(day=day), headers=auth_headers
            )

        resp = await client.post(f"/api/proving/{method['id']}/reset", headers=auth_headers)
        assert resp.status_code == 200
        item = resp.json()
        assert item["method_status"] == "in-progress"
        assert item["batches"] == []
        assert item["proven_at"] is None

        resp = await client.delete(f"/api/proving/{method['id']}", headers=auth_headers)
        assert resp.status_code == 204
        resp = await client.get(f"/api/proving/{method['id']}", headers=auth_headers)
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_cooling_method(self, client: AsyncClient, auth_headers, fake_sheets):
        resp = await start_method(
            client, auth_headers,
            kind="cooling",
            item_description="Frijoles",
            process_description="Ice bath then walk-in",
            first_batch=cooling_batch(),
        )
        assert resp.status_code == 201
        domain, _, payload = fake_sheets.calls[0]
        assert domain == "proving_cooling"
        assert payload["foodItem"] == "Frijoles"
        assert payload["coolingMethod"] == "Ice bath then walk-in"
        assert payload["thirdTempCheck"] == 4

    @pytest.mark.asyncio
    async def test_list_by_kind(self, client: AsyncClient, auth_headers):
        await start_method(client, auth_headers)
        await start_method(
            client, auth_headers, kind="reheating", first_batch=cooking_batch(80)
        )

        resp = await client.get("/api/proving/", params={"kind": "reheating"}, headers=auth_headers)
        items = resp.json()["items"]
        assert [m["kind"] for m in items] == ["reheating"]

    @pytest.mark.asyncio
    async def test_refresh_builds_methods_from_sheet(self, client: AsyncClient, auth_headers, fake_sheets):
        fake_sheets.rows["proving_cooking"] = [
            {
                "id": "method-1-remote",
                "itemDescription": "Barbacoa",
                "cookingMethod": "Pit roast overnight",
                "createdBy": "Andres",
                "batches": [
                    {"batchNumber": n, "date": f"2025-10-0{n}", "temperature": 74, "completedBy": "Andres"}
                    for n in (1, 2, 3)
                ],
            },
            {"id": "method-2-broken"},
        ]

        resp = await client.post("/api/proving/refresh/cooking", headers=auth_headers)
        assert resp.json() == {"fetched": 2, "created": 1, "updated": 0, "skipped": 1, "error": None}

        method = (await client.get("/api/proving/method-1-remote", headers=auth_headers)).json()
        assert method["method_status"] == "proven"
        assert method["created_by"] == "Andres"
        assert [b["batch_number"] for b in method["batches"]] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_unknown_kind(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/proving/refresh/smoking", headers=auth_headers)
        assert resp.status_code == 422
