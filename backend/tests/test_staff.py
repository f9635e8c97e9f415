"""Staff and training record tests (form-encoded sheet sync)."""

import pytest
from httpx import AsyncClient


async def add_staff(client, headers, name="Marcela") -> dict:
    resp = await client.post(
        "/api/staff/",
        json={"name": name, "role": "Cook", "start_date": "2024-02-01"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["item"]


async def add_training(client, headers, staff_id, **overrides) -> dict:
    body = {"training_type": "Food Safety Level 1", "date": "2025-01-15", "trainer": "Hugo"}
    body.update(overrides)
    return await client.post(f"/api/staff/{staff_id}/training", json=body, headers=headers)


@pytest.mark.api
@pytest.mark.asyncio
class TestStaff:
    async def test_create_uses_staff_actions(self, client: AsyncClient, auth_headers, fake_sheets):
        staff = await add_staff(client, auth_headers)
        assert staff["id"].startswith("staff-")
        assert staff["training_records"] == []

        domain, action, payload = fake_sheets.calls[0]
        assert (domain, action) == ("staff_training", "addStaff")
        assert payload["name"] == "Marcela"
        assert payload["startDate"] == "2024-02-01"
        assert payload["trainingRecords"] == []

    async def test_update_and_delete_actions(self, client: AsyncClient, auth_headers, fake_sheets):
        staff = await add_staff(client, auth_headers)
        await client.patch(f"/api/staff/{staff['id']}", json={"role": "Head cook"}, headers=auth_headers)
        await client.delete(f"/api/staff/{staff['id']}", params={"hard": True}, headers=auth_headers)

        assert fake_sheets.actions("staff_training") == ["addStaff", "updateStaff", "deleteStaff"]
        assert fake_sheets.calls[-1][2] == {"id": staff["id"]}


@pytest.mark.api
@pytest.mark.asyncio
class TestTraining:
    async def test_add_training(self, client: AsyncClient, auth_headers, fake_sheets):
        staff = await add_staff(client, auth_headers)

        resp = await add_training(client, auth_headers, staff["id"])
        assert resp.status_code == 201
        training = resp.json()["item"]
        assert training["id"].startswith("training-")
        assert training["staff_id"] == staff["id"]
        assert resp.json()["sync"]["success"] is True

        _, action, payload = fake_sheets.calls[-1]
        assert action == "addTraining"
        assert payload["staffId"] == staff["id"]
        assert payload["trainingType"] == "Food Safety Level 1"

    async def test_training_listed_newest_first(self, client: AsyncClient, auth_headers):
        staff = await add_staff(client, auth_headers)
        await add_training(client, auth_headers, staff["id"], date="2024-03-01")
        await add_training(client, auth_headers, staff["id"], training_type="Allergens", date="2025-06-01")

        current = (await client.get(f"/api/staff/{staff['id']}", headers=auth_headers)).json()
        assert [t["date"] for t in current["training_records"]] == ["2025-06-01", "2024-03-01"]

    async def test_update_training(self, client: AsyncClient, auth_headers, fake_sheets):
        staff = await add_staff(client, auth_headers)
        training = (await add_training(client, auth_headers, staff["id"])).json()["item"]

        resp = await client.patch(
            f"/api/staff/{staff['id']}/training/{training['id']}",
            json={"trainer": "Andres"},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["item"]["trainer"] == "Andres"
        assert resp.json()["item"]["training_type"] == "Food Safety Level 1"
        assert fake_sheets.actions("staff_training")[-1] == "updateTraining"

        resp = await client.patch(
            f"/api/staff/{staff['id']}/training/{training['id']}",
            json={"date": None},
            headers=auth_headers,
        )
        assert resp.status_code == 422

    async def test_delete_training(self, client: AsyncClient, auth_headers, fake_sheets):
        staff = await add_staff(client, auth_headers)
        training = (await add_training(client, auth_headers, staff["id"])).json()["item"]

        resp = await client.delete(
            f"/api/staff/{staff['id']}/training/{training['id']}", headers=auth_headers
        )
        assert resp.json() == {"success": True, "error": None}
        _, action, payload = fake_sheets.calls[-1]
        assert action == "deleteTraining"
        assert payload == {"id": training["id"], "staffId": staff["id"]}

        current = (await client.get(f"/api/staff/{staff['id']}", headers=auth_headers)).json()
        assert current["training_records"] == []

    async def test_missing_staff_or_training(self, client: AsyncClient, auth_headers):
        resp = await add_training(client, auth_headers, "staff-0-nobody")
        assert resp.status_code == 404

        staff = await add_staff(client, auth_headers)
        resp = await client.delete(
            f"/api/staff/{staff['id']}/training/training-0-none", headers=auth_headers
        )
        assert resp.status_code == 404

    async def test_no_training_for_deleted_staff(self, client: AsyncClient, auth_headers):
        staff = await add_staff(client, auth_headers)
        await client.delete(f"/api/staff/{staff['id']}", headers=auth_headers)

        resp = await add_training(client, auth_headers, staff["id"])
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "RECORD_DELETED"

    async def test_sync_failure_keeps_training(self, client: AsyncClient, auth_headers, fake_sheets):
        staff = await add_staff(client, auth_headers)
        fake_sheets.fail = True

        resp = await add_training(client, auth_headers, staff["id"])
        assert resp.status_code == 201
        assert resp.json()["sync"] == {"success": False, "error": "Sheet is locked"}

        current = (await client.get(f"/api/staff/{staff['id']}", headers=auth_headers)).json()
        assert len(current["training_records"]) == 1
