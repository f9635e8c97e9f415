"""Wizard step gating, save/resume and submit tests."""

import pytest
from httpx import AsyncClient

from taquero.auth.jwt import create_access_token
from taquero.middleware.exceptions import WizardStepError
from taquero.models.wizard_state import WizardState
from taquero.services.wizards import (
    WIZARDS,
    WizardStep,
    is_filled,
    missing_fields,
    ready_to_submit,
)

INCIDENT_STEPS = {
    1: {"person_responsible": "Hugo", "incident_date": "2025-11-03"},
    2: {"what_went_wrong": "Walk-in chiller door seal split"},
    3: {"what_did_to_fix": "Moved stock to the spare fridge"},
    4: {"preventive_action": "Check door seals every Monday"},
}

SUPPLIER_STEPS = {
    1: {"business_name": "Gilmours"},
    2: {"contact_person": "Sam Lee", "phone": "09 555 0101"},
    3: {},
    4: {"goods_supplied": "Dry goods"},
}


@pytest.mark.unit
class TestStepRules:
    def test_is_filled(self):
        assert is_filled(False)
        assert is_filled(0)
        assert not is_filled(None)
        assert not is_filled("   ")
        assert not is_filled([])

    def test_missing_fields(self):
        step = WizardStep("Who", required=("name", "date"), optional=("notes",))
        assert missing_fields(step, {"name": "Hugo"}) == ["date"]
        assert missing_fields(step, {"name": "Hugo", "date": "2025-11-03"}) == []

    def test_conditional_requirement(self):
        step = WIZARDS["delivery"].steps[2]
        assert missing_fields(step, {"requires_temp_check": False}) == []
        assert missing_fields(step, {"requires_temp_check": True}) == ["temperature"]
        assert missing_fields(step, {"requires_temp_check": True, "temperature": 0}) == []

    def test_every_wizard_targets_a_record_type(self):
        from taquero.services.domains import DOMAINS

        for wizard in WIZARDS.values():
            create_fields = DOMAINS[wizard.domain].create_schema.model_fields
            for step in wizard.steps:
                assert step.fields <= set(create_fields), (wizard.name, step.title)

    def test_submit_rechecks_the_whole_draft(self):
        wizard = WIZARDS["supplier"]
        draft = {k: v for data in SUPPLIER_STEPS.values() for k, v in data.items()}
        state = WizardState(
            wizard="supplier",
            user_name="Martin",
            current_step=4,
            completed_steps=[1, 2, 3, 4],
            draft_data={**draft, "phone": "  "},
        )
        with pytest.raises(WizardStepError) as exc:
            ready_to_submit(wizard, state)
        assert exc.value.details == {"missing": ["phone"]}

        state.draft_data = draft
        assert ready_to_submit(wizard, state)["phone"] == "09 555 0101"


@pytest.mark.api
@pytest.mark.asyncio
class TestWizardApi:
    async def _complete(self, client, headers, name, step, data):
        return await client.patch(
            f"/api/wizards/{name}/step/{step}",
            params={"complete": True},
            json=data,
            headers=headers,
        )

    async def test_list(self, client: AsyncClient, auth_headers):
        resp = await client.get("/api/wizards/", headers=auth_headers)
        names = {w["name"] for w in resp.json()}
        assert {"incident", "complaint", "delivery", "event"} <= names

    async def test_initial_progress(self, client: AsyncClient, auth_headers):
        resp = await client.get("/api/wizards/incident", headers=auth_headers)
        assert resp.json() == {
            "wizard": "incident",
            "current_step": 1,
            "completed_steps": [],
            "total_steps": 4,
            "is_complete": False,
            "draft_data": {},
        }

    async def test_unknown_wizard(self, client: AsyncClient, auth_headers):
        resp = await client.get("/api/wizards/nope", headers=auth_headers)
        assert resp.status_code == 404

    async def test_draft_survives_reload(self, client: AsyncClient, auth_headers):
        resp = await client.patch(
            "/api/wizards/incident/step/2",
            json={"what_went_wrong": "Fryer"},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["completed_steps"] == []

        progress = (await client.get("/api/wizards/incident", headers=auth_headers)).json()
        assert progress["current_step"] == 2
        assert progress["draft_data"] == {"what_went_wrong": "Fryer"}

    async def test_missing_required_fields(self, client: AsyncClient, auth_headers):
        resp = await self._complete(
            client, auth_headers, "incident", 1, {"person_responsible": "  "}
        )
        assert resp.status_code == 422
        error = resp.json()["error"]
        assert error["code"] == "WIZARD_STEP_INCOMPLETE"
        assert error["details"]["missing"] == ["person_responsible", "incident_date"]

    async def test_steps_in_order(self, client: AsyncClient, auth_headers):
        resp = await self._complete(client, auth_headers, "incident", 2, INCIDENT_STEPS[2])
        assert resp.status_code == 422
        assert "Step 1" in resp.json()["error"]["message"]

    async def test_unknown_field_rejected(self, client: AsyncClient, auth_headers):
        resp = await client.patch(
            "/api/wizards/incident/step/1",
            json={"what_went_wrong": "wrong step"},
            headers=auth_headers,
        )
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "WIZARD_UNKNOWN_FIELDS"

    async def test_step_out_of_range(self, client: AsyncClient, auth_headers):
        resp = await client.patch("/api/wizards/incident/step/9", json={}, headers=auth_headers)
        assert resp.status_code == 404

    async def test_submit_before_done(self, client: AsyncClient, auth_headers):
        await self._complete(client, auth_headers, "incident", 1, INCIDENT_STEPS[1])
        resp = await client.post("/api/wizards/incident/submit", headers=auth_headers)
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "WIZARD_STEP_INCOMPLETE"

    async def test_full_flow(self, client: AsyncClient, auth_headers, fake_sheets):
        for step, data in INCIDENT_STEPS.items():
            resp = await self._complete(client, auth_headers, "incident", step, data)
            assert resp.status_code == 200, resp.text
        assert resp.json()["is_complete"] is True

        resp = await client.post("/api/wizards/incident/submit", headers=auth_headers)
        assert resp.status_code == 201
        body = resp.json()
        assert body["domain"] == "incidents"
        assert body["item"]["id"].startswith("incident-")
        assert body["item"]["preventive_action"] == "Check door seals every Monday"
        assert body["sync"]["success"] is True
        assert fake_sheets.actions("incidents") == ["create"]

        progress = (await client.get("/api/wizards/incident", headers=auth_headers)).json()
        assert progress["completed_steps"] == []
        assert progress["draft_data"] == {}

        listing = (await client.get("/api/incidents/", headers=auth_headers)).json()
        assert listing["total"] == 1

    async def test_progress_is_per_staff_member(self, client: AsyncClient, auth_headers):
        await self._complete(client, auth_headers, "incident", 1, INCIDENT_STEPS[1])

        other = {"Authorization": f"Bearer {create_access_token('Hugo')}"}
        progress = (await client.get("/api/wizards/incident", headers=other)).json()
        assert progress["completed_steps"] == []

    async def test_discard(self, client: AsyncClient, auth_headers):
        await self._complete(client, auth_headers, "incident", 1, INCIDENT_STEPS[1])

        resp = await client.delete("/api/wizards/incident", headers=auth_headers)
        assert resp.status_code == 204

        progress = (await client.get("/api/wizards/incident", headers=auth_headers)).json()
        assert progress["completed_steps"] == []

    async def test_blanking_a_completed_step_reopens_it(self, client: AsyncClient, auth_headers):
        for step, data in SUPPLIER_STEPS.items():
            resp = await self._complete(client, auth_headers, "supplier", step, data)
            assert resp.status_code == 200, resp.text
        assert resp.json()["completed_steps"] == [1, 2, 3, 4]

        resp = await client.patch(
            "/api/wizards/supplier/step/2",
            json={"contact_person": "", "phone": ""},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["completed_steps"] == [1]
        assert resp.json()["current_step"] == 2
        assert resp.json()["is_complete"] is False

        resp = await client.post("/api/wizards/supplier/submit", headers=auth_headers)
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "WIZARD_STEP_INCOMPLETE"

        listing = (await client.get("/api/suppliers/", headers=auth_headers)).json()
        assert listing["total"] == 0

    async def test_editing_a_completed_step_keeps_it(self, client: AsyncClient, auth_headers):
        for step, data in SUPPLIER_STEPS.items():
            await self._complete(client, auth_headers, "supplier", step, data)

        resp = await client.patch(
            "/api/wizards/supplier/step/2",
            json={"phone": "09 555 9999"},
            headers=auth_headers,
        )
        assert resp.json()["completed_steps"] == [1, 2, 3, 4]

        resp = await client.post("/api/wizards/supplier/submit", headers=auth_headers)
        assert resp.status_code == 201
        assert resp.json()["item"]["phone"] == "09 555 9999"
