"""Health check and background refresh tests."""

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taquero.models.incident import IncidentRecord
from taquero.routers import health
from taquero.services import scheduler
from taquero.services.sheets import NOT_CONFIGURED, SheetsClient


@pytest.mark.api
@pytest.mark.asyncio
class TestHealth:
    async def test_liveness(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_ready_with_cache_disabled(self, client: AsyncClient, test_engine, monkeypatch):
        monkeypatch.setattr(health, "engine", test_engine)
        resp = await client.get("/health/ready")
        assert resp.status_code == 200
        assert resp.json()["checks"] == {"service": "ok", "database": "ok", "redis": "disabled"}


@pytest.mark.unit
@pytest.mark.asyncio
class TestRefreshAll:
    @pytest.fixture
    def sessions(self, test_engine, monkeypatch):
        factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
        monkeypatch.setattr(scheduler, "async_session", factory)
        return factory

    async def test_unconfigured_sheets_reported(self, sessions):
        outcome = await scheduler.refresh_all(SheetsClient(transport=httpx.MockTransport(
            lambda request: httpx.Response(500)
        )))
        assert outcome["incidents"] == NOT_CONFIGURED
        assert outcome["proving_cooling"] == NOT_CONFIGURED

    async def test_pulls_every_sheet(self, sessions, fake_sheets):
        fake_sheets.rows["incidents"] = [{
            "id": "incident-1-remote",
            "incidentDate": "2025-11-03",
            "personResponsible": "Hugo",
            "whatWentWrong": "Fryer thermostat stuck on high",
            "whatDidToFix": "Switched to the second fryer",
        }]
        sheets = SheetsClient(transport=httpx.MockTransport(fake_sheets.handler))

        outcome = await scheduler.refresh_all(sheets)
        assert outcome["incidents"] == "1 new, 0 updated"
        assert outcome["events"] == "0 new, 0 updated"
        assert outcome["proving_reheating"] == "0 new, 0 updated"

        async with sessions() as db:
            result = await db.execute(select(IncidentRecord))
            record = result.scalar_one()
        assert record.created_by == "system"
        assert record.synced_at is not None
