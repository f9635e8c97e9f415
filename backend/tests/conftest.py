"""Pytest configuration and fixtures for Taquero tests.

Provides an in-memory database, an authenticated client, and a fake
Google Sheets endpoint that records every request it receives.
"""

import json
from typing import AsyncGenerator
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import taquero.models  # noqa: F401  register mappers
from taquero.auth.jwt import create_access_token
from taquero.config import SHEET_DOMAINS, settings
from taquero.database import Base, get_db
from taquero.main import app
from taquero.services.sheets import SheetsClient, get_sheets_client

TEST_STAFF = "Martin"


# ── Test Database Setup ──────────────────────────────────────────

@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


# ── Fake Google Sheets ───────────────────────────────────────────

class FakeSheets:
    """Stands in for every Apps Script web app.

    ``calls`` records (domain, action, payload) for each write;
    ``rows`` holds what a GET on a domain returns; ``fail`` makes every
    write come back with ``{"success": false}``.
    """

    def __init__(self):
        self.calls: list[tuple[str, str, dict]] = []
        self.rows: dict[str, list[dict]] = {}
        self.fail = False
        self.offline = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.offline:
            raise httpx.ConnectError("Network is unreachable", request=request)

        domain = request.url.path.strip("/")
        if request.method == "GET":
            return httpx.Response(200, json={"success": True, "data": self.rows.get(domain, [])})

        if request.headers.get("content-type", "").startswith("application/json"):
            body = json.loads(request.content)
        else:
            form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
            body = {"action": form["action"], **json.loads(form["data"])}
        action = body.pop("action")
        self.calls.append((domain, action, body))

        if self.fail:
            return httpx.Response(200, json={"success": False, "error": "Sheet is locked"})
        return httpx.Response(200, json={"success": True})

    def actions(self, domain: str) -> list[str]:
        return [action for d, action, _ in self.calls if d == domain]


@pytest.fixture
def fake_sheets(monkeypatch) -> FakeSheets:
    sheets = FakeSheets()
    for domain in SHEET_DOMAINS:
        monkeypatch.setattr(settings, f"sheets_url_{domain}", f"https://sheets.test/{domain}")
    return sheets


@pytest.fixture(autouse=True)
def _no_redis(monkeypatch):
    monkeypatch.setattr(settings, "cache_enabled", False)


@pytest_asyncio.fixture
async def client(db_session, fake_sheets) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the database and Google Sheets swapped out."""

    async def override_get_db():
        yield db_session

    def override_sheets():
        return SheetsClient(transport=httpx.MockTransport(fake_sheets.handler))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_sheets_client] = override_sheets

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Auth Fixtures ────────────────────────────────────────────────

@pytest.fixture
def test_token() -> str:
    return create_access_token(TEST_STAFF)


@pytest.fixture
def auth_headers(test_token: str) -> dict:
    return {"Authorization": f"Bearer {test_token}"}


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: API endpoint tests")
    config.addinivalue_line("markers", "auth: Authentication tests")
    config.addinivalue_line("markers", "cache: Cache tests")
