"""Client for the Google Apps Script web apps that mirror each record type.

Writes are JSON POSTs carrying an ``action`` (create / update / delete),
the record in camelCase, and a ``unixTimestamp``. Reads are plain GETs
answering either ``{"success": true, "data": [...]}`` or
``{"status": "success", "events": [...]}``.

The client never raises for remote problems. Every call returns a
result object; the caller keeps its local change regardless.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import date, datetime

import httpx
from pydantic.alias_generators import to_camel, to_snake

from taquero.config import settings

logger = logging.getLogger("taquero.sheets")

NOT_CONFIGURED = "Google Sheets URL not configured"

# Local bookkeeping that never goes to the sheet
_LOCAL_ONLY = {"synced_at", "sync_error"}


@dataclass
class SyncResult:
    success: bool
    error: str | None = None


@dataclass
class FetchResult:
    rows: list[dict] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def _jsonable(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def to_sheet_payload(record: dict) -> dict:
    return {
        to_camel(key): _jsonable(value)
        for key, value in record.items()
        if key not in _LOCAL_ONLY
    }


def from_sheet_row(row: dict) -> dict:
    return {to_snake(key): value for key, value in row.items()}


class SheetsClient:
    """One instance per request; ``transport`` lets tests swap the network."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # Apps Script answers with a redirect to googleusercontent.com
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=settings.sheets_timeout_seconds,
            follow_redirects=True,
        )

    async def push(self, domain: str, action: str, record: dict) -> SyncResult:
        url = settings.sheets_url(domain)
        if not url:
            logger.warning("%s: %s, keeping local copy only", domain, NOT_CONFIGURED)
            return SyncResult(success=False, error=NOT_CONFIGURED)

        payload = {"action": action, **to_sheet_payload(record)}
        payload["unixTimestamp"] = int(time.time())
        try:
            async with self._client() as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                return self._check_write(domain, action, response)
        except httpx.HTTPError as e:
            logger.warning("%s %s sync failed: %s", domain, action, e)
            return SyncResult(success=False, error=str(e) or e.__class__.__name__)

    async def push_form(self, domain: str, action: str, data: dict) -> SyncResult:
        """Form-encoded variant (``action``, JSON ``data``, ``timestamp``)."""
        url = settings.sheets_url(domain)
        if not url:
            logger.warning("%s: %s, keeping local copy only", domain, NOT_CONFIGURED)
            return SyncResult(success=False, error=NOT_CONFIGURED)

        form = {
            "action": action,
            "data": json.dumps(to_sheet_payload(data)),
            "timestamp": datetime.utcnow().isoformat(),
        }
        try:
            async with self._client() as client:
                response = await client.post(url, data=form)
                response.raise_for_status()
                return self._check_write(domain, action, response)
        except httpx.HTTPError as e:
            logger.warning("%s %s sync failed: %s", domain, action, e)
            return SyncResult(success=False, error=str(e) or e.__class__.__name__)

    def _check_write(self, domain: str, action: str, response: httpx.Response) -> SyncResult:
        try:
            body = response.json()
        except ValueError:
            # Some deployments answer writes with plain text
            return SyncResult(success=True)
        if isinstance(body, dict) and (
            body.get("success") is False or body.get("status") == "error"
        ):
            error = body.get("error") or body.get("message") or "Failed to save"
            logger.warning("%s %s rejected by sheet: %s", domain, action, error)
            return SyncResult(success=False, error=str(error))
        logger.info("%s %s synced", domain, action)
        return SyncResult(success=True)

    async def fetch(self, domain: str) -> FetchResult:
        url = settings.sheets_url(domain)
        if not url:
            logger.warning("%s: %s, skipping fetch", domain, NOT_CONFIGURED)
            return FetchResult(error=NOT_CONFIGURED)

        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.warning("%s fetch failed: %s", domain, e)
            return FetchResult(error=str(e) or e.__class__.__name__)
        except ValueError:
            logger.warning("%s fetch returned invalid JSON", domain)
            return FetchResult(error="Invalid JSON from Google Sheets")

        if isinstance(body, dict):
            if body.get("success") and isinstance(body.get("data"), list):
                rows = body["data"]
            elif body.get("status") == "success" and isinstance(body.get("events"), list):
                rows = body["events"]
            else:
                error = body.get("error") or body.get("message") or "Failed to fetch data"
                return FetchResult(error=str(error))
        else:
            return FetchResult(error="Unexpected response from Google Sheets")

        logger.info("%s: fetched %d rows", domain, len(rows))
        return FetchResult(rows=[from_sheet_row(r) for r in rows if isinstance(r, dict)])


def get_sheets_client() -> SheetsClient:
    return SheetsClient()
