"""Background refresh: pull every Google Sheet into the local store.

Uses FastAPI's lifespan context to start/stop an asyncio background loop,
just a sleep loop that fires every ``SHEETS_REFRESH_MINUTES``. With the
default of 0 nothing is started and records are only pulled through the
explicit ``/refresh`` endpoints.

Usage:
    from taquero.services.scheduler import lifespan
    app = FastAPI(lifespan=lifespan, ...)
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taquero.config import settings
from taquero.database import async_session
from taquero.services.domains import DOMAINS
from taquero.services.proving import PROVING_KINDS, ProvingService
from taquero.services.records import RecordService
from taquero.services.sheets import SheetsClient
from taquero.utils.cache import close_redis

logger = logging.getLogger("taquero.scheduler")


async def refresh_all(sheets: SheetsClient | None = None) -> dict[str, str]:
    """Refresh every record type and proving kind, each in its own transaction.

    Returns a short outcome per sheet; one failing sheet does not stop
    the others.
    """
    sheets = sheets or SheetsClient()
    outcome: dict[str, str] = {}

    jobs = [(name, lambda svc, d=domain: svc.refresh(d)) for name, domain in DOMAINS.items()]
    for kind in PROVING_KINDS:
        jobs.append((f"proving_{kind}", lambda svc, k=kind: svc.refresh(k)))

    for name, job in jobs:
        try:
            async with async_session() as db:
                try:
                    if name.startswith("proving_"):
                        result = await job(ProvingService(db, None, sheets))
                    else:
                        result = await job(RecordService(db, None, sheets))
                    await db.commit()
                except Exception:
                    await db.rollback()
                    raise
        except Exception:
            logger.exception("Refresh failed for %s", name)
            outcome[name] = "failed"
            continue
        outcome[name] = result.error or f"{result.created} new, {result.updated} updated"
    return outcome


async def _scheduler_loop(interval_minutes: int) -> None:
    while True:
        await asyncio.sleep(interval_minutes * 60)
        try:
            outcome = await refresh_all()
            logger.info("Sheet refresh complete: %s", outcome)
        except Exception:
            logger.exception("Unhandled error in sheet refresh")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the refresh loop when configured; close Redis on shutdown."""
    task = None
    if settings.sheets_refresh_minutes > 0:
        task = asyncio.create_task(_scheduler_loop(settings.sheets_refresh_minutes))
        logger.info("Sheet refresh every %d minutes", settings.sheets_refresh_minutes)
    try:
        yield
    finally:
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            logger.info("Sheet refresh stopped")
        await close_redis()
