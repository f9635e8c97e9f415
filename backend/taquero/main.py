import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taquero.config import settings
from taquero.middleware.exceptions import register_exception_handlers
from taquero.routers import (
    activity,
    auth,
    bulk_import,
    events,
    finance,
    food_safety,
    health,
    proving,
    staff,
    wizards,
)
from taquero.services.scheduler import lifespan

logging.getLogger("taquero").setLevel(logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title="Taquero",
    description="Food safety records and business management for a taqueria and its caravan",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
# Public
app.include_router(health.router)
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])

# Staff login required
app.include_router(events.router, prefix="/api/events", tags=["events"])
for prefix, router in food_safety.ROUTERS.items():
    app.include_router(router, prefix=prefix, tags=[prefix.removeprefix("/api/")])
app.include_router(staff.router, prefix="/api/staff", tags=["staff"])
app.include_router(proving.router, prefix="/api/proving", tags=["proving"])
app.include_router(wizards.router, prefix="/api/wizards", tags=["wizards"])
app.include_router(finance.router, prefix="/api/finance", tags=["finance"])
app.include_router(bulk_import.router, prefix="/api/bulk-import", tags=["bulk-import"])
app.include_router(activity.router, prefix="/api/activity", tags=["activity"])
