"""Record-entry wizards with save/resume.

Endpoints:
  GET    /api/wizards/                     → every wizard and its steps
  GET    /api/wizards/{name}               → caller's progress + draft
  PATCH  /api/wizards/{name}/step/{n}      → save step data (?complete=true to validate)
  POST   /api/wizards/{name}/submit        → create the record, clear progress
  DELETE /api/wizards/{name}               → discard progress
"""

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.auth.deps import StaffUser, get_current_user
from taquero.database import get_db
from taquero.routers.records import sync_status
from taquero.schemas.wizard import WizardOut, WizardProgress, WizardSubmitOut
from taquero.services import wizards
from taquero.services.domains import DOMAINS
from taquero.services.records import RecordService
from taquero.services.sheets import SheetsClient, get_sheets_client

router = APIRouter()


@router.get("/", response_model=list[WizardOut])
async def list_wizards(_user: StaffUser = Depends(get_current_user)):
    return [wizards.describe(w) for w in wizards.WIZARDS.values()]


@router.get("/{name}", response_model=WizardProgress)
async def get_progress(
    name: str,
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
):
    wizard = wizards.get_wizard(name)
    state = await wizards.get_or_create_state(db, wizard, user.name)
    return wizards.make_progress(wizard, state)


@router.patch("/{name}/step/{step}", response_model=WizardProgress)
async def save_step(
    name: str,
    step: int,
    data: dict = Body(...),
    complete: bool = False,
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
):
    wizard = wizards.get_wizard(name)
    state = await wizards.get_or_create_state(db, wizard, user.name)
    return await wizards.save_step(db, wizard, state, step, data, complete)


@router.post("/{name}/submit", response_model=WizardSubmitOut, status_code=201)
async def submit(
    name: str,
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
    sheets: SheetsClient = Depends(get_sheets_client),
):
    wizard = wizards.get_wizard(name)
    state = await wizards.get_or_create_state(db, wizard, user.name)
    draft = wizards.ready_to_submit(wizard, state)

    domain = DOMAINS[wizard.domain]
    body = domain.create_schema.model_validate(draft)
    record, sync = await RecordService(db, user, sheets).create(domain, body)
    await wizards.discard(db, state)

    return WizardSubmitOut(
        domain=domain.name,
        item=domain.out_schema.model_validate(record).model_dump(mode="json"),
        sync=sync_status(sync).model_dump(),
    )


@router.delete("/{name}", status_code=204)
async def discard_progress(
    name: str,
    db: AsyncSession = Depends(get_db),
    user: StaffUser = Depends(get_current_user),
):
    wizard = wizards.get_wizard(name)
    state = await wizards.get_or_create_state(db, wizard, user.name)
    await wizards.discard(db, state)
