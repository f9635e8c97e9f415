"""Auth routes: shared app password + pick your name.

Route overview:
  GET  /staff-names  names offered on the login screen (no auth)
  POST /login        JSON {name, password} → JWT
  POST /token        same, as an OAuth2 password form (for /docs)
  GET  /me           the staff member the token belongs to
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm

from taquero.auth.deps import StaffUser, get_current_user, verify_login
from taquero.auth.jwt import create_access_token
from taquero.config import settings
from taquero.schemas.auth import LoginRequest, StaffLoginOut, StaffNamesOut, Token

logger = logging.getLogger(__name__)

router = APIRouter()


def _login(name: str, password: str) -> Token:
    user = verify_login(name, password)
    if user is None:
        logger.info("Rejected login for %r", name)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return Token(access_token=create_access_token(user.name), staff_name=user.name)


@router.get("/staff-names", response_model=StaffNamesOut)
async def staff_names():
    return StaffNamesOut(names=settings.staff_name_list)


@router.post("/login", response_model=Token)
async def login(body: LoginRequest):
    """Name + shared app password. Returns a JWT carrying the name."""
    return _login(body.name, body.password)


@router.post("/token", response_model=Token)
async def token(form: OAuth2PasswordRequestForm = Depends()):
    return _login(form.username, form.password)


@router.get("/me", response_model=StaffLoginOut)
async def me(user: StaffUser = Depends(get_current_user)):
    return StaffLoginOut(name=user.name)
