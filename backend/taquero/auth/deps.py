"""FastAPI dependencies for authentication.

There are no individual passwords: the kitchen shares one app password
and each person picks their name. The name is what ends up in
``created_by`` and the activity log.
"""

import secrets
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from taquero.auth.jwt import decode_token
from taquero.config import settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


@dataclass(frozen=True)
class StaffUser:
    name: str


def verify_login(name: str, password: str) -> StaffUser | None:
    if name not in settings.staff_name_list:
        return None
    if not secrets.compare_digest(password.encode(), settings.app_password.encode()):
        return None
    return StaffUser(name=name)


async def get_current_user(token: str = Depends(oauth2_scheme)) -> StaffUser:
    payload = decode_token(token)
    name: str | None = payload.get("sub")
    if not name or payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if name not in settings.staff_name_list:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Staff member no longer active",
        )
    return StaffUser(name=name)
