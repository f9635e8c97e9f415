"""Pydantic schemas for staff login."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    name: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    staff_name: str


class StaffLoginOut(BaseModel):
    name: str


class StaffNamesOut(BaseModel):
    """Names offered on the login screen."""
    names: list[str]
