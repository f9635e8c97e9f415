"""Pydantic schemas for step-by-step record entry."""

from pydantic import BaseModel


class WizardStepOut(BaseModel):
    number: int
    title: str
    required: list[str]
    optional: list[str] = []


class WizardOut(BaseModel):
    name: str
    title: str
    domain: str
    steps: list[WizardStepOut]


class WizardProgress(BaseModel):
    wizard: str
    current_step: int
    completed_steps: list[int]
    total_steps: int
    is_complete: bool
    draft_data: dict = {}


class WizardSubmitOut(BaseModel):
    """Result of turning a finished draft into a record."""
    domain: str
    item: dict
    sync: dict
