"""Pydantic schemas for conflict-of-interest signals."""

from typing import Literal
from pydantic import BaseModel, Field

ConflictType = Literal["insider_trading", "pay_to_play", "lobbying_influence", "unexplained_wealth"]
Severity = Literal["high", "medium", "low"]


class Conflict(BaseModel):
    """One derived conflict signal. Computed per request, never stored."""

    type: ConflictType
    severity: Severity
    title: str
    description: str


class ConflictReport(BaseModel):
    """Conflicts for one senator with the derived score."""

    bioguide_id: str | None = None
    conflicts: list[Conflict]
    score: int = Field(..., ge=0, le=100)
    label: str
