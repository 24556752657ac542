"""Pydantic schemas for the watchlist endpoints."""

from datetime import datetime
from typing import Literal
from uuid import UUID
from pydantic import BaseModel, Field


class WatchlistCreate(BaseModel):
    """Request body for adding a politician to the watchlist."""

    politician_id: str = Field(..., min_length=1, max_length=64, pattern=r"^[a-zA-Z0-9-]+$")
    politician_name: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-zA-Z\s.'-]+$")
    politician_party: Literal["R", "D", "I"]
    politician_state: str = Field(..., pattern=r"^[A-Z]{2}$")
    politician_chamber: Literal["senate", "house"] = "senate"


class AlertsUpdate(BaseModel):
    alerts_enabled: bool


class WatchlistItemResponse(BaseModel):
    id: UUID
    politician_id: str
    politician_name: str
    politician_party: str
    politician_state: str
    politician_chamber: str
    alerts_enabled: bool
    created_at: datetime

    class Config:
        from_attributes = True


class WatchlistResponse(BaseModel):
    items: list[WatchlistItemResponse]
    total: int
