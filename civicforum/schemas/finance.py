"""Pydantic schemas for campaign finance endpoints (FEC and OpenSecrets)."""

from typing import Any
from pydantic import BaseModel, Field

from civicforum.schemas.common import DataSource


class FecTotals(BaseModel):
    """Candidate financial totals for one cycle."""

    candidate_id: str
    cycle: int
    receipts: float = 0
    disbursements: float = 0
    cash_on_hand: float = 0
    debt: float = 0
    individual_contributions: float = 0
    pac_contributions: float = 0
    source: DataSource = DataSource.LIVE


class OpenSecretsResponse(BaseModel):
    """Raw OpenSecrets payload plus a warning when sample data was served."""

    method: str
    cid: str | None = None
    cycle: str
    data: Any = None
    warning: str | None = Field(None, description="Set when the payload is sample data")
    source: DataSource = DataSource.LIVE


class Contributor(BaseModel):
    """Top contributor row from OpenSecrets candContrib."""

    org_name: str
    total: str
    pacs: str = "$0"
    indivs: str = "$0"
