"""Pydantic schemas for legislator registry records."""

from datetime import date
from typing import Literal
from pydantic import BaseModel, Field


class Legislator(BaseModel):
    """Canonical legislator identity built from the congress-legislators registry.

    ``bioguide_id`` is the join key across every other source. Names vary by
    source and are only used for fuzzy reconciliation.
    """

    bioguide_id: str = Field(..., pattern=r"^[A-Z]\d{6}$")
    first_name: str
    last_name: str
    full_name: str
    state: str = Field(..., min_length=2, max_length=2, description="Two-letter state code")
    party: Literal["R", "D", "I"]
    chamber: Literal["senate", "house"] = "senate"
    since_year: int | None = None
    term_end: date | None = None
    state_rank: str | None = None
    phone: str | None = None
    website: str | None = None
    office_address: str | None = None
    contact_form: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    youtube: str | None = None
    instagram: str | None = None
    opensecrets_id: str | None = None
    fec_id: str | None = None
    govtrack_id: int | None = None
    birthday: date | None = None
    gender: str | None = None
    photo_url: str | None = None


class SocialHandles(BaseModel):
    """Social media handles keyed by bioguide ID in the social registry."""

    twitter: str | None = None
    facebook: str | None = None
    youtube: str | None = None
    instagram: str | None = None
