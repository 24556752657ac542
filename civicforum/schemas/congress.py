"""Pydantic schemas for Congress.gov data: bills, votes, committees."""

from typing import Literal
from pydantic import BaseModel

from civicforum.schemas.common import DataSource


class SponsoredBill(BaseModel):
    """A bill sponsored by a member."""

    number: str | None = None
    title: str | None = None
    type: str | None = None
    congress: int | None = None
    introduced_date: str | None = None
    latest_action: str = "No action"
    latest_action_date: str | None = None
    url: str | None = None


class BillsResponse(BaseModel):
    bills: list[SponsoredBill]
    total: int
    source: DataSource
    error: str | None = None


class PartyTally(BaseModel):
    yea: int = 0
    nay: int = 0


class PartyVote(BaseModel):
    democratic: PartyTally = PartyTally()
    republican: PartyTally = PartyTally()


MemberPosition = Literal["Yea", "Nay", "Not Voting", "Present"]


class VoteRecord(BaseModel):
    """A roll-call vote with the member's position."""

    roll_call_number: int | None = None
    date: str | None = None
    question: str = "Vote"
    result: str = "Unknown"
    description: str = ""
    bill_number: str | None = None
    bill_title: str | None = None
    member_vote: MemberPosition = "Not Voting"
    party_vote: PartyVote = PartyVote()


class VoteStatistics(BaseModel):
    total_votes: int
    yea_votes: int
    nay_votes: int
    missed_votes: int
    participation_rate: int


class VotesResponse(BaseModel):
    bioguide_id: str
    votes: list[VoteRecord]
    statistics: VoteStatistics
    source: DataSource
    error: str | None = None


class CommitteesResponse(BaseModel):
    bioguide_id: str
    committees: list[str]
    source: DataSource
    error: str | None = None
