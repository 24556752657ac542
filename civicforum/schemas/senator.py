"""Read models served to the dashboard for senators."""

from typing import Literal
from pydantic import Field

from civicforum.schemas.common import CamelModel, DataSource
from civicforum.schemas.conflict import Conflict
from civicforum.schemas.derived import IdeologyEstimate
from civicforum.schemas.trade import TradeRecord


class FieldSources(CamelModel):
    """Provenance per field group of a view model."""

    identity: DataSource = DataSource.LIVE
    trades: DataSource = DataSource.ESTIMATED
    net_worth: DataSource = DataSource.ESTIMATED
    voting: DataSource = DataSource.ESTIMATED
    committees: DataSource = DataSource.UNAVAILABLE
    social: DataSource = DataSource.LIVE


class SenatorViewModel(CamelModel):
    """Everything the dashboard shows for one senator."""

    id: str
    bioguide_id: str
    name: str
    first_name: str
    last_name: str
    state: str = Field(..., description="Full state name")
    state_abbr: str
    party: Literal["R", "D", "I"]
    photo: str | None = None
    since: int | None = None
    term_end: str | None = None
    state_rank: str | None = None
    phone: str | None = None
    website: str | None = None
    office: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    youtube: str | None = None
    opensecrets_id: str | None = None
    fec_id: str | None = None
    net_worth: str = "N/A"
    net_worth_change: float = 0
    stock_trades: int = 0
    party_votes: int = 0
    attendance: int = 0
    committees: list[str] = []
    conflicts: list[Conflict] = []
    conflict_score: int = 0
    risk_label: str = "Clean"
    ideology: IdeologyEstimate | None = None
    recent_trades: list[TradeRecord] = []
    sources: FieldSources = FieldSources()


class SenatorListResponse(CamelModel):
    """Paginated senators with the warnings collected while aggregating."""

    items: list[SenatorViewModel]
    total: int
    page: int
    page_size: int
    total_pages: int
    warnings: list[str] = []


class SenateStats(CamelModel):
    total_senators: int
    total_trades: int
    total_conflicts: int
    avg_attendance: int


class PartyBreakdown(CamelModel):
    republican: int = 0
    democrat: int = 0
    independent: int = 0


class LeaderboardEntry(CamelModel):
    bioguide_id: str
    name: str
    state_abbr: str
    party: Literal["R", "D", "I"]
    value: int


class Leaderboard(CamelModel):
    longest_serving: list[LeaderboardEntry]
    most_trades: list[LeaderboardEntry]
    party_breakdown: PartyBreakdown
