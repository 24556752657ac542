"""Assemble per-senator view models and query them.

Real upstream values always take precedence over derived ones for the same
field. Each field group records where its value came from.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from civicforum.schemas.common import DataSource
from civicforum.schemas.conflict import ConflictReport
from civicforum.schemas.legislator import Legislator
from civicforum.schemas.senator import (
    FieldSources,
    Leaderboard,
    LeaderboardEntry,
    PartyBreakdown,
    SenateStats,
    SenatorViewModel,
)
from civicforum.schemas.trade import TradeRecord
from civicforum.services.derived_data import (
    estimate_ideology,
    format_millions,
    js_round,
    name_seed,
    net_worth_history,
    voting_profile,
)
from civicforum.services.legislators import state_name

SORT_KEYS = ("name", "trades", "conflicts", "years", "netWorth")


@dataclass
class DerivedProfile:
    """Estimated values used when no upstream source has them."""

    net_worth: str
    net_worth_change: float
    party_votes: int
    attendance: int


@dataclass
class UpstreamOverlay:
    """Values obtained from real sources. ``None`` means not available."""

    trade_count: int | None = None
    trades_source: DataSource = DataSource.LIVE
    recent_trades: list[TradeRecord] = field(default_factory=list)
    committees: list[str] | None = None
    party_votes: int | None = None
    attendance: int | None = None
    net_worth: str | None = None
    social_source: DataSource = DataSource.LIVE


def derive_profile(legislator: Legislator) -> DerivedProfile:
    """Estimated net worth and voting figures seeded by the bioguide ID."""
    seed = name_seed(legislator.bioguide_id)
    history = net_worth_history(seed)
    latest, previous = history[-1].net_worth, history[-2].net_worth
    party_votes, attendance = voting_profile(seed)
    return DerivedProfile(
        net_worth=format_millions(latest),
        net_worth_change=js_round((latest - previous) / previous * 1000) / 10,
        party_votes=party_votes,
        attendance=attendance,
    )


def assemble(
    legislator: Legislator,
    derived: DerivedProfile,
    conflicts: ConflictReport,
    upstream: UpstreamOverlay | None = None,
) -> SenatorViewModel:
    """
    Merge identity, upstream and derived data into one view model.

    Args:
        legislator: Canonical identity
        derived: Estimated values
        conflicts: Report computed from the same inputs
        upstream: Real values that override derived ones

    Returns:
        SenatorViewModel with per-group provenance
    """
    upstream = upstream or UpstreamOverlay()
    sources = FieldSources(social=upstream.social_source)

    if upstream.trade_count is not None:
        stock_trades = upstream.trade_count
        sources.trades = upstream.trades_source
    else:
        stock_trades = 0
        sources.trades = DataSource.UNAVAILABLE

    if upstream.net_worth is not None:
        net_worth, net_worth_change = upstream.net_worth, 0.0
        sources.net_worth = DataSource.LIVE
    else:
        net_worth, net_worth_change = derived.net_worth, derived.net_worth_change
        sources.net_worth = DataSource.ESTIMATED

    if upstream.attendance is not None:
        attendance = upstream.attendance
        party_votes = upstream.party_votes if upstream.party_votes is not None else derived.party_votes
        sources.voting = DataSource.LIVE
    else:
        attendance, party_votes = derived.attendance, derived.party_votes
        sources.voting = DataSource.ESTIMATED

    if upstream.committees is not None:
        committees = upstream.committees
        sources.committees = DataSource.LIVE
    else:
        committees = []
        sources.committees = DataSource.UNAVAILABLE

    return SenatorViewModel(
        id=legislator.bioguide_id.lower(),
        bioguide_id=legislator.bioguide_id,
        name=legislator.full_name,
        first_name=legislator.first_name,
        last_name=legislator.last_name,
        state=state_name(legislator.state),
        state_abbr=legislator.state,
        party=legislator.party,
        photo=legislator.photo_url,
        since=legislator.since_year,
        term_end=legislator.term_end.isoformat() if legislator.term_end else None,
        state_rank=legislator.state_rank,
        phone=legislator.phone,
        website=legislator.website,
        office=legislator.office_address,
        twitter=legislator.twitter,
        facebook=legislator.facebook,
        youtube=legislator.youtube,
        opensecrets_id=legislator.opensecrets_id,
        fec_id=legislator.fec_id,
        net_worth=net_worth,
        net_worth_change=net_worth_change,
        stock_trades=stock_trades,
        party_votes=party_votes,
        attendance=attendance,
        committees=committees,
        conflicts=conflicts.conflicts,
        conflict_score=conflicts.score,
        risk_label=conflicts.label,
        ideology=estimate_ideology(party_votes, legislator.party),
        recent_trades=upstream.recent_trades,
        sources=sources,
    )


_MULTIPLIERS = {"K": 1e3, "M": 1e6, "B": 1e9}
_NET_WORTH_PATTERN = re.compile(r"^-?\$?\s*(-?[\d,]*\.?\d+)\s*([KMB])?", re.IGNORECASE)


def parse_net_worth(value) -> float:
    """'$12.3M' -> 12300000.0. Placeholders such as 'N/A' count as 0."""
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return 0.0
    match = _NET_WORTH_PATTERN.match(value.strip())
    if not match:
        return 0.0
    try:
        number = float(match.group(1).replace(",", ""))
    except ValueError:
        return 0.0
    if value.strip().startswith("-"):
        number = -abs(number)
    suffix = match.group(2)
    return number * _MULTIPLIERS[suffix.upper()] if suffix else number


def filter_senators(
    senators: Sequence[SenatorViewModel],
    party: str | None = None,
    state: str | None = None,
    has_conflicts: bool | None = None,
) -> list[SenatorViewModel]:
    """Exact-match filters; state accepts the code or the full name."""
    result = list(senators)
    if party:
        result = [s for s in result if s.party == party.upper()]
    if state:
        wanted = state.strip().lower()
        result = [s for s in result if s.state_abbr.lower() == wanted or s.state.lower() == wanted]
    if has_conflicts is not None:
        result = [s for s in result if bool(s.conflicts) == has_conflicts]
    return result


def search_senators(senators: Sequence[SenatorViewModel], query: str | None) -> list[SenatorViewModel]:
    """Case-insensitive substring search over name, state and state code."""
    if not query or not query.strip():
        return list(senators)
    q = query.strip().lower()
    return [
        s for s in senators
        if q in s.name.lower()
        or q in s.state.lower()
        or q == s.state_abbr.lower()
    ]


def sort_senators(senators: Sequence[SenatorViewModel], sort_by: str = "name") -> list[SenatorViewModel]:
    """
    Order senators for display.

    ``trades``, ``conflicts`` and ``netWorth`` sort descending, ``years``
    by first year in office ascending, ``name`` alphabetically. Ties keep
    name order.

    Raises:
        ValueError: for an unknown sort key
    """
    by_name = sorted(senators, key=lambda s: s.name.lower())
    if sort_by == "name":
        return by_name
    if sort_by == "trades":
        return sorted(by_name, key=lambda s: s.stock_trades, reverse=True)
    if sort_by == "conflicts":
        return sorted(by_name, key=lambda s: len(s.conflicts), reverse=True)
    if sort_by == "years":
        return sorted(by_name, key=lambda s: s.since if s.since is not None else 9999)
    if sort_by == "netWorth":
        return sorted(by_name, key=lambda s: parse_net_worth(s.net_worth), reverse=True)
    raise ValueError(f"Unknown sort key: {sort_by}")


def senate_stats(senators: Sequence[SenatorViewModel]) -> SenateStats:
    count = len(senators)
    return SenateStats(
        total_senators=count,
        total_trades=sum(s.stock_trades for s in senators),
        total_conflicts=sum(len(s.conflicts) for s in senators),
        avg_attendance=js_round(sum(s.attendance for s in senators) / count) if count else 0,
    )


def _entry(senator: SenatorViewModel, value: int) -> LeaderboardEntry:
    return LeaderboardEntry(
        bioguide_id=senator.bioguide_id,
        name=senator.name,
        state_abbr=senator.state_abbr,
        party=senator.party,
        value=value,
    )


def leaderboard(
    senators: Sequence[SenatorViewModel],
    limit: int = 25,
    current_year: int | None = None,
) -> Leaderboard:
    """Longest serving, most trades and the party split."""
    current_year = current_year or date.today().year
    serving = [s for s in sort_senators(senators, "years") if s.since is not None][:limit]
    traders = [s for s in sort_senators(senators, "trades") if s.stock_trades > 0][:limit]
    return Leaderboard(
        longest_serving=[_entry(s, current_year - s.since) for s in serving],
        most_trades=[_entry(s, s.stock_trades) for s in traders],
        party_breakdown=PartyBreakdown(
            republican=sum(1 for s in senators if s.party == "R"),
            democrat=sum(1 for s in senators if s.party == "D"),
            independent=sum(1 for s in senators if s.party == "I"),
        ),
    )
