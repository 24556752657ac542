"""Tests for view model assembly and the list queries."""

import pytest

from civicforum.schemas.common import DataSource
from civicforum.schemas.conflict import ConflictReport
from civicforum.schemas.legislator import Legislator
from civicforum.services.conflict_detector import ConflictSignals, build_report
from civicforum.services.view_model import (
    UpstreamOverlay,
    assemble,
    derive_profile,
    filter_senators,
    leaderboard,
    parse_net_worth,
    search_senators,
    senate_stats,
    sort_senators,
)

CLEAN = ConflictReport(conflicts=[], score=0, label="Clean")


def legislator(bioguide_id="S000001", first="Jane", last="Smith", state="CA", party="D", since=2019):
    return Legislator(
        bioguide_id=bioguide_id,
        first_name=first,
        last_name=last,
        full_name=f"{first} {last}",
        state=state,
        party=party,
        since_year=since,
    )


def view(overlay=None, **kwargs):
    leg = legislator(**kwargs)
    return assemble(leg, derive_profile(leg), CLEAN, overlay)


class TestDeriveProfile:
    """Tests for derive_profile."""

    def test_seeded_by_bioguide(self):
        """Should derive the same estimates from the bioguide ID."""
        profile = derive_profile(legislator())
        assert profile.net_worth == "$65.8M"
        assert profile.net_worth_change == 12.0
        assert profile.party_votes == 87
        assert profile.attendance == 92


class TestAssemble:
    """Tests for assemble."""

    def test_identity_fields(self):
        """Should expand the state name and keep the code."""
        senator = view()
        assert senator.id == "s000001"
        assert senator.state == "California"
        assert senator.state_abbr == "CA"
        assert senator.party == "D"
        assert senator.sources.identity == DataSource.LIVE

    def test_derived_values_without_upstream(self):
        """Should fall back to estimates and mark unknown groups unavailable."""
        senator = view()
        assert senator.attendance == 92
        assert senator.sources.voting == DataSource.ESTIMATED
        assert senator.sources.net_worth == DataSource.ESTIMATED
        assert senator.sources.trades == DataSource.UNAVAILABLE
        assert senator.sources.committees == DataSource.UNAVAILABLE
        assert senator.stock_trades == 0

    def test_upstream_overrides_derived(self):
        """Should prefer real values for the same field."""
        overlay = UpstreamOverlay(
            trade_count=7,
            trades_source=DataSource.FALLBACK,
            committees=["Finance"],
            attendance=100,
            party_votes=95,
        )
        senator = view(overlay)
        assert senator.stock_trades == 7
        assert senator.sources.trades == DataSource.FALLBACK
        assert senator.attendance == 100
        assert senator.party_votes == 95
        assert senator.sources.voting == DataSource.LIVE
        assert senator.committees == ["Finance"]
        assert senator.sources.committees == DataSource.LIVE

    def test_conflicts_come_from_report(self):
        """Should copy conflicts, score and label from the report."""
        leg = legislator()
        report = build_report(ConflictSignals(committees=["Commerce"], trade_count=15))
        senator = assemble(leg, derive_profile(leg), report, UpstreamOverlay(trade_count=15))
        assert senator.conflict_score == 15
        assert senator.risk_label == "Low Risk"
        assert len(senator.conflicts) == 1

    def test_serializes_camel_case(self):
        """Should emit camelCase keys for the dashboard."""
        data = view().model_dump(by_alias=True)
        assert data["stateAbbr"] == "CA"
        assert "netWorth" in data
        assert "conflictScore" in data


class TestParseNetWorth:
    """Tests for parse_net_worth."""

    @pytest.mark.parametrize(
        "value,expected",
        [("$12.3M", 12_300_000), ("$500K", 500_000), ("$1.2B", 1_200_000_000), ("N/A", 0), (None, 0), (42, 42)],
    )
    def test_parses_display_strings(self, value, expected):
        """Should convert display strings to numbers."""
        assert parse_net_worth(value) == pytest.approx(expected)


@pytest.fixture
def senators():
    return [
        view(UpstreamOverlay(trade_count=3), bioguide_id="S000001", first="Jane", last="Smith", state="CA", party="D", since=2019),
        view(UpstreamOverlay(trade_count=40), bioguide_id="T000278", first="Tommy", last="Tuberville", state="AL", party="R", since=2021),
        view(UpstreamOverlay(trade_count=0), bioguide_id="S000033", first="Bernard", last="Sanders", state="VT", party="I", since=2007),
    ]


class TestQueries:
    """Tests for filter, search, sort, stats and leaderboard."""

    def test_filter_by_party(self, senators):
        """Should keep only the requested party."""
        assert [s.last_name for s in filter_senators(senators, party="r")] == ["Tuberville"]

    def test_filter_by_state_code_or_name(self, senators):
        """Should accept either the state code or its full name."""
        assert len(filter_senators(senators, state="ca")) == 1
        assert len(filter_senators(senators, state="Vermont")) == 1

    def test_filter_has_conflicts(self, senators):
        """Should split on whether any conflict was detected."""
        assert filter_senators(senators, has_conflicts=True) == []
        assert len(filter_senators(senators, has_conflicts=False)) == 3

    def test_search(self, senators):
        """Should match names and states case-insensitively."""
        assert [s.last_name for s in search_senators(senators, "tuber")] == ["Tuberville"]
        assert [s.last_name for s in search_senators(senators, "califor")] == ["Smith"]
        assert len(search_senators(senators, "  ")) == 3

    def test_sort_by_trades(self, senators):
        """Should sort by trade count, highest first."""
        assert [s.last_name for s in sort_senators(senators, "trades")] == ["Tuberville", "Smith", "Sanders"]

    def test_sort_by_years(self, senators):
        """Should put the longest serving senator first."""
        assert [s.last_name for s in sort_senators(senators, "years")] == ["Sanders", "Smith", "Tuberville"]

    def test_sort_by_name(self, senators):
        """Should sort alphabetically by display name."""
        assert [s.name for s in sort_senators(senators, "name")] == ["Bernard Sanders", "Jane Smith", "Tommy Tuberville"]

    def test_unknown_sort_key(self, senators):
        """Should reject an unknown sort key."""
        with pytest.raises(ValueError):
            sort_senators(senators, "shoe_size")

    def test_stats(self, senators):
        """Should total trades and count senators."""
        stats = senate_stats(senators)
        assert stats.total_senators == 3
        assert stats.total_trades == 43
        assert stats.total_conflicts == 0

    def test_stats_empty(self):
        """Should not divide by zero for an empty list."""
        assert senate_stats([]).avg_attendance == 0

    def test_leaderboard(self, senators):
        """Should rank by tenure and trades and split by party."""
        board = leaderboard(senators, current_year=2025)
        assert board.longest_serving[0].bioguide_id == "S000033"
        assert board.longest_serving[0].value == 18
        assert [e.bioguide_id for e in board.most_trades] == ["T000278", "S000001"]
        assert board.party_breakdown.independent == 1
        assert board.party_breakdown.republican == 1
