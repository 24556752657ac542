"""Tests for the seeded derived-data generators."""

import pytest

from civicforum.schemas.common import DataSource
from civicforum.services.derived_data import (
    GeneratorKind,
    dark_money_sources,
    estimate_ideology,
    generate,
    historical_data,
    js_round,
    lobbyists,
    name_seed,
    net_worth_history,
    timeline_events,
    trading_activity,
    voting_profile,
)


class TestSeed:
    """Tests for name_seed and rounding."""

    def test_sum_of_char_codes(self):
        """Should sum character codes."""
        assert name_seed("AB") == 131
        assert name_seed("S000001") == 372

    def test_js_round_half_up(self):
        """Should round halves toward positive infinity."""
        assert js_round(2.5) == 3
        assert js_round(-2.5) == -2
        assert js_round(2.4) == 2


class TestDeterminism:
    """Same input, same output."""

    @pytest.mark.parametrize("kind", list(GeneratorKind))
    def test_generators_are_deterministic(self, kind):
        """Should produce identical output for the same seed string."""
        first = generate("Jane Smith", kind, stock_trades=5, party="D", count=10)
        second = generate("Jane Smith", kind, stock_trades=5, party="D", count=10)
        assert first == second

    def test_different_seeds_differ(self):
        """Should vary with the seed."""
        assert net_worth_history(name_seed("Alpha")) != net_worth_history(name_seed("Omega"))


class TestNetWorthHistory:
    """Tests for net_worth_history."""

    def test_exact_first_year(self):
        """Should match the seeded formula for the first year."""
        points = net_worth_history(372)
        assert len(points) == 6
        assert points[0].year == 2019
        assert points[0].net_worth == 37_230_000
        assert points[0].assets_min == 33_507_000
        assert points[-1].year == 2024

    def test_bands_bracket_net_worth(self):
        """Should keep assets_min <= net_worth <= assets_max."""
        for point in net_worth_history(name_seed("Anyone")):
            assert point.assets_min <= point.net_worth <= point.assets_max
            assert point.liabilities_min <= point.liabilities_max


class TestTradingSeries:
    """Tests for trading activity, performance and summary."""

    def test_activity_months_and_counts(self):
        """Should cover twelve months with buys plus sells equal to trades."""
        activity = trading_activity(131)
        assert [p.month for p in activity][:3] == ["Jan", "Feb", "Mar"]
        assert len(activity) == 12
        for point in activity:
            assert 2 <= point.trades <= 9
            assert point.buys + point.sells == point.trades

    def test_historical_data_is_estimated(self):
        """Should tag the bundle estimated with a disclaimer."""
        data = historical_data("S000001")
        assert data.source == DataSource.ESTIMATED
        assert data.disclaimer
        assert data.trading_summary.total_trades == sum(p.trades for p in data.trading_activity)
        assert len(data.trading_performance) == 12


class TestDarkMoney:
    """Tests for dark_money_sources."""

    def test_empty_for_a_third_of_seeds(self):
        """Should return nothing when the seed is divisible by three."""
        assert dark_money_sources(name_seed("AAA")) == []

    def test_exact_values(self):
        """Should match the seeded formula."""
        sources = dark_money_sources(131)
        assert len(sources) == 4
        assert sources[0].name == "League of Conservation Voters"
        assert sources[0].type == "501c4"
        assert sources[0].amount_value == 500_131
        assert sources[0].amount == "$0.5M"
        assert sources[0].disclosed is False


class TestLobbyists:
    """Tests for lobbyists."""

    def test_exact_values(self):
        """Should match the seeded formula."""
        result = lobbyists(131)
        assert len(result) == 5
        first = result[0]
        assert first.name == "John Ashcroft"
        assert first.firm == "Ashcroft Law Firm"
        assert first.industry == "Pharmaceuticals"
        assert first.client == "Merck & Co"
        assert first.amount == "$200,131"


class TestTimeline:
    """Tests for timeline_events."""

    def test_sorted_newest_first(self):
        """Should order events by date descending."""
        events = timeline_events(131, 0, "D")
        dates = [e.date for e in events]
        assert dates == sorted(dates, reverse=True)

    def test_exact_events(self):
        """Should derive trade count, severity and text from the seed."""
        events = timeline_events(131, 0, "D")
        trades = [e for e in events if e.type == "trade"]
        assert len(trades) == 3
        assert trades[0].title == "Sold $100K-$250K in AAPL"
        assert trades[0].severity == "medium"
        assert trades[0].connection == "Health Committee Member"
        assert trades[1].severity == "high"

        donation = next(e for e in events if e.type == "donation")
        assert donation.title == "Received $41,000 from Industry PAC"
        assert donation.connection == "AFL-CIO"
        assert next(e for e in events if e.type == "bill").title == "Co-sponsored S.1131"

    def test_trade_events_capped_by_real_count(self):
        """Should emit at most three trade events."""
        events = timeline_events(131, 50, "R")
        assert sum(1 for e in events if e.type == "trade") == 3
        vote = next(e for e in events if e.type == "vote")
        assert vote.connection == "Potential conflict with stock holdings"


class TestVotingEstimates:
    """Tests for voting_profile and estimate_ideology."""

    def test_voting_profile(self):
        """Should derive party-line and attendance percentages from the seed."""
        assert voting_profile(372) == (87, 92)

    def test_ideology_by_party(self):
        """Should place parties on the expected side of the scale."""
        assert estimate_ideology(87, "D").label == "Moderate"
        assert estimate_ideology(100, "D").position == 50
        assert estimate_ideology(100, "R").label == "Very Conservative"
        assert estimate_ideology(80, "I").position == 50
