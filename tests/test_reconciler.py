"""Tests for matching trade filer names to canonical legislators."""

import pytest

from civicforum.schemas.legislator import Legislator
from civicforum.schemas.trade import TradeRecord
from civicforum.services.reconciler import (
    active_traders,
    aggregate_by_matched_entity,
    match_by_name,
    match_candidates,
    trade_counts_by_bioguide,
    trades_for_legislator,
)


def legislator(bioguide_id, first, last, state="CA", party="D"):
    return Legislator(
        bioguide_id=bioguide_id,
        first_name=first,
        last_name=last,
        full_name=f"{first} {last}",
        state=state,
        party=party,
    )


def trade(senator, ticker="NVDA", transaction_type="purchase"):
    return TradeRecord(senator=senator, ticker=ticker, transaction_type=transaction_type)


@pytest.fixture
def canonical():
    return [
        legislator("P000197", "Nancy", "Pelosi"),
        legislator("T000278", "Tommy", "Tuberville", "AL", "R"),
        legislator("S000001", "Rick", "Scott", "FL", "R"),
        legislator("S000002", "Tim", "Scott", "SC", "R"),
    ]


class TestMatchByName:
    """Tests for match_by_name."""

    def test_matches_honorific_prefix(self, canonical):
        """Should match 'Sen. Pelosi' to Nancy Pelosi."""
        assert match_by_name("Sen. Pelosi", canonical).bioguide_id == "P000197"

    def test_matches_full_name_case_insensitive(self, canonical):
        """Should match regardless of case."""
        assert match_by_name("TOMMY TUBERVILLE", canonical).bioguide_id == "T000278"

    def test_no_match(self, canonical):
        """Should return None for an unknown name."""
        assert match_by_name("Jane Doe", canonical) is None

    def test_empty_text(self, canonical):
        """Should return None for blank input."""
        assert match_by_name("   ", canonical) is None

    def test_shared_surname_is_ambiguous(self, canonical):
        """Should not guess between two senators named Scott."""
        assert len(match_candidates("Senator Scott", canonical)) == 2
        assert match_by_name("Senator Scott", canonical) is None

    def test_first_name_disambiguates(self, canonical):
        """Should pick the Scott whose first name appears in the text."""
        assert match_by_name("Tim Scott", canonical).bioguide_id == "S000002"
        assert match_by_name("Rick Scott", canonical).bioguide_id == "S000001"


class TestAggregateByMatchedEntity:
    """Tests for per-entity trade aggregation."""

    def test_groups_by_bioguide(self, canonical):
        """Should count trades, tickers and types per matched legislator."""
        records = [
            trade("Tommy Tuberville", "NVDA"),
            trade("Tommy Tuberville", "AAPL", "sale"),
            trade("Sen. Tuberville", "NVDA"),
            trade("Nancy Pelosi", "MSFT"),
        ]
        stats = aggregate_by_matched_entity(records, canonical)
        assert stats["T000278"].count == 3
        assert stats["T000278"].tickers == {"NVDA", "AAPL"}
        assert stats["T000278"].types == {"purchase", "sale"}
        assert stats["P000197"].count == 1

    def test_excludes_unmatched_and_ambiguous(self, canonical):
        """Should leave out names with zero or several matches."""
        records = [trade("Jane Doe"), trade("Senator Scott")]
        assert aggregate_by_matched_entity(records, canonical) == {}

    def test_without_canonical_uses_normalized_text(self):
        """Should key by normalized free text when no registry is given."""
        records = [trade("Tommy  Tuberville"), trade("tommy tuberville")]
        stats = aggregate_by_matched_entity(records)
        assert list(stats) == ["tommy tuberville"]
        assert stats["tommy tuberville"].count == 2

    def test_counts_by_bioguide(self, canonical):
        """Should reduce stats to plain counts."""
        records = [trade("Nancy Pelosi"), trade("Nancy Pelosi", "AAPL")]
        assert trade_counts_by_bioguide(records, canonical) == {"P000197": 2}


class TestActiveTraders:
    """Tests for active_traders."""

    def test_filters_by_minimum_and_sorts(self, canonical):
        """Should keep entities with at least min_trades, busiest first."""
        records = (
            [trade("Nancy Pelosi")] * 3
            + [trade("Tommy Tuberville", t) for t in ("A", "B", "C", "D")]
            + [trade("Tim Scott")] * 2
        )
        stats = aggregate_by_matched_entity(records, canonical)
        traders = active_traders(stats, min_trades=3, names={"T000278": "Tommy Tuberville"})

        assert [t.key for t in traders] == ["T000278", "P000197"]
        assert traders[0].count == 4
        assert traders[0].name == "Tommy Tuberville"
        assert traders[0].tickers == ["A", "B", "C", "D"]
        assert traders[1].name is None


class TestTradesForLegislator:
    """Tests for trades_for_legislator."""

    def test_returns_only_matching_records(self, canonical):
        """Should return the records that resolve to the legislator."""
        records = [trade("Nancy Pelosi"), trade("Tommy Tuberville"), trade("Sen. Pelosi", "AAPL")]
        matched = trades_for_legislator(records, canonical[0], canonical)
        assert [t.ticker for t in matched] == ["NVDA", "AAPL"]
