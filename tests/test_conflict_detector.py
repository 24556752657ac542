"""Tests for conflict-of-interest detection and scoring."""

import pytest

from civicforum.schemas.conflict import Conflict
from civicforum.services.conflict_detector import (
    ConflictPolicy,
    ConflictSignals,
    build_report,
    conflict_score,
    detect_conflicts,
    risk_label,
)


class TestDetectConflicts:
    """Tests for detect_conflicts."""

    def test_no_signals_no_conflicts(self):
        """Should report nothing for a quiet senator."""
        assert detect_conflicts(ConflictSignals()) == []

    def test_committee_overlap_medium(self):
        """Should flag a Commerce member with 15 trades as a medium overlap."""
        conflicts = detect_conflicts(ConflictSignals(committees=["Commerce"], trade_count=15))
        assert len(conflicts) == 1
        assert conflicts[0].type == "insider_trading"
        assert conflicts[0].severity == "medium"
        assert conflicts[0].title == "Committee + Stock Trade Overlap"
        assert "Commerce" in conflicts[0].description

    def test_committee_keyword_is_case_insensitive(self):
        """Should match keywords inside longer committee names."""
        conflicts = detect_conflicts(
            ConflictSignals(committees=["Committee on Banking, Housing, and Urban Affairs"], trade_count=11)
        )
        assert len(conflicts) == 1

    def test_committee_needs_more_than_ten_trades(self):
        """Should not flag the overlap at exactly ten trades."""
        assert detect_conflicts(ConflictSignals(committees=["Finance"], trade_count=10)) == []

    def test_unrelated_committee_ignored(self):
        """Should ignore committees without a sensitive keyword."""
        assert detect_conflicts(ConflictSignals(committees=["Judiciary"], trade_count=30)) == []

    def test_above_average_trading(self):
        """Should flag more than 50 trades as above average."""
        conflicts = detect_conflicts(ConflictSignals(trade_count=51))
        assert [c.title for c in conflicts] == ["Above Average Trading"]
        assert conflicts[0].severity == "medium"

    def test_high_trading_activity(self):
        """Should flag more than 100 trades as unusually high, not also above average."""
        conflicts = detect_conflicts(ConflictSignals(trade_count=101))
        assert [c.title for c in conflicts] == ["Unusually High Trading Activity"]
        assert conflicts[0].severity == "high"

    def test_overlap_escalates_to_high(self):
        """Should list the overlap first and escalate it above 50 trades."""
        conflicts = detect_conflicts(ConflictSignals(committees=["Energy and Natural Resources"], trade_count=120))
        assert [c.title for c in conflicts] == [
            "Committee + Stock Trade Overlap",
            "Unusually High Trading Activity",
        ]
        assert conflicts[0].severity == "high"

    def test_custom_policy_thresholds(self):
        """Should honor a policy with different thresholds."""
        policy = ConflictPolicy(above_average_trades=5, high_activity_trades=20)
        conflicts = detect_conflicts(ConflictSignals(trade_count=6), policy)
        assert [c.title for c in conflicts] == ["Above Average Trading"]


class TestScoring:
    """Tests for conflict_score and risk_label."""

    def test_scenario_commerce_fifteen_trades(self):
        """Should score a single medium conflict as 15, Low Risk."""
        report = build_report(ConflictSignals(committees=["Commerce"], trade_count=15), bioguide_id="S000001")
        assert report.score == 15
        assert report.label == "Low Risk"
        assert report.bioguide_id == "S000001"

    def test_two_high_conflicts_is_high_risk(self):
        """Should reach High Risk with two high conflicts."""
        report = build_report(ConflictSignals(committees=["Finance"], trade_count=150))
        assert report.score == 60
        assert report.label == "High Risk"

    def test_score_is_capped(self):
        """Should never exceed the maximum score."""
        conflicts = [Conflict(type="insider_trading", severity="high", title="x", description="y")] * 10
        assert conflict_score(conflicts) == 100

    def test_heavy_weights_are_capped(self):
        """Should cap the score even when the policy weights are large."""
        policy = ConflictPolicy(severity_weights={"high": 80, "medium": 40, "low": 10})
        report = build_report(ConflictSignals(committees=["Finance"], trade_count=150), policy)
        assert report.score == 100

    def test_score_is_monotonic_in_trades(self):
        """Should never decrease as the trade count grows."""
        scores = [
            build_report(ConflictSignals(committees=["Commerce"], trade_count=n)).score
            for n in range(0, 200)
        ]
        assert all(a <= b for a, b in zip(scores, scores[1:]))
        assert all(0 <= s <= 100 for s in scores)

    @pytest.mark.parametrize(
        "score,label",
        [(0, "Clean"), (5, "Low Risk"), (29, "Low Risk"), (30, "Moderate Risk"), (59, "Moderate Risk"), (60, "High Risk")],
    )
    def test_risk_labels(self, score, label):
        """Should map score bands to labels."""
        assert risk_label(score) == label
