"""Conflict of interest detection and scoring."""

import logging
from dataclasses import dataclass, field

from civicforum.config import Settings, get_settings
from civicforum.schemas.conflict import Conflict, ConflictReport

logger = logging.getLogger(__name__)

SEVERITY_WEIGHTS = {"high": 30, "medium": 15, "low": 5}


@dataclass(frozen=True)
class ConflictPolicy:
    """Thresholds that turn trading and committee signals into conflicts."""

    committee_keywords: tuple[str, ...] = ("finance", "banking", "commerce", "energy")
    committee_min_trades: int = 10
    high_activity_trades: int = 100
    above_average_trades: int = 50
    severity_weights: dict[str, int] = field(default_factory=lambda: dict(SEVERITY_WEIGHTS))
    max_score: int = 100
    high_risk_score: int = 60
    moderate_risk_score: int = 30

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ConflictPolicy":
        settings = settings or get_settings()
        return cls(
            committee_keywords=tuple(k.lower() for k in settings.conflict_committee_keywords),
            committee_min_trades=settings.conflict_committee_min_trades,
            high_activity_trades=settings.conflict_high_activity_trades,
            above_average_trades=settings.conflict_above_average_trades,
        )


DEFAULT_POLICY = ConflictPolicy()


@dataclass
class ConflictSignals:
    """Aggregated inputs for one legislator."""

    committees: list[str] = field(default_factory=list)
    trade_count: int = 0
    party_vote_percent: float | None = None


def detect_conflicts(signals: ConflictSignals, policy: ConflictPolicy = DEFAULT_POLICY) -> list[Conflict]:
    """
    Apply the conflict rules in order.

    The committee overlap check runs first, then the trade volume checks,
    which also fixes the display order of the result.

    Args:
        signals: Committees and trade count for one legislator
        policy: Thresholds to apply

    Returns:
        Detected conflicts, possibly empty
    """
    conflicts = []
    trades = signals.trade_count

    sensitive = [
        c for c in signals.committees
        if any(keyword in c.lower() for keyword in policy.committee_keywords)
    ]
    if sensitive and trades > policy.committee_min_trades:
        conflicts.append(
            Conflict(
                type="insider_trading",
                severity="high" if trades > policy.above_average_trades else "medium",
                title="Committee + Stock Trade Overlap",
                description=(
                    f"Sits on {sensitive[0]} while making {trades} stock trades. "
                    "Potential access to non-public information."
                ),
            )
        )

    if trades > policy.high_activity_trades:
        conflicts.append(
            Conflict(
                type="insider_trading",
                severity="high",
                title="Unusually High Trading Activity",
                description=(
                    f"{trades} stock trades is significantly above average for senators. "
                    "May warrant scrutiny."
                ),
            )
        )
    elif trades > policy.above_average_trades:
        conflicts.append(
            Conflict(
                type="insider_trading",
                severity="medium",
                title="Above Average Trading",
                description=f"{trades} trades is above the Senate average. Worth monitoring.",
            )
        )

    return conflicts


def conflict_score(conflicts: list[Conflict], policy: ConflictPolicy = DEFAULT_POLICY) -> int:
    """Sum of severity weights, capped at ``policy.max_score``."""
    score = sum(policy.severity_weights.get(c.severity, 0) for c in conflicts)
    return max(0, min(policy.max_score, score))


def risk_label(score: int, policy: ConflictPolicy = DEFAULT_POLICY) -> str:
    if score >= policy.high_risk_score:
        return "High Risk"
    if score >= policy.moderate_risk_score:
        return "Moderate Risk"
    if score > 0:
        return "Low Risk"
    return "Clean"


def build_report(
    signals: ConflictSignals,
    policy: ConflictPolicy = DEFAULT_POLICY,
    bioguide_id: str | None = None,
) -> ConflictReport:
    """Detect, score and label in one step. Never cached; inputs are."""
    conflicts = detect_conflicts(signals, policy)
    score = conflict_score(conflicts, policy)
    if conflicts:
        logger.debug("Detected %d conflict(s) for %s, score %d", len(conflicts), bioguide_id, score)
    return ConflictReport(
        bioguide_id=bioguide_id,
        conflicts=conflicts,
        score=score,
        label=risk_label(score, policy),
    )
