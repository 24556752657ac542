"""Match free-text names from trade disclosures to canonical legislators."""

import logging
from collections.abc import Iterable, Sequence

from civicforum.schemas.legislator import Legislator
from civicforum.schemas.trade import ActiveTrader, TradeRecord, TraderStats

logger = logging.getLogger(__name__)


def match_candidates(free_text: str, canonical: Sequence[Legislator]) -> list[Legislator]:
    """
    Every legislator the heuristic accepts for a free-text name.

    A legislator is a candidate when its last name is a substring of the
    text, or the text's last whitespace token equals its last name. Both
    sides are compared lower-cased, so "Sen. Smith" accepts "John Smith".

    Args:
        free_text: Name as written in the other source
        canonical: Legislators to match against

    Returns:
        Candidates in input order
    """
    text = free_text.lower().strip()
    if not text:
        return []
    last_token = text.split()[-1]

    candidates = []
    for legislator in canonical:
        last_name = legislator.last_name.lower().strip()
        if not last_name:
            continue
        if last_name in text or last_token == last_name:
            candidates.append(legislator)
    return candidates


def match_by_name(free_text: str, canonical: Sequence[Legislator]) -> Legislator | None:
    """
    Resolve a free-text name to one legislator.

    When several legislators share the matched surname, only those whose
    first name also appears in the text are kept. Anything other than a
    single survivor is treated as no match.

    Returns:
        The matched Legislator, or None for zero or ambiguous matches
    """
    candidates = match_candidates(free_text, canonical)
    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        return None

    text = free_text.lower()
    narrowed = [c for c in candidates if c.first_name and c.first_name.lower() in text]
    if len(narrowed) == 1:
        return narrowed[0]

    logger.debug(
        "Ambiguous name %r matches %s",
        free_text,
        ", ".join(c.bioguide_id for c in candidates),
    )
    return None


def _normalize_key(name: str) -> str:
    return " ".join(name.lower().split())


def aggregate_by_matched_entity(
    records: Iterable[TradeRecord],
    canonical: Sequence[Legislator] | None = None,
) -> dict[str, TraderStats]:
    """
    Per-entity trade count, ticker set and transaction type set.

    With ``canonical`` the key is the matched bioguide ID and records that
    match no one, or several legislators, are left out. Without it the key
    is the normalized free-text name.
    """
    stats: dict[str, TraderStats] = {}
    # Same names repeat across thousands of records
    resolved: dict[str, str | None] = {}
    unmatched = 0

    for record in records:
        if canonical is None:
            key = _normalize_key(record.senator)
            if not key:
                continue
        else:
            if record.senator not in resolved:
                match = match_by_name(record.senator, canonical)
                resolved[record.senator] = match.bioguide_id if match else None
            key = resolved[record.senator]
            if key is None:
                unmatched += 1
                continue

        entry = stats.setdefault(key, TraderStats())
        entry.count += 1
        if record.ticker:
            entry.tickers.add(record.ticker)
        entry.types.add(record.transaction_type)

    if unmatched:
        logger.info("Excluded %d trade record(s) with no unique legislator match", unmatched)
    return stats


def active_traders(
    stats: dict[str, TraderStats],
    min_trades: int = 3,
    names: dict[str, str] | None = None,
) -> list[ActiveTrader]:
    """Entities with at least ``min_trades`` trades, busiest first."""
    names = names or {}
    traders = [
        ActiveTrader(
            key=key,
            name=names.get(key),
            count=entry.count,
            tickers=sorted(entry.tickers),
            types=sorted(entry.types),
        )
        for key, entry in stats.items()
        if entry.count >= min_trades
    ]
    traders.sort(key=lambda t: (-t.count, t.key))
    return traders


def trade_counts_by_bioguide(
    records: Iterable[TradeRecord],
    canonical: Sequence[Legislator],
) -> dict[str, int]:
    return {key: entry.count for key, entry in aggregate_by_matched_entity(records, canonical).items()}


def trades_for_legislator(
    records: Iterable[TradeRecord],
    legislator: Legislator,
    canonical: Sequence[Legislator],
) -> list[TradeRecord]:
    """Records whose free-text name resolves to ``legislator``."""
    resolved: dict[str, bool] = {}
    matched = []
    for record in records:
        if record.senator not in resolved:
            match = match_by_name(record.senator, canonical)
            resolved[record.senator] = match is not None and match.bioguide_id == legislator.bioguide_id
        if resolved[record.senator]:
            matched.append(record)
    return matched
