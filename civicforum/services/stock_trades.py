"""Client for Senate STOCK Act trade disclosures (Senate Stock Watcher dataset)."""

import logging
import re
from datetime import datetime, timezone

from bs4 import BeautifulSoup
from pydantic import ValidationError

from civicforum.config import get_settings
from civicforum.schemas.common import DataSource
from civicforum.schemas.trade import AmountRange, SenatorTrades, TradeFeed, TradeRecord, TradeStats
from civicforum.services.cache import MISSING
from civicforum.services.fallback import FallbackResolver

logger = logging.getLogger(__name__)

settings = get_settings()

# Illustrative records served when every mirror is down.
FALLBACK_TRADES = [
    {"senator": "Tommy Tuberville", "ticker": "NVDA", "asset_description": "NVIDIA Corporation", "asset_type": "Stock", "type": "Purchase", "amount": "$15,001 - $50,000", "transaction_date": "2024-11-15", "disclosure_date": "2024-11-20", "owner": "Self"},
    {"senator": "Tommy Tuberville", "ticker": "AAPL", "asset_description": "Apple Inc.", "asset_type": "Stock", "type": "Sale", "amount": "$1,001 - $15,000", "transaction_date": "2024-11-14", "disclosure_date": "2024-11-19", "owner": "Self"},
    {"senator": "Tommy Tuberville", "ticker": "MSFT", "asset_description": "Microsoft Corporation", "asset_type": "Stock", "type": "Purchase", "amount": "$15,001 - $50,000", "transaction_date": "2024-11-10", "disclosure_date": "2024-11-15", "owner": "Self"},
    {"senator": "Tommy Tuberville", "ticker": "GOOGL", "asset_description": "Alphabet Inc.", "asset_type": "Stock", "type": "Purchase", "amount": "$50,001 - $100,000", "transaction_date": "2024-11-08", "disclosure_date": "2024-11-13", "owner": "Self"},
    {"senator": "Tommy Tuberville", "ticker": "TSLA", "asset_description": "Tesla Inc.", "asset_type": "Stock", "type": "Sale", "amount": "$15,001 - $50,000", "transaction_date": "2024-11-05", "disclosure_date": "2024-11-10", "owner": "Self"},
    {"senator": "Markwayne Mullin", "ticker": "XOM", "asset_description": "Exxon Mobil Corporation", "asset_type": "Stock", "type": "Purchase", "amount": "$50,001 - $100,000", "transaction_date": "2024-11-12", "disclosure_date": "2024-11-17", "owner": "Self"},
    {"senator": "Markwayne Mullin", "ticker": "CVX", "asset_description": "Chevron Corporation", "asset_type": "Stock", "type": "Purchase", "amount": "$15,001 - $50,000", "transaction_date": "2024-11-11", "disclosure_date": "2024-11-16", "owner": "Spouse"},
    {"senator": "Markwayne Mullin", "ticker": "OXY", "asset_description": "Occidental Petroleum", "asset_type": "Stock", "type": "Sale", "amount": "$1,001 - $15,000", "transaction_date": "2024-11-09", "disclosure_date": "2024-11-14", "owner": "Self"},
    {"senator": "John Hoeven", "ticker": "BA", "asset_description": "Boeing Company", "asset_type": "Stock", "type": "Purchase", "amount": "$100,001 - $250,000", "transaction_date": "2024-11-08", "disclosure_date": "2024-11-13", "owner": "Self"},
    {"senator": "Bill Hagerty", "ticker": "LMT", "asset_description": "Lockheed Martin", "asset_type": "Stock", "type": "Purchase", "amount": "$50,001 - $100,000", "transaction_date": "2024-11-06", "disclosure_date": "2024-11-11", "owner": "Self"},
    {"senator": "Rick Scott", "ticker": "HII", "asset_description": "Huntington Ingalls Industries", "asset_type": "Stock", "type": "Sale", "amount": "$50,001 - $100,000", "transaction_date": "2024-11-04", "disclosure_date": "2024-11-09", "owner": "Self"},
    {"senator": "Mitt Romney", "ticker": "AMZN", "asset_description": "Amazon.com Inc.", "asset_type": "Stock", "type": "Sale", "amount": "$250,001 - $500,000", "transaction_date": "2024-11-03", "disclosure_date": "2024-11-08", "owner": "Spouse"},
    {"senator": "Cynthia Lummis", "ticker": "META", "asset_description": "Meta Platforms Inc.", "asset_type": "Stock", "type": "Purchase", "amount": "$100,001 - $250,000", "transaction_date": "2024-11-01", "disclosure_date": "2024-11-06", "owner": "Self"},
    {"senator": "Tim Scott", "ticker": "V", "asset_description": "Visa Inc.", "asset_type": "Stock", "type": "Purchase", "amount": "$15,001 - $50,000", "transaction_date": "2024-10-30", "disclosure_date": "2024-11-04", "owner": "Self"},
    {"senator": "Rand Paul", "ticker": "MRNA", "asset_description": "Moderna Inc.", "asset_type": "Stock", "type": "Sale", "amount": "$1,001 - $15,000", "transaction_date": "2024-10-28", "disclosure_date": "2024-11-02", "owner": "Spouse"},
    {"senator": "Roger Marshall", "ticker": "PFE", "asset_description": "Pfizer Inc.", "asset_type": "Stock", "type": "Purchase", "amount": "$15,001 - $50,000", "transaction_date": "2024-10-25", "disclosure_date": "2024-10-30", "owner": "Self"},
    {"senator": "John Hickenlooper", "ticker": "PSX", "asset_description": "Phillips 66", "asset_type": "Stock", "type": "Sale", "amount": "$15,001 - $50,000", "transaction_date": "2024-10-22", "disclosure_date": "2024-10-27", "owner": "Self"},
    {"senator": "Mark Kelly", "ticker": "RTX", "asset_description": "RTX Corporation", "asset_type": "Stock", "type": "Purchase", "amount": "$1,001 - $15,000", "transaction_date": "2024-10-20", "disclosure_date": "2024-10-25", "owner": "Self"},
    {"senator": "Gary Peters", "ticker": "F", "asset_description": "Ford Motor Company", "asset_type": "Stock", "type": "Purchase", "amount": "$15,001 - $50,000", "transaction_date": "2024-10-18", "disclosure_date": "2024-10-23", "owner": "Self"},
    {"senator": "Sheldon Whitehouse", "ticker": "NEE", "asset_description": "NextEra Energy", "asset_type": "Stock", "type": "Purchase", "amount": "$50,001 - $100,000", "transaction_date": "2024-10-15", "disclosure_date": "2024-10-20", "owner": "Self"},
    {"senator": "Ron Wyden", "ticker": "INTC", "asset_description": "Intel Corporation", "asset_type": "Stock", "type": "Sale", "amount": "$15,001 - $50,000", "transaction_date": "2024-10-12", "disclosure_date": "2024-10-17", "owner": "Self"},
    {"senator": "Dan Sullivan", "ticker": "APA", "asset_description": "APA Corporation", "asset_type": "Stock", "type": "Purchase", "amount": "$50,001 - $100,000", "transaction_date": "2024-10-10", "disclosure_date": "2024-10-15", "owner": "Self"},
    {"senator": "Ted Cruz", "ticker": "OXY", "asset_description": "Occidental Petroleum", "asset_type": "Stock", "type": "Purchase", "amount": "$15,001 - $50,000", "transaction_date": "2024-10-08", "disclosure_date": "2024-10-13", "owner": "Self"},
    {"senator": "Josh Hawley", "ticker": "JPM", "asset_description": "JPMorgan Chase & Co.", "asset_type": "Stock", "type": "Sale", "amount": "$1,001 - $15,000", "transaction_date": "2024-10-05", "disclosure_date": "2024-10-10", "owner": "Spouse"},
    {"senator": "Pete Ricketts", "ticker": "BRK.B", "asset_description": "Berkshire Hathaway Inc.", "asset_type": "Stock", "type": "Purchase", "amount": "$250,001 - $500,000", "transaction_date": "2024-10-03", "disclosure_date": "2024-10-08", "owner": "Self"},
]

# Amount range parsing
AMOUNT_RANGES = {
    "$1,001 - $15,000": (1001, 15000),
    "$15,001 - $50,000": (15001, 50000),
    "$50,001 - $100,000": (50001, 100000),
    "$100,001 - $250,000": (100001, 250000),
    "$250,001 - $500,000": (250001, 500000),
    "$500,001 - $1,000,000": (500001, 1000000),
    "$1,000,001 - $5,000,000": (1000001, 5000000),
    "$5,000,001 - $25,000,000": (5000001, 25000000),
    "$25,000,001 - $50,000,000": (25000001, 50000000),
    "Over $50,000,000": (50000001, None),
}

_RANGE_PATTERN = re.compile(r"\$\s*([\d,]+)\s*-\s*\$\s*([\d,]+)")


def parse_amount(amount_str: str | None) -> AmountRange | None:
    """Parse a disclosed amount band, keeping both bounds."""
    if not amount_str:
        return None

    label = amount_str.strip()
    for range_str, (min_val, max_val) in AMOUNT_RANGES.items():
        if range_str.lower() in label.lower():
            return AmountRange(label=range_str, minimum=min_val, maximum=max_val)

    match = _RANGE_PATTERN.search(label)
    if match:
        low, high = (int(g.replace(",", "")) for g in match.groups())
        if low <= high:
            return AmountRange(label=label, minimum=low, maximum=high)

    return None


def _normalize_transaction_type(type_str: str | None) -> str:
    """Normalize transaction type to standard values."""
    if not type_str:
        return "unknown"

    type_lower = type_str.lower()
    if "purchase" in type_lower or "buy" in type_lower:
        return "purchase"
    elif "sale" in type_lower or "sell" in type_lower:
        return "sale"
    elif "exchange" in type_lower:
        return "exchange"

    return "unknown"


def _normalize_owner(owner: str | None) -> str:
    owner_lower = (owner or "").lower()
    for value in ("self", "spouse", "joint"):
        if value in owner_lower:
            return value
    if "child" in owner_lower or "dependent" in owner_lower:
        return "dependent"
    return "unknown"


def _parse_date(date_str: str | None) -> str | None:
    """Parse date string to ISO format."""
    if not date_str:
        return None

    for fmt in ["%Y-%m-%d", "%m/%d/%Y", "%m-%d-%Y"]:
        try:
            return datetime.strptime(date_str, fmt).date().isoformat()
        except ValueError:
            continue

    return None


def _clean_text(value: str | None) -> str | None:
    """Strip markup some disclosures embed in text fields."""
    if not value:
        return None
    if "<" in value:
        value = BeautifulSoup(value, "html.parser").get_text(" ", strip=True)
    value = value.strip()
    return value or None


def transform_trade(trade: dict) -> TradeRecord:
    """Transform a Senate Stock Watcher record to a TradeRecord."""
    ticker = _clean_text(trade.get("ticker"))
    if ticker in ("--", "N/A"):
        ticker = None

    return TradeRecord(
        senator=(trade.get("senator") or "").strip(),
        ticker=ticker,
        asset_description=_clean_text(trade.get("asset_description")),
        asset_type=trade.get("asset_type"),
        transaction_type=_normalize_transaction_type(trade.get("type")),
        amount=parse_amount(trade.get("amount")),
        transaction_date=_parse_date(trade.get("transaction_date")),
        disclosure_date=_parse_date(trade.get("disclosure_date")),
        owner=_normalize_owner(trade.get("owner")),
        ptr_link=trade.get("ptr_link"),
    )


def transform_trades(data: list) -> list[TradeRecord]:
    """Transform raw records, dropping the ones that fail validation."""
    trades = []
    skipped = 0
    for raw in data:
        if not isinstance(raw, dict) or not raw.get("senator"):
            skipped += 1
            continue
        try:
            trades.append(transform_trade(raw))
        except ValidationError as exc:
            skipped += 1
            logger.debug("Skipping invalid trade for %s: %s", raw.get("senator"), exc)
    if skipped:
        logger.info("Skipped %d unusable trade record(s)", skipped)
    return trades


def matches_senator(trade: TradeRecord, senator_name: str) -> bool:
    """Case-insensitive partial match between a trade and a requested senator.

    The trade matches when its senator contains the requested name, or the
    requested name contains the last word of the trade's senator.
    """
    trade_senator = trade.senator.lower()
    search = senator_name.lower().strip()
    if not search or not trade_senator:
        return False
    return search in trade_senator or trade_senator.split()[-1] in search


def trade_stats(trades: list[TradeRecord]) -> TradeStats:
    return TradeStats(
        total=len(trades),
        purchases=sum(1 for t in trades if t.transaction_type == "purchase"),
        sales=sum(1 for t in trades if t.transaction_type == "sale"),
    )


class StockTradesClient:
    """Client for the Senate trade disclosure dataset."""

    def __init__(
        self,
        resolver: FallbackResolver,
        mirrors: list[str] | None = None,
        timeout: float | None = None,
    ):
        self.resolver = resolver
        self.mirrors = mirrors if mirrors is not None else settings.stock_trade_mirrors
        self.timeout = timeout or settings.stock_trade_timeout

    async def fetch_feed(self) -> TradeFeed:
        """
        Get every disclosed Senate trade.

        Falls back to the embedded illustrative dataset, tagged as such,
        when no mirror answers with a JSON array. A live feed is transformed
        once per resolved document and reused while that document is cached.

        Returns:
            TradeFeed with trades in dataset order
        """
        result = await self.resolver.resolve(
            self.mirrors, source="stock_trades", ttl=settings.stock_trade_ttl, timeout=self.timeout
        )
        if not (result.ok and isinstance(result.data, list)):
            logger.warning("Trade dataset unavailable, serving fallback trades")
            return self._feed(transform_trades(FALLBACK_TRADES), DataSource.FALLBACK)

        cache = self.resolver.upstream.cache
        key = ("trade_feed", tuple(self.mirrors))
        cached = cache.get(key)
        if cached is not MISSING and cached[0] is result.data:
            return cached[1]

        feed = self._feed(transform_trades(result.data), DataSource.LIVE)
        cache.set(key, (result.data, feed), settings.stock_trade_ttl)
        return feed

    @staticmethod
    def _feed(trades: list[TradeRecord], source: DataSource) -> TradeFeed:
        return TradeFeed(
            trades=trades,
            total=len(trades),
            source=source,
            last_updated=datetime.now(timezone.utc),
        )

    async def fetch_for_senator(self, senator_name: str) -> SenatorTrades:
        """Get the trades of one senator by free-text name."""
        feed = await self.fetch_feed()
        trades = [t for t in feed.trades if matches_senator(t, senator_name)]
        return SenatorTrades(
            senator=senator_name,
            trades=trades,
            stats=trade_stats(trades),
            source=feed.source,
        )
