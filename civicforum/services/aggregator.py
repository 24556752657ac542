"""Senator aggregation: fetch, reconcile, derive, score and assemble."""

import asyncio
import logging
from dataclasses import dataclass, field

from civicforum.config import get_settings
from civicforum.schemas.common import DataSource
from civicforum.schemas.conflict import ConflictReport
from civicforum.schemas.legislator import Legislator
from civicforum.schemas.senator import Leaderboard, SenateStats, SenatorViewModel
from civicforum.schemas.trade import ActiveTrader, TradeFeed, TraderStats
from civicforum.services.cache import MISSING, TTLCache
from civicforum.services.conflict_detector import ConflictPolicy, ConflictSignals, build_report
from civicforum.services.congress_gov import CongressGovClient, party_line_percent
from civicforum.services.legislators import LegislatorsClient
from civicforum.services.reconciler import (
    active_traders,
    aggregate_by_matched_entity,
    trades_for_legislator,
)
from civicforum.services.stock_trades import StockTradesClient
from civicforum.services.view_model import (
    UpstreamOverlay,
    assemble,
    derive_profile,
    filter_senators,
    leaderboard,
    search_senators,
    senate_stats,
    sort_senators,
)

logger = logging.getLogger(__name__)

settings = get_settings()

RECENT_TRADES = 10

REGISTRY_UNAVAILABLE = "Legislator registry unavailable"
SOCIAL_UNAVAILABLE = "Social media registry unavailable"
TRADES_FALLBACK = "Stock trade dataset unavailable, showing illustrative trades"
# Committees are fetched per senator, never for whole lists
LIST_CONFLICTS_PARTIAL = "Committee assignments are only loaded per senator; list conflict flags exclude committee overlap"


class RegistryUnavailableError(Exception):
    """No legislator registry mirror answered, so no senator can be resolved."""


@dataclass
class SenatorCollection:
    """Assembled senators plus what degraded while building them."""

    senators: list[SenatorViewModel]
    legislators: list[Legislator]
    trade_feed: TradeFeed | None
    identity_source: DataSource
    warnings: list[str] = field(default_factory=list)
    social_source: DataSource = DataSource.LIVE

    def find(self, bioguide_id: str) -> SenatorViewModel | None:
        wanted = bioguide_id.upper()
        return next((s for s in self.senators if s.bioguide_id == wanted), None)

    def legislator(self, bioguide_id: str) -> Legislator | None:
        wanted = bioguide_id.upper()
        return next((l for l in self.legislators if l.bioguide_id == wanted), None)


class SenatorDataService:
    """Builds SenatorViewModels from every source it is given.

    Independent fetches run concurrently and each degrades on its own: a
    failing trade dataset still yields senators, and a failing registry
    yields an empty collection with a warning. Lookups of particular
    senators raise RegistryUnavailableError instead, so an outage is never
    reported as an unknown senator.
    """

    def __init__(
        self,
        legislators: LegislatorsClient,
        trades: StockTradesClient,
        congress: CongressGovClient,
        policy: ConflictPolicy | None = None,
        min_active_trades: int | None = None,
        cache: TTLCache | None = None,
    ):
        self.legislators = legislators
        self.trades = trades
        self.congress = congress
        self.policy = policy or ConflictPolicy.from_settings()
        self.min_active_trades = min_active_trades or settings.active_trader_min_trades
        self.cache = cache if cache is not None else trades.resolver.upstream.cache

    def _trade_stats(self, feed: TradeFeed, legislators: list[Legislator]) -> dict[str, TraderStats]:
        """
        Per-bioguide trade stats, reconciled once per trade feed and roster.

        The entry is only reused while ``feed`` is the very object it was
        built from, so a refreshed dataset is always reconciled again.
        """
        key = ("trade_stats", feed.source, tuple(l.bioguide_id for l in legislators))
        cached = self.cache.get(key)
        if cached is not MISSING and cached[0] is feed:
            return cached[1]
        stats = aggregate_by_matched_entity(feed.trades, legislators)
        self.cache.set(key, (feed, stats), settings.stock_trade_ttl)
        return stats

    async def _require_collection(self) -> SenatorCollection:
        collection = await self.load_collection()
        if collection.identity_source is DataSource.UNAVAILABLE:
            raise RegistryUnavailableError(REGISTRY_UNAVAILABLE)
        return collection

    def _signals(self, overlay: UpstreamOverlay, party_votes: int | None = None) -> ConflictSignals:
        return ConflictSignals(
            committees=overlay.committees or [],
            trade_count=overlay.trade_count or 0,
            party_vote_percent=party_votes,
        )

    def _build(self, legislator: Legislator, overlay: UpstreamOverlay) -> SenatorViewModel:
        derived = derive_profile(legislator)
        report = build_report(
            self._signals(overlay, overlay.party_votes or derived.party_votes),
            self.policy,
            bioguide_id=legislator.bioguide_id,
        )
        return assemble(legislator, derived, report, overlay)

    async def load_collection(self) -> SenatorCollection:
        """
        Fetch the registry and trade feed concurrently and assemble every senator.

        Returns:
            SenatorCollection sorted by last name, with warnings for every
            source that degraded
        """
        registry, feed = await asyncio.gather(
            self.legislators.fetch_current_senators(),
            self.trades.fetch_feed(),
        )
        warnings = []

        if not registry.ok:
            logger.error("Legislator registry unavailable: %s", registry.error)
            warnings.append(REGISTRY_UNAVAILABLE)
            return SenatorCollection(
                senators=[],
                legislators=[],
                trade_feed=feed,
                identity_source=DataSource.UNAVAILABLE,
                warnings=warnings,
            )

        roster = registry.data
        if roster.social_source is not DataSource.LIVE:
            warnings.append(SOCIAL_UNAVAILABLE)
        if feed.source is not DataSource.LIVE:
            warnings.append(TRADES_FALLBACK)
        warnings.append(LIST_CONFLICTS_PARTIAL)

        legislators = roster.senators
        stats = self._trade_stats(feed, legislators)
        senators = [
            self._build(
                legislator,
                UpstreamOverlay(
                    trade_count=stats[legislator.bioguide_id].count if legislator.bioguide_id in stats else 0,
                    trades_source=feed.source,
                    social_source=roster.social_source,
                ),
            )
            for legislator in legislators
        ]
        return SenatorCollection(
            senators=senators,
            legislators=legislators,
            trade_feed=feed,
            identity_source=DataSource.LIVE,
            warnings=warnings,
            social_source=roster.social_source,
        )

    async def list_senators(
        self,
        party: str | None = None,
        state: str | None = None,
        has_conflicts: bool | None = None,
        q: str | None = None,
        sort_by: str = "name",
    ) -> SenatorCollection:
        """
        Filtered, searched and sorted senators.

        Raises:
            ValueError: for an unknown ``sort_by``
        """
        collection = await self.load_collection()
        senators = filter_senators(collection.senators, party, state, has_conflicts)
        senators = search_senators(senators, q)
        collection.senators = sort_senators(senators, sort_by)
        return collection

    async def stats(self) -> tuple[SenateStats, list[str]]:
        collection = await self.load_collection()
        return senate_stats(collection.senators), collection.warnings

    async def leaderboard(self, limit: int = 25) -> Leaderboard:
        collection = await self.load_collection()
        return leaderboard(collection.senators, limit)

    async def get_senator(self, bioguide_id: str) -> SenatorViewModel | None:
        """
        Full view model for one senator.

        Committees and votes are fetched concurrently on top of the
        collection. Live roll calls override the estimated attendance and
        party-line figures; committees feed the conflict rules.

        Returns:
            SenatorViewModel, or None if the senator is unknown

        Raises:
            RegistryUnavailableError: if the registry could not be loaded
        """
        collection = await self._require_collection()
        legislator = collection.legislator(bioguide_id)
        if legislator is None:
            return None

        committees, votes = await asyncio.gather(
            self.congress.get_committees(legislator.bioguide_id),
            self.congress.get_votes(legislator.bioguide_id),
        )

        trades = []
        if collection.trade_feed is not None:
            trades = trades_for_legislator(collection.trade_feed.trades, legislator, collection.legislators)
        overlay = UpstreamOverlay(
            trade_count=len(trades),
            trades_source=collection.trade_feed.source if collection.trade_feed else DataSource.UNAVAILABLE,
            recent_trades=sorted(
                trades,
                key=lambda t: t.transaction_date.isoformat() if t.transaction_date else "",
                reverse=True,
            )[:RECENT_TRADES],
            committees=committees.data if committees.ok else None,
            social_source=collection.social_source,
        )
        if not committees.ok:
            logger.info("Committees unavailable for %s: %s", legislator.bioguide_id, committees.error)
        if votes.source is DataSource.LIVE and votes.statistics.total_votes:
            overlay.attendance = votes.statistics.participation_rate
            overlay.party_votes = party_line_percent(votes.votes, legislator.party)

        return self._build(legislator, overlay)

    async def get_conflicts(self, bioguide_id: str) -> ConflictReport | None:
        senator = await self.get_senator(bioguide_id)
        if senator is None:
            return None
        return ConflictReport(
            bioguide_id=senator.bioguide_id,
            conflicts=senator.conflicts,
            score=senator.conflict_score,
            label=senator.risk_label,
        )

    async def compare(self, bioguide_ids: list[str]) -> list[SenatorViewModel]:
        """
        View models for several senators, in request order, unknown IDs skipped.

        Raises:
            RegistryUnavailableError: if the registry could not be loaded
        """
        collection = await self._require_collection()
        result = []
        for bioguide_id in bioguide_ids:
            senator = collection.find(bioguide_id)
            if senator is not None:
                result.append(senator)
        return result

    async def active_traders(self) -> tuple[list[ActiveTrader], DataSource]:
        """Senators with at least ``min_active_trades`` reconciled trades."""
        collection = await self.load_collection()
        feed = collection.trade_feed
        if feed is None:
            return [], DataSource.UNAVAILABLE

        if collection.legislators:
            stats = self._trade_stats(feed, collection.legislators)
            names = {l.bioguide_id: l.full_name for l in collection.legislators}
        else:
            # No registry to reconcile against; fall back to free-text keys
            stats = aggregate_by_matched_entity(feed.trades)
            names = {}
        return active_traders(stats, self.min_active_trades, names), feed.source
