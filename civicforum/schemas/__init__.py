"""Pydantic schemas for upstream DTOs and API responses."""

from civicforum.schemas.common import DataSource, CamelModel
from civicforum.schemas.legislator import Legislator, SocialHandles
from civicforum.schemas.trade import (
    AmountRange,
    TradeRecord,
    TradeStats,
    TradeFeed,
    SenatorTrades,
    TraderStats,
    ActiveTrader,
    ActiveTradersResponse,
)
from civicforum.schemas.conflict import Conflict, ConflictReport
from civicforum.schemas.congress import (
    SponsoredBill,
    BillsResponse,
    VoteRecord,
    VoteStatistics,
    VotesResponse,
    CommitteesResponse,
)
from civicforum.schemas.finance import FecTotals, OpenSecretsResponse, Contributor
from civicforum.schemas.media import (
    LobbyingFiling,
    LobbyingResponse,
    NewsArticle,
    NewsResponse,
    SentimentSummary,
    WikipediaSummary,
)
from civicforum.schemas.derived import (
    NetWorthPoint,
    TradingActivityPoint,
    TradingPerformancePoint,
    TradingSummary,
    HistoricalData,
    DarkMoneySource,
    DarkMoneyReport,
    Lobbyist,
    LobbyistReport,
    TimelineEvent,
    TimelineReport,
    IdeologyEstimate,
)
from civicforum.schemas.senator import (
    FieldSources,
    SenatorViewModel,
    SenatorListResponse,
    SenateStats,
    Leaderboard,
    LeaderboardEntry,
    PartyBreakdown,
)
from civicforum.schemas.watchlist import (
    WatchlistCreate,
    WatchlistItemResponse,
    WatchlistResponse,
    AlertsUpdate,
)

__all__ = [
    "DataSource",
    "CamelModel",
    "Legislator",
    "SocialHandles",
    "AmountRange",
    "TradeRecord",
    "TradeStats",
    "TradeFeed",
    "SenatorTrades",
    "TraderStats",
    "ActiveTrader",
    "ActiveTradersResponse",
    "Conflict",
    "ConflictReport",
    "SponsoredBill",
    "BillsResponse",
    "VoteRecord",
    "VoteStatistics",
    "VotesResponse",
    "CommitteesResponse",
    "FecTotals",
    "OpenSecretsResponse",
    "Contributor",
    "LobbyingFiling",
    "LobbyingResponse",
    "NewsArticle",
    "NewsResponse",
    "SentimentSummary",
    "WikipediaSummary",
    "NetWorthPoint",
    "TradingActivityPoint",
    "TradingPerformancePoint",
    "TradingSummary",
    "HistoricalData",
    "DarkMoneySource",
    "DarkMoneyReport",
    "Lobbyist",
    "LobbyistReport",
    "TimelineEvent",
    "TimelineReport",
    "IdeologyEstimate",
    "FieldSources",
    "SenatorViewModel",
    "SenatorListResponse",
    "SenateStats",
    "Leaderboard",
    "LeaderboardEntry",
    "PartyBreakdown",
    "WatchlistCreate",
    "WatchlistItemResponse",
    "WatchlistResponse",
    "AlertsUpdate",
]
