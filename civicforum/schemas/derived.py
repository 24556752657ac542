"""Pydantic schemas for seeded, estimated datasets.

Every model here carries a ``source`` so consumers can tell estimates from
disclosed figures.
"""

from typing import Literal
from pydantic import BaseModel

from civicforum.schemas.common import DataSource


class NetWorthPoint(BaseModel):
    year: int
    net_worth: int
    assets_min: int
    assets_max: int
    liabilities_min: int
    liabilities_max: int


class TradingActivityPoint(BaseModel):
    month: str
    trades: int
    buys: int
    sells: int
    estimated_value: float
    sp500: int


class TradingPerformancePoint(BaseModel):
    month: str
    senator_return: float
    sp500_return: float
    trade_count: int


class TradingSummary(BaseModel):
    total_trades: int
    estimated_gain: int
    win_rate: int
    sp500_comparison: float


class HistoricalData(BaseModel):
    bioguide_id: str
    net_worth: list[NetWorthPoint]
    trading_activity: list[TradingActivityPoint]
    trading_performance: list[TradingPerformancePoint]
    trading_summary: TradingSummary
    source: DataSource = DataSource.ESTIMATED
    disclaimer: str = (
        "Net worth figures are estimates based on financial disclosure filings. "
        "Actual values may vary."
    )


class DarkMoneySource(BaseModel):
    name: str
    type: Literal["super_pac", "501c4", "llc", "unknown"]
    amount: str
    amount_value: int
    cycle: str = "2024"
    disclosed: bool


class DarkMoneyReport(BaseModel):
    senator: str
    sources: list[DarkMoneySource]
    total: int
    source: DataSource
    warning: str | None = None


class Lobbyist(BaseModel):
    name: str
    firm: str
    client: str
    industry: str
    amount: str
    amount_value: int
    issues: list[str]
    year: int = 2024


class LobbyistReport(BaseModel):
    senator: str
    lobbyists: list[Lobbyist]
    total_spending: int
    source: DataSource = DataSource.ESTIMATED


class TimelineEvent(BaseModel):
    date: str
    type: Literal["trade", "vote", "donation", "bill", "scandal"]
    title: str
    description: str
    severity: Literal["high", "medium", "low"] | None = None
    connection: str | None = None


class TimelineReport(BaseModel):
    senator: str
    events: list[TimelineEvent]
    source: DataSource = DataSource.ESTIMATED


class IdeologyEstimate(BaseModel):
    position: float
    label: str
    source: DataSource = DataSource.ESTIMATED
