"""Pydantic schemas for STOCK Act trade disclosures."""

from datetime import date, datetime
from pydantic import BaseModel, Field, model_validator

from civicforum.schemas.common import DataSource


class AmountRange(BaseModel):
    """Disclosed amount band. Both bounds are always kept.

    The top band ("Over $50,000,000") is open-ended, so its ``maximum`` is None.
    """

    label: str = Field(..., description="e.g., '$15,001 - $50,000'")
    minimum: int
    maximum: int | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> "AmountRange":
        if self.maximum is not None and self.minimum > self.maximum:
            raise ValueError("amount band minimum exceeds maximum")
        return self

    @property
    def midpoint(self) -> int:
        """Single representative value for aggregation: the band midpoint.

        An open-ended band has no midpoint, so its minimum is used.
        """
        if self.maximum is None:
            return self.minimum
        return (self.minimum + self.maximum) // 2


class TradeRecord(BaseModel):
    """A single disclosed transaction, keyed by free-text senator name."""

    senator: str
    ticker: str | None = None
    asset_description: str | None = None
    asset_type: str | None = None
    transaction_type: str = Field("unknown", description="'purchase', 'sale', 'exchange' or 'unknown'")
    amount: AmountRange | None = None
    transaction_date: date | None = None
    disclosure_date: date | None = None
    owner: str = "unknown"
    ptr_link: str | None = None

    @model_validator(mode="after")
    def _check_dates(self) -> "TradeRecord":
        if (
            self.transaction_date
            and self.disclosure_date
            and self.disclosure_date < self.transaction_date
        ):
            raise ValueError("disclosure date precedes transaction date")
        return self


class TradeStats(BaseModel):
    """Purchase/sale counts for a set of trades."""

    total: int
    purchases: int
    sales: int


class TradeFeed(BaseModel):
    """The full trade dataset with provenance."""

    trades: list[TradeRecord]
    total: int
    source: DataSource
    last_updated: datetime


class SenatorTrades(BaseModel):
    """Trades filtered to one senator."""

    senator: str
    trades: list[TradeRecord]
    stats: TradeStats
    source: DataSource


class TraderStats(BaseModel):
    """Per-entity aggregate over reconciled trade records."""

    count: int = 0
    tickers: set[str] = Field(default_factory=set)
    types: set[str] = Field(default_factory=set)


class ActiveTrader(BaseModel):
    """An entity that passed the minimum trade count filter."""

    key: str
    name: str | None = None
    count: int
    tickers: list[str]
    types: list[str]


class ActiveTradersResponse(BaseModel):
    traders: list[ActiveTrader]
    total: int
    source: DataSource
