"""Pydantic schemas for lobbying, news and encyclopedia lookups."""

from pydantic import BaseModel

from civicforum.schemas.common import DataSource


class LobbyingFiling(BaseModel):
    registrant_name: str = "Unknown"
    client_name: str = "Unknown"
    filing_type: str | None = None
    filing_year: int | None = None
    amount: float | None = None
    issues: list[str] = []


class LobbyingResponse(BaseModel):
    senator: str
    filings: list[LobbyingFiling]
    total: int
    source: DataSource
    note: str | None = None


class NewsArticle(BaseModel):
    title: str | None = None
    url: str | None = None
    source: str | None = None
    date: str | None = None
    image: str | None = None
    language: str | None = None


class SentimentSummary(BaseModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class NewsResponse(BaseModel):
    query: str
    articles: list[NewsArticle]
    total: int
    sentiment: SentimentSummary
    source: DataSource
    error: str | None = None


class WikipediaSummary(BaseModel):
    query: str
    title: str | None = None
    summary: str | None = None
    snippet: str | None = None
    thumbnail: str | None = None
    url: str | None = None
    source: DataSource = DataSource.LIVE
    error: str | None = None
