"""GDELT news index client."""

import json
import logging

from civicforum.config import get_settings
from civicforum.schemas.common import DataSource
from civicforum.schemas.media import NewsArticle, NewsResponse, SentimentSummary
from civicforum.services.upstream import UpstreamClient

logger = logging.getLogger(__name__)

settings = get_settings()

BASE_URL = "https://api.gdeltproject.org/api/v2/doc/doc"


def parse_gdelt_body(text: str) -> dict:
    """
    Decode a GDELT response body.

    GDELT sometimes wraps the JSON document in plain text, so the outermost
    object is extracted when the body as a whole does not decode.

    Raises:
        ValueError: if no JSON object can be recovered
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            raise ValueError("no JSON object in response")
        data = json.loads(text[start:end + 1])
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


def transform_article(article: dict) -> NewsArticle:
    return NewsArticle(
        title=article.get("title"),
        url=article.get("url"),
        source=article.get("domain"),
        date=article.get("seendate"),
        image=article.get("socialimage"),
        language=article.get("language"),
    )


class NewsClient:
    """Client for recent news mentions of a name."""

    def __init__(self, upstream: UpstreamClient, max_records: int = 10):
        self.upstream = upstream
        self.max_records = max_records

    def _empty(self, query: str, error: str) -> NewsResponse:
        return NewsResponse(
            query=query,
            articles=[],
            total=0,
            sentiment=SentimentSummary(),
            source=DataSource.UNAVAILABLE,
            error=error,
        )

    async def search(self, name: str) -> NewsResponse:
        """Get the newest articles mentioning ``name``."""
        result = await self.upstream.get_text(
            BASE_URL,
            source="gdelt",
            ttl=settings.news_ttl,
            params={
                "query": f'"{name}"',
                "mode": "artlist",
                "maxrecords": self.max_records,
                "format": "json",
                "sort": "datedesc",
            },
        )
        if not result.ok:
            return self._empty(name, "GDELT API unavailable")

        try:
            data = parse_gdelt_body(result.data)
        except ValueError:
            logger.warning("GDELT returned an unparseable body for %r", name)
            return self._empty(name, "Invalid response from GDELT")

        articles = [transform_article(a) for a in (data.get("articles") or []) if isinstance(a, dict)]
        return NewsResponse(
            query=name,
            articles=articles,
            total=len(articles),
            # No sentiment model; every article counts as neutral
            sentiment=SentimentSummary(neutral=len(articles)),
            source=DataSource.LIVE,
        )
