"""Senate LDA (Lobbying Disclosure Act) API client."""

import logging

from civicforum.config import get_settings
from civicforum.schemas.common import DataSource
from civicforum.schemas.media import LobbyingFiling, LobbyingResponse
from civicforum.services.upstream import UpstreamClient

logger = logging.getLogger(__name__)

settings = get_settings()

BASE_URL = "https://lda.senate.gov/api/v1/filings/"
MAX_FILINGS = 20


def transform_filing(filing: dict) -> LobbyingFiling:
    activities = filing.get("lobbying_activities") or []
    return LobbyingFiling(
        registrant_name=(filing.get("registrant") or {}).get("name") or "Unknown",
        client_name=(filing.get("client") or {}).get("name") or "Unknown",
        filing_type=filing.get("filing_type"),
        filing_year=filing.get("filing_year"),
        amount=filing.get("income") or filing.get("expenses"),
        issues=[a.get("general_issue_code") for a in activities if a.get("general_issue_code")],
    )


class LobbyingClient:
    """Client for lobbying filings that mention a name."""

    def __init__(self, upstream: UpstreamClient, filing_year: int | None = None):
        self.upstream = upstream
        self.filing_year = filing_year or settings.lobbying_filing_year

    async def search(self, name: str) -> LobbyingResponse:
        """Get up to 20 filings of the filing year that mention ``name``."""
        result = await self.upstream.get_json(
            BASE_URL,
            source="lda",
            ttl=settings.lobbying_ttl,
            params={"filing_year": self.filing_year, "search": name, "format": "json"},
        )
        if result.ok and isinstance(result.data, dict):
            filings = [
                transform_filing(f)
                for f in (result.data.get("results") or [])[:MAX_FILINGS]
                if isinstance(f, dict)
            ]
            return LobbyingResponse(
                senator=name,
                filings=filings,
                total=result.data.get("count") or 0,
                source=DataSource.LIVE,
            )

        logger.info("No lobbying filings available for %s", name)
        return LobbyingResponse(
            senator=name,
            filings=[],
            total=0,
            source=DataSource.UNAVAILABLE,
            note="Lobbying data is being aggregated",
        )
