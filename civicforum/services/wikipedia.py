"""Wikipedia client: search for a senator's article, then fetch its intro."""

import logging
from urllib.parse import quote

from bs4 import BeautifulSoup

from civicforum.config import get_settings
from civicforum.schemas.common import DataSource
from civicforum.schemas.media import WikipediaSummary
from civicforum.services.upstream import UpstreamClient

logger = logging.getLogger(__name__)

settings = get_settings()

API_URL = "https://en.wikipedia.org/w/api.php"
ARTICLE_URL = "https://en.wikipedia.org/wiki/{title}"
SUMMARY_LENGTH = 500


def truncate_summary(text: str, length: int = SUMMARY_LENGTH) -> str:
    if len(text) > length:
        return text[:length].strip() + "..."
    return text


def strip_html(snippet: str | None) -> str | None:
    """Search snippets carry <span class="searchmatch"> markup."""
    if not snippet:
        return None
    return BeautifulSoup(snippet, "html.parser").get_text()


def article_url(title: str) -> str:
    return ARTICLE_URL.format(title=quote(title.replace(" ", "_"), safe="!'()*-._~"))


class WikipediaClient:
    """Two-step lookup: full-text search, then the intro extract of the top hit."""

    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    async def summary(self, name: str) -> WikipediaSummary:
        """
        Get the intro of the best matching article.

        Args:
            name: Senator name; " United States Senator" is appended to the search

        Returns:
            WikipediaSummary, empty when nothing matches
        """
        search = await self.upstream.get_json(
            API_URL,
            source="wikipedia",
            ttl=settings.registry_ttl,
            params={
                "action": "query",
                "list": "search",
                "srsearch": f"{name} United States Senator",
                "format": "json",
            },
        )
        if not search.ok or not isinstance(search.data, dict):
            return WikipediaSummary(query=name, source=DataSource.UNAVAILABLE, error="Wikipedia search failed")

        results = (search.data.get("query") or {}).get("search") or []
        if not results:
            return WikipediaSummary(query=name)

        top = results[0]
        title = top.get("title") or name
        extract = await self.upstream.get_json(
            API_URL,
            source="wikipedia",
            ttl=settings.registry_ttl,
            params={
                "action": "query",
                "prop": "extracts|pageimages",
                "exintro": "",
                "explaintext": "",
                "titles": title,
                "format": "json",
                "pithumbsize": 300,
            },
        )
        if not extract.ok or not isinstance(extract.data, dict):
            return WikipediaSummary(
                query=name,
                title=title,
                snippet=strip_html(top.get("snippet")),
                source=DataSource.UNAVAILABLE,
                error="Wikipedia extract failed",
            )

        pages = (extract.data.get("query") or {}).get("pages") or {}
        page = next(iter(pages.values()), None) if isinstance(pages, dict) else None
        if not page or "missing" in page:
            return WikipediaSummary(query=name)

        return WikipediaSummary(
            query=name,
            title=page.get("title"),
            summary=truncate_summary(page.get("extract") or ""),
            snippet=strip_html(top.get("snippet")),
            thumbnail=(page.get("thumbnail") or {}).get("source"),
            url=article_url(title),
        )
