"""FastAPI dependencies for common operations."""

import httpx
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from civicforum.database import get_db
from civicforum.services.aggregator import SenatorDataService
from civicforum.services.cache import TTLCache
from civicforum.services.congress_gov import CongressGovClient
from civicforum.services.fallback import FallbackResolver
from civicforum.services.fec import FECClient
from civicforum.services.legislators import LegislatorsClient
from civicforum.services.lobbying import LobbyingClient
from civicforum.services.news import NewsClient
from civicforum.services.opensecrets import OpenSecretsClient
from civicforum.services.stock_trades import StockTradesClient
from civicforum.services.upstream import UpstreamClient
from civicforum.services.watchlist import WatchlistStore
from civicforum.services.wikipedia import WikipediaClient


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared HTTP client created in the application lifespan."""
    return request.app.state.http


def get_cache(request: Request) -> TTLCache:
    """Process-wide response cache created in the application lifespan."""
    return request.app.state.cache


def get_upstream(
    http: httpx.AsyncClient = Depends(get_http_client),
    cache: TTLCache = Depends(get_cache),
) -> UpstreamClient:
    return UpstreamClient(http, cache)


def get_resolver(upstream: UpstreamClient = Depends(get_upstream)) -> FallbackResolver:
    return FallbackResolver(upstream)


def get_legislators_client(resolver: FallbackResolver = Depends(get_resolver)) -> LegislatorsClient:
    return LegislatorsClient(resolver)


def get_stock_trades_client(resolver: FallbackResolver = Depends(get_resolver)) -> StockTradesClient:
    return StockTradesClient(resolver)


def get_congress_client(upstream: UpstreamClient = Depends(get_upstream)) -> CongressGovClient:
    return CongressGovClient(upstream)


def get_fec_client(upstream: UpstreamClient = Depends(get_upstream)) -> FECClient:
    return FECClient(upstream)


def get_opensecrets_client(upstream: UpstreamClient = Depends(get_upstream)) -> OpenSecretsClient:
    return OpenSecretsClient(upstream)


def get_lobbying_client(upstream: UpstreamClient = Depends(get_upstream)) -> LobbyingClient:
    return LobbyingClient(upstream)


def get_news_client(upstream: UpstreamClient = Depends(get_upstream)) -> NewsClient:
    return NewsClient(upstream)


def get_wikipedia_client(upstream: UpstreamClient = Depends(get_upstream)) -> WikipediaClient:
    return WikipediaClient(upstream)


def get_senator_service(
    legislators: LegislatorsClient = Depends(get_legislators_client),
    trades: StockTradesClient = Depends(get_stock_trades_client),
    congress: CongressGovClient = Depends(get_congress_client),
) -> SenatorDataService:
    return SenatorDataService(legislators, trades, congress)


def get_watchlist_store(db: Session = Depends(get_db)) -> WatchlistStore:
    return WatchlistStore(db)


async def get_current_user_id(x_user_id: str | None = Header(None)) -> str:
    """
    Identity of the caller, as asserted by the upstream auth layer.

    Raises 401 when the ``X-User-Id`` header is missing or blank.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id.strip()
