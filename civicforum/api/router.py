"""Main API router that combines all endpoint routers."""

from fastapi import APIRouter

from civicforum.api import senators, trades, legislation, finance, media, analytics, watchlist

api_router = APIRouter()

# Aggregated senator views
api_router.include_router(senators.router, prefix="/senators", tags=["senators"])
api_router.include_router(trades.router, prefix="/stock-trades", tags=["stock-trades"])

# Per-source endpoints
api_router.include_router(legislation.router, tags=["legislation"])
api_router.include_router(finance.router, tags=["finance"])
api_router.include_router(media.router, tags=["media"])

# Estimated analytics
api_router.include_router(analytics.router, tags=["analytics"])

# User features
api_router.include_router(watchlist.router, prefix="/watchlist", tags=["watchlist"])
