"""Senate stock trade API endpoints."""

from fastapi import APIRouter, Depends, Query

from civicforum.api.dependencies import get_senator_service, get_stock_trades_client
from civicforum.schemas.trade import ActiveTradersResponse, SenatorTrades, TradeFeed
from civicforum.services.aggregator import SenatorDataService
from civicforum.services.stock_trades import StockTradesClient

router = APIRouter()


@router.get("", response_model=TradeFeed)
async def list_trades(
    limit: int | None = Query(None, ge=1, le=5000),
    client: StockTradesClient = Depends(get_stock_trades_client),
):
    """All disclosed Senate trades, optionally truncated to the first ``limit``."""
    feed = await client.fetch_feed()
    if limit is not None:
        # The feed may be shared through the cache
        return feed.model_copy(update={"trades": feed.trades[:limit]})
    return feed


@router.get("/active-traders", response_model=ActiveTradersResponse)
async def list_active_traders(service: SenatorDataService = Depends(get_senator_service)):
    """Senators with at least the configured number of trades, busiest first."""
    traders, source = await service.active_traders()
    return ActiveTradersResponse(traders=traders, total=len(traders), source=source)


@router.get("/{senator}", response_model=SenatorTrades)
async def get_senator_trades(
    senator: str,
    client: StockTradesClient = Depends(get_stock_trades_client),
):
    """Trades whose filer name matches ``senator``."""
    return await client.fetch_for_senator(senator)
