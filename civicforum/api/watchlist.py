"""Watchlist API endpoints for the current user."""

from fastapi import APIRouter, Depends, HTTPException, Path

from civicforum.api.dependencies import get_current_user_id, get_watchlist_store
from civicforum.schemas.watchlist import (
    AlertsUpdate,
    WatchlistCreate,
    WatchlistItemResponse,
    WatchlistResponse,
)
from civicforum.services.watchlist import (
    DuplicateWatchlistEntryError,
    WatchlistEntryNotFoundError,
    WatchlistStore,
)

router = APIRouter()

POLITICIAN_ID = Path(..., max_length=64, pattern=r"^[a-zA-Z0-9-]+$")


@router.get("", response_model=WatchlistResponse)
async def get_watchlist(
    user_id: str = Depends(get_current_user_id),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Politicians the current user follows, newest first."""
    entries = store.list(user_id)
    return WatchlistResponse(
        items=[WatchlistItemResponse.model_validate(e) for e in entries],
        total=len(entries),
    )


@router.post("", response_model=WatchlistItemResponse, status_code=201)
async def add_to_watchlist(
    request: WatchlistCreate,
    user_id: str = Depends(get_current_user_id),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Follow a politician."""
    try:
        entry = store.add(user_id, request)
    except DuplicateWatchlistEntryError:
        raise HTTPException(status_code=409, detail="Already in watchlist")
    return WatchlistItemResponse.model_validate(entry)


@router.delete("/{politician_id}")
async def remove_from_watchlist(
    politician_id: str = POLITICIAN_ID,
    user_id: str = Depends(get_current_user_id),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Unfollow a politician."""
    try:
        store.remove(user_id, politician_id)
    except WatchlistEntryNotFoundError:
        raise HTTPException(status_code=404, detail="Not in watchlist")
    return {"status": "removed", "politician_id": politician_id}


@router.patch("/{politician_id}/alerts", response_model=WatchlistItemResponse)
async def update_alerts(
    request: AlertsUpdate,
    politician_id: str = POLITICIAN_ID,
    user_id: str = Depends(get_current_user_id),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Turn alerts for a followed politician on or off."""
    try:
        entry = store.set_alerts(user_id, politician_id, request.alerts_enabled)
    except WatchlistEntryNotFoundError:
        raise HTTPException(status_code=404, detail="Not in watchlist")
    return WatchlistItemResponse.model_validate(entry)
