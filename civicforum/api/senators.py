"""Senators API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from civicforum.api.dependencies import get_senator_service
from civicforum.schemas.conflict import ConflictReport
from civicforum.schemas.senator import (
    Leaderboard,
    SenateStats,
    SenatorListResponse,
    SenatorViewModel,
)
from civicforum.services.aggregator import RegistryUnavailableError, SenatorDataService
from civicforum.services.view_model import SORT_KEYS
from civicforum.utils import paginate

router = APIRouter()


@router.get("", response_model=SenatorListResponse)
async def list_senators(
    party: str | None = Query(None, pattern="^[RDIrdi]$"),
    state: str | None = Query(None, min_length=2, max_length=30),
    has_conflicts: bool | None = Query(None),
    q: str | None = Query(None, max_length=100),
    sort_by: str = Query("name"),
    page: int = Query(1, ge=1),
    page_size: int = Query(100, ge=1, le=100),
    service: SenatorDataService = Depends(get_senator_service),
):
    """List current senators with optional filters, search and sort."""
    if sort_by not in SORT_KEYS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid sort_by. Must be one of: {', '.join(SORT_KEYS)}",
        )

    collection = await service.list_senators(party, state, has_conflicts, q, sort_by)
    result = paginate(collection.senators, page, page_size)

    return SenatorListResponse(
        items=result.items,
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        warnings=collection.warnings,
    )


@router.get("/stats", response_model=SenateStats)
async def get_stats(service: SenatorDataService = Depends(get_senator_service)):
    """Senate-wide totals."""
    stats, _ = await service.stats()
    return stats


@router.get("/leaderboard", response_model=Leaderboard)
async def get_leaderboard(
    limit: int = Query(25, ge=1, le=100),
    service: SenatorDataService = Depends(get_senator_service),
):
    """Longest serving senators, most active traders and the party split."""
    return await service.leaderboard(limit)


@router.get("/compare", response_model=list[SenatorViewModel])
async def compare_senators(
    ids: str = Query(..., min_length=1, description="Comma-separated bioguide IDs"),
    service: SenatorDataService = Depends(get_senator_service),
):
    """Compare up to four senators side by side."""
    bioguide_ids = [i.strip() for i in ids.split(",") if i.strip()]
    if not bioguide_ids or len(bioguide_ids) > 4:
        raise HTTPException(status_code=400, detail="Provide between 1 and 4 bioguide IDs")
    try:
        return await service.compare(bioguide_ids)
    except RegistryUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{bioguide_id}", response_model=SenatorViewModel)
async def get_senator(
    bioguide_id: str,
    service: SenatorDataService = Depends(get_senator_service),
):
    """Get detailed information about a senator."""
    try:
        senator = await service.get_senator(bioguide_id)
    except RegistryUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if senator is None:
        raise HTTPException(status_code=404, detail="Senator not found")
    return senator


@router.get("/{bioguide_id}/conflicts", response_model=ConflictReport)
async def get_senator_conflicts(
    bioguide_id: str,
    service: SenatorDataService = Depends(get_senator_service),
):
    """Conflict-of-interest flags, score and risk label for a senator."""
    try:
        report = await service.get_conflicts(bioguide_id)
    except RegistryUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if report is None:
        raise HTTPException(status_code=404, detail="Senator not found")
    return report
