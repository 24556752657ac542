"""Congress.gov legislation, vote and committee endpoints."""

from fastapi import APIRouter, Depends, Path, Query

from civicforum.api.dependencies import get_congress_client
from civicforum.schemas.common import DataSource
from civicforum.schemas.congress import BillsResponse, CommitteesResponse, VotesResponse
from civicforum.services.congress_gov import CongressGovClient
from civicforum.services.upstream import NOT_CONFIGURED, FetchError

router = APIRouter()

BIOGUIDE = Path(..., pattern=r"^[A-Za-z]\d{6}$")


def _error_message(error: FetchError) -> str:
    if error.reason == NOT_CONFIGURED:
        return "Congress API key not configured"
    return "Failed to fetch from Congress.gov"


@router.get("/bills/{bioguide_id}", response_model=BillsResponse)
async def get_sponsored_bills(
    bioguide_id: str = BIOGUIDE,
    limit: int = Query(10, ge=1, le=50),
    client: CongressGovClient = Depends(get_congress_client),
):
    """Legislation sponsored by a member."""
    result = await client.get_sponsored_bills(bioguide_id.upper(), limit)
    if not result.ok:
        return BillsResponse(bills=[], total=0, source=DataSource.UNAVAILABLE, error=_error_message(result.error))
    return BillsResponse(bills=result.data, total=len(result.data), source=DataSource.LIVE)


@router.get("/votes/{bioguide_id}", response_model=VotesResponse)
async def get_votes(
    bioguide_id: str = BIOGUIDE,
    limit: int = Query(30, ge=1, le=50),
    client: CongressGovClient = Depends(get_congress_client),
):
    """Recent roll-call votes with participation statistics."""
    return await client.get_votes(bioguide_id.upper(), limit)


@router.get("/committees/{bioguide_id}", response_model=CommitteesResponse)
async def get_committees(
    bioguide_id: str = BIOGUIDE,
    client: CongressGovClient = Depends(get_congress_client),
):
    """Committee assignments of a member."""
    bioguide_id = bioguide_id.upper()
    result = await client.get_committees(bioguide_id)
    if not result.ok:
        return CommitteesResponse(
            bioguide_id=bioguide_id,
            committees=[],
            source=DataSource.UNAVAILABLE,
            error=_error_message(result.error),
        )
    return CommitteesResponse(bioguide_id=bioguide_id, committees=result.data, source=DataSource.LIVE)
