"""Campaign finance API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from civicforum.api.dependencies import get_fec_client, get_opensecrets_client
from civicforum.schemas.finance import FecTotals, OpenSecretsResponse
from civicforum.services.fec import FECClient
from civicforum.services.opensecrets import InvalidRequestError, OpenSecretsClient
from civicforum.services.upstream import NOT_CONFIGURED

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/fec/{candidate_id}", response_model=FecTotals)
async def get_fec_totals(
    candidate_id: str = Path(..., pattern=r"^[A-Za-z0-9]{9}$"),
    cycle: int | None = Query(None, ge=2000, le=2030),
    client: FECClient = Depends(get_fec_client),
):
    """Receipts, disbursements and cash on hand for an FEC candidate."""
    result = await client.get_candidate_totals(candidate_id.upper(), cycle)
    if not result.ok:
        if result.error.reason == NOT_CONFIGURED:
            raise HTTPException(status_code=503, detail="FEC API key not configured")
        raise HTTPException(status_code=502, detail="Failed to fetch from FEC")
    return result.data


@router.get("/opensecrets", response_model=OpenSecretsResponse)
async def query_opensecrets(
    method: str | None = Query(None),
    cid: str | None = Query(None),
    cycle: str = Query("2024"),
    client: OpenSecretsClient = Depends(get_opensecrets_client),
):
    """Proxy for OpenSecrets methods, with sample data when the API is unavailable."""
    try:
        return await client.query(method, cid, cycle)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
