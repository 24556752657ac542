"""FEC API client for campaign finance totals."""

from civicforum.config import get_settings
from civicforum.schemas.finance import FecTotals
from civicforum.services.upstream import FetchResult, UpstreamClient, not_configured

settings = get_settings()

BASE_URL = "https://api.open.fec.gov/v1"


def transform_totals(candidate_id: str, cycle: int, data: dict) -> FecTotals:
    """Transform the first totals row, or zeros when the FEC has none."""
    results = data.get("results") or []
    totals = results[0] if results else {}
    return FecTotals(
        candidate_id=candidate_id,
        cycle=cycle,
        receipts=totals.get("receipts") or 0,
        disbursements=totals.get("disbursements") or 0,
        cash_on_hand=totals.get("cash_on_hand_end_period") or 0,
        debt=totals.get("debts_owed_by_committee") or 0,
        individual_contributions=totals.get("individual_contributions") or 0,
        pac_contributions=totals.get("other_political_committee_contributions") or 0,
    )


class FECClient:
    """Client for the FEC (Federal Election Commission) API."""

    def __init__(self, upstream: UpstreamClient, api_key: str | None = None):
        self.upstream = upstream
        self.api_key = api_key if api_key is not None else settings.fec_api_key

    async def _request(self, endpoint: str, params: dict | None = None) -> FetchResult[dict]:
        """Make an authenticated request to the FEC API."""
        if not self.api_key:
            return not_configured("fec", "FEC_API_KEY")
        if params is None:
            params = {}
        params["api_key"] = self.api_key

        return await self.upstream.get_json(
            f"{BASE_URL}/{endpoint}",
            source="fec",
            ttl=settings.finance_ttl,
            params=params,
        )

    async def get_candidate_totals(self, candidate_id: str, cycle: int | None = None) -> FetchResult[FecTotals]:
        """
        Get financial totals for a candidate.

        Args:
            candidate_id: FEC candidate ID
            cycle: Election cycle year, defaults to ``fec_cycle``

        Returns:
            FetchResult with the cycle's totals
        """
        cycle = cycle or settings.fec_cycle
        result = await self._request(f"candidate/{candidate_id}/totals/", {"cycle": cycle})
        return result.map(lambda data: transform_totals(candidate_id, cycle, data), source="fec")
