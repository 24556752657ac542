"""Congress.gov API client for member, committee, bill and vote data."""

import logging

from pydantic import ValidationError

from civicforum.config import get_settings
from civicforum.schemas.common import DataSource
from civicforum.schemas.congress import (
    PartyTally,
    PartyVote,
    SponsoredBill,
    VoteRecord,
    VoteStatistics,
    VotesResponse,
)
from civicforum.services.derived_data import js_round, name_seed, vote_positions
from civicforum.services.upstream import NOT_CONFIGURED, FetchResult, UpstreamClient, not_configured

logger = logging.getLogger(__name__)

settings = get_settings()

BASE_URL = "https://api.congress.gov/v3"

# Recent key Senate roll calls used when member votes cannot be fetched
KEY_VOTES = [
    {
        "roll_call_number": 325, "date": "2024-11-15", "question": "On the Motion to Proceed",
        "result": "Motion Agreed to", "description": "A bill to provide funding for federal agencies",
        "bill_number": "H.R.9456", "bill_title": "Continuing Appropriations Act, 2025",
        "party_vote": {"democratic": {"yea": 48, "nay": 0}, "republican": {"yea": 12, "nay": 37}},
    },
    {
        "roll_call_number": 318, "date": "2024-11-12", "question": "On the Nomination",
        "result": "Nomination Confirmed", "description": "Nomination of judicial appointment",
        "bill_number": None, "bill_title": "District Court Nomination",
        "party_vote": {"democratic": {"yea": 49, "nay": 0}, "republican": {"yea": 5, "nay": 44}},
    },
    {
        "roll_call_number": 312, "date": "2024-11-08", "question": "On Passage of the Bill",
        "result": "Bill Passed", "description": "National Defense Authorization Act for Fiscal Year 2025",
        "bill_number": "S.4638", "bill_title": "National Defense Authorization Act",
        "party_vote": {"democratic": {"yea": 42, "nay": 6}, "republican": {"yea": 45, "nay": 4}},
    },
    {
        "roll_call_number": 305, "date": "2024-11-05", "question": "On the Cloture Motion",
        "result": "Cloture Motion Agreed to", "description": "Motion to invoke cloture on judicial nomination",
        "bill_number": None, "bill_title": "Circuit Court Nomination",
        "party_vote": {"democratic": {"yea": 48, "nay": 1}, "republican": {"yea": 8, "nay": 41}},
    },
    {
        "roll_call_number": 298, "date": "2024-10-30", "question": "On the Amendment",
        "result": "Amendment Rejected", "description": "Amendment to reduce spending by 5%",
        "bill_number": "S.Amdt.3245", "bill_title": "Spending Reduction Amendment",
        "party_vote": {"democratic": {"yea": 2, "nay": 47}, "republican": {"yea": 42, "nay": 7}},
    },
    {
        "roll_call_number": 291, "date": "2024-10-25", "question": "On Passage of the Bill",
        "result": "Bill Passed", "description": "Veterans Health Care Improvement Act",
        "bill_number": "S.4521", "bill_title": "Veterans Health Care Improvement Act",
        "party_vote": {"democratic": {"yea": 49, "nay": 0}, "republican": {"yea": 49, "nay": 0}},
    },
    {
        "roll_call_number": 284, "date": "2024-10-20", "question": "On the Resolution",
        "result": "Resolution Agreed to", "description": "Resolution condemning foreign interference in elections",
        "bill_number": "S.Res.845", "bill_title": "Election Security Resolution",
        "party_vote": {"democratic": {"yea": 49, "nay": 0}, "republican": {"yea": 48, "nay": 1}},
    },
    {
        "roll_call_number": 277, "date": "2024-10-15", "question": "On Passage of the Bill",
        "result": "Bill Passed", "description": "Infrastructure maintenance and improvement",
        "bill_number": "H.R.8934", "bill_title": "Surface Transportation Reauthorization",
        "party_vote": {"democratic": {"yea": 45, "nay": 4}, "republican": {"yea": 38, "nay": 11}},
    },
    {
        "roll_call_number": 270, "date": "2024-10-10", "question": "On the Motion",
        "result": "Motion Rejected", "description": "Motion to table the amendment",
        "bill_number": "S.Amdt.3198", "bill_title": "Tax Reform Amendment",
        "party_vote": {"democratic": {"yea": 48, "nay": 1}, "republican": {"yea": 3, "nay": 46}},
    },
    {
        "roll_call_number": 263, "date": "2024-10-05", "question": "On Passage of the Bill",
        "result": "Bill Passed", "description": "Water Resources Development Act of 2024",
        "bill_number": "S.4367", "bill_title": "Water Resources Development Act",
        "party_vote": {"democratic": {"yea": 48, "nay": 1}, "republican": {"yea": 47, "nay": 2}},
    },
]


def extract_committees(member: dict) -> list[str]:
    """Committee names from the latest term plus the member's committee list, deduplicated."""
    committees: list[str] = []

    terms = member.get("terms")
    if isinstance(terms, dict):
        terms = terms.get("item")
    if terms:
        current = terms[-1] or {}
        for committee in current.get("committees") or []:
            name = committee.get("name")
            if name and name not in committees:
                committees.append(name)

    for committee in member.get("committees") or []:
        name = committee.get("name") or (committee.get("committee") or {}).get("name")
        if name and name not in committees:
            committees.append(name)

    return committees


def transform_bill(bill: dict) -> SponsoredBill:
    """Transform a Congress.gov sponsored-legislation entry."""
    latest_action = bill.get("latestAction") or {}
    return SponsoredBill(
        number=bill.get("number"),
        title=bill.get("title"),
        type=bill.get("type"),
        congress=bill.get("congress"),
        introduced_date=bill.get("introducedDate"),
        latest_action=latest_action.get("text") or "No action",
        latest_action_date=latest_action.get("actionDate"),
        url=bill.get("url"),
    )


def transform_vote(vote: dict) -> VoteRecord:
    """Transform a Congress.gov member vote entry."""
    detail = vote.get("vote") or {}
    bill = vote.get("bill") or {}
    member_votes = vote.get("memberVotes") or []
    position = (member_votes[0].get("votePosition") if member_votes else None) or vote.get("position")
    yea = vote.get("yea") or {}
    nay = vote.get("nay") or {}

    return VoteRecord(
        roll_call_number=vote.get("rollNumber") or vote.get("rollCallNumber"),
        date=vote.get("date"),
        question=vote.get("question") or detail.get("question") or "Vote",
        result=vote.get("result") or "Unknown",
        description=vote.get("description") or detail.get("description") or "",
        bill_number=bill.get("number"),
        bill_title=bill.get("title"),
        member_vote=position if position in ("Yea", "Nay", "Present") else "Not Voting",
        party_vote=PartyVote(
            democratic=PartyTally(yea=yea.get("democratic") or 0, nay=nay.get("democratic") or 0),
            republican=PartyTally(yea=yea.get("republican") or 0, nay=nay.get("republican") or 0),
        ),
    )


def vote_statistics(votes: list[VoteRecord]) -> VoteStatistics:
    total = len(votes)
    missed = sum(1 for v in votes if v.member_vote == "Not Voting")
    return VoteStatistics(
        total_votes=total,
        yea_votes=sum(1 for v in votes if v.member_vote == "Yea"),
        nay_votes=sum(1 for v in votes if v.member_vote == "Nay"),
        missed_votes=missed,
        participation_rate=js_round((total - missed) / total * 100) if total else 0,
    )


def party_line_percent(votes: list[VoteRecord], party: str) -> int | None:
    """Share of cast votes that agree with the majority of the member's party."""
    if party not in ("D", "R"):
        return None
    cast = agreed = 0
    for vote in votes:
        if vote.member_vote not in ("Yea", "Nay"):
            continue
        tally = vote.party_vote.democratic if party == "D" else vote.party_vote.republican
        if tally.yea == tally.nay:
            continue
        cast += 1
        majority = "Yea" if tally.yea > tally.nay else "Nay"
        if vote.member_vote == majority:
            agreed += 1
    return js_round(agreed / cast * 100) if cast else None


def fallback_votes(bioguide_id: str) -> list[VoteRecord]:
    """Key votes with member positions derived from the bioguide ID."""
    positions = vote_positions(name_seed(bioguide_id), len(KEY_VOTES))
    return [VoteRecord(**vote, member_vote=position) for vote, position in zip(KEY_VOTES, positions)]


class CongressGovClient:
    """Client for the official Congress.gov API."""

    def __init__(self, upstream: UpstreamClient, api_key: str | None = None):
        self.upstream = upstream
        self.api_key = api_key if api_key is not None else settings.congress_api_key

    async def _request(self, endpoint: str, params: dict | None = None, ttl: int | None = None) -> FetchResult[dict]:
        """Make an authenticated request to the Congress.gov API."""
        if not self.api_key:
            return not_configured("congress.gov", "CONGRESS_API_KEY")
        if params is None:
            params = {}
        params["api_key"] = self.api_key
        params["format"] = "json"

        return await self.upstream.get_json(
            f"{BASE_URL}/{endpoint}",
            source="congress.gov",
            ttl=ttl or settings.legislation_ttl,
            params=params,
        )

    async def get_member(self, bioguide_id: str) -> FetchResult[dict]:
        """
        Get detailed information about a specific member.

        Args:
            bioguide_id: The bioguide ID of the member

        Returns:
            FetchResult with the member details dictionary
        """
        result = await self._request(f"member/{bioguide_id}")
        return result.map(lambda data: data.get("member") or {}, source="congress.gov")

    async def get_committees(self, bioguide_id: str) -> FetchResult[list[str]]:
        """Get committee assignment names for a member."""
        member = await self.get_member(bioguide_id)
        return member.map(extract_committees, source="congress.gov")

    async def get_sponsored_bills(self, bioguide_id: str, limit: int = 10) -> FetchResult[list[SponsoredBill]]:
        """
        Get legislation sponsored by a member.

        Args:
            bioguide_id: The bioguide ID of the member
            limit: Number of results

        Returns:
            FetchResult with the sponsored bills
        """
        result = await self._request(f"member/{bioguide_id}/sponsored-legislation", {"limit": limit})
        return result.map(
            lambda data: [transform_bill(b) for b in (data.get("sponsoredLegislation") or [])[:limit]],
            source="congress.gov",
        )

    async def get_votes(self, bioguide_id: str, limit: int = 30) -> VotesResponse:
        """
        Get a member's recent roll-call votes with statistics.

        Always returns votes: without an API key or on failure the key
        vote set is served, tagged ``fallback``, with an error message.
        """
        result = await self._request(f"member/{bioguide_id}/votes", {"limit": 50}, ttl=3600)
        votes: list[VoteRecord] | None = None
        error = None

        if result.ok:
            try:
                votes = [transform_vote(v) for v in (result.data.get("votes") or [])[:limit]]
            except (AttributeError, TypeError, ValidationError) as exc:
                logger.warning("Malformed votes payload for %s: %s", bioguide_id, exc)
                error = "Failed to fetch from Congress.gov"
        elif result.error.reason == NOT_CONFIGURED:
            error = "Congress API key not configured"
        else:
            error = "Failed to fetch from Congress.gov"

        if votes is None:
            votes = fallback_votes(bioguide_id)
            source = DataSource.FALLBACK
        else:
            source = DataSource.LIVE

        return VotesResponse(
            bioguide_id=bioguide_id,
            votes=votes,
            statistics=vote_statistics(votes),
            source=source,
            error=error,
        )
