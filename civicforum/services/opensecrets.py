"""OpenSecrets API client with embedded sample data.

When no API key is configured, or the API call fails, the client serves
illustrative sample data with a ``warning`` instead of failing.
"""

import logging
import re

from civicforum.config import get_settings
from civicforum.schemas.common import DataSource
from civicforum.schemas.finance import Contributor, OpenSecretsResponse
from civicforum.services.upstream import UpstreamClient

logger = logging.getLogger(__name__)

settings = get_settings()

BASE_URL = "https://www.opensecrets.org/api/"

VALID_METHODS = ["candSummary", "candContrib", "candIndustry", "candSector", "memPFDprofile"]
VALID_CYCLES = ["2024", "2022", "2020", "2018", "2016", "2014"]
CID_PATTERN = re.compile(r"^[A-Z]\d{8}$")

NO_KEY_WARNING = "OpenSecrets API key not configured. Using sample data."
FAILED_WARNING = "Failed to fetch from OpenSecrets. Using sample data."


class InvalidRequestError(ValueError):
    """Rejected OpenSecrets query parameters."""


def validate_query(method: str | None, cid: str | None, cycle: str) -> None:
    if not method or method not in VALID_METHODS:
        raise InvalidRequestError("Invalid method")
    if cycle not in VALID_CYCLES:
        raise InvalidRequestError("Invalid cycle")
    if cid and not CID_PATTERN.match(cid):
        raise InvalidRequestError("Invalid CID format")


def sample_data(method: str, cid: str | None) -> dict | None:
    """Illustrative payload in the OpenSecrets JSON shape."""
    if method == "candSummary":
        return {
            "response": {
                "summary": {
                    "@attributes": {
                        "cid": cid,
                        "cycle": "2024",
                        "total": "$15,234,567",
                        "spent": "$12,456,789",
                        "cash_on_hand": "$2,777,778",
                        "debt": "$0",
                        "origin": "Center for Responsive Politics",
                    }
                }
            }
        }
    if method == "candContrib":
        return {
            "response": {
                "contributors": {
                    "contributor": [
                        {"@attributes": {"org_name": "Alphabet Inc", "total": "$125,000", "pacs": "$0", "indivs": "$125,000"}},
                        {"@attributes": {"org_name": "Microsoft Corp", "total": "$98,500", "pacs": "$15,000", "indivs": "$83,500"}},
                        {"@attributes": {"org_name": "Amazon.com", "total": "$87,250", "pacs": "$25,000", "indivs": "$62,250"}},
                        {"@attributes": {"org_name": "Meta Platforms", "total": "$76,000", "pacs": "$10,000", "indivs": "$66,000"}},
                        {"@attributes": {"org_name": "Apple Inc", "total": "$65,750", "pacs": "$0", "indivs": "$65,750"}},
                    ]
                }
            }
        }
    if method == "candIndustry":
        return {
            "response": {
                "industries": {
                    "industry": [
                        {"@attributes": {"industry_code": "C2100", "industry_name": "Electronics Mfg & Equip", "indivs": "$450,000", "pacs": "$125,000", "total": "$575,000"}},
                        {"@attributes": {"industry_code": "B1200", "industry_name": "Securities & Investment", "indivs": "$380,000", "pacs": "$95,000", "total": "$475,000"}},
                        {"@attributes": {"industry_code": "K1000", "industry_name": "Lawyers/Law Firms", "indivs": "$320,000", "pacs": "$80,000", "total": "$400,000"}},
                        {"@attributes": {"industry_code": "H0400", "industry_name": "Pharmaceuticals/Health", "indivs": "$290,000", "pacs": "$110,000", "total": "$400,000"}},
                        {"@attributes": {"industry_code": "D0100", "industry_name": "Defense Aerospace", "indivs": "$180,000", "pacs": "$150,000", "total": "$330,000"}},
                    ]
                }
            }
        }
    return None


def parse_dollars(value: str | None) -> int:
    """'$125,000' -> 125000; anything without digits is 0."""
    digits = re.sub(r"[^0-9]", "", value or "")
    return int(digits) if digits else 0


def extract_contributors(data) -> list[Contributor]:
    """Contributor rows from a candContrib payload (single row or list)."""
    if not isinstance(data, dict):
        return []
    rows = ((data.get("response") or {}).get("contributors") or {}).get("contributor") or []
    if isinstance(rows, dict):
        rows = [rows]

    contributors = []
    for row in rows:
        attrs = (row or {}).get("@attributes") or {}
        contributors.append(
            Contributor(
                org_name=attrs.get("org_name") or "Unknown",
                total=attrs.get("total") or "$0",
                pacs=attrs.get("pacs") or "$0",
                indivs=attrs.get("indivs") or "$0",
            )
        )
    return contributors


class OpenSecretsClient:
    """Client for the OpenSecrets API."""

    def __init__(self, upstream: UpstreamClient, api_key: str | None = None):
        self.upstream = upstream
        self.api_key = api_key if api_key is not None else settings.opensecrets_api_key

    async def query(self, method: str | None, cid: str | None = None, cycle: str = "2024") -> OpenSecretsResponse:
        """
        Run one OpenSecrets method.

        Args:
            method: One of VALID_METHODS
            cid: OpenSecrets candidate ID (e.g. N00000001)
            cycle: Election cycle, one of VALID_CYCLES

        Returns:
            Live payload, or sample data with a warning

        Raises:
            InvalidRequestError: if a parameter fails validation
        """
        validate_query(method, cid, cycle)

        if not self.api_key:
            return OpenSecretsResponse(
                method=method,
                cid=cid,
                cycle=cycle,
                data=sample_data(method, cid),
                warning=NO_KEY_WARNING,
                source=DataSource.SAMPLE,
            )

        params = {"apikey": self.api_key, "output": "json", "method": method, "cid": cid or ""}
        if method == "memPFDprofile":
            params["year"] = cycle
        else:
            params["cycle"] = cycle

        result = await self.upstream.get_json(
            BASE_URL,
            source="opensecrets",
            ttl=settings.finance_ttl,
            params=params,
            headers={"Accept": "application/json"},
        )
        if not result.ok:
            logger.warning("OpenSecrets %s failed, serving sample data", method)
            return OpenSecretsResponse(
                method=method,
                cid=cid,
                cycle=cycle,
                data=sample_data(method, cid),
                warning=FAILED_WARNING,
                source=DataSource.SAMPLE,
            )

        return OpenSecretsResponse(method=method, cid=cid, cycle=cycle, data=result.data)
