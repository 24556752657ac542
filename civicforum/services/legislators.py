"""Client for the congress-legislators registry and its social-media companion."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

from pydantic import ValidationError

from civicforum.config import get_settings
from civicforum.schemas.common import DataSource
from civicforum.schemas.legislator import Legislator, SocialHandles
from civicforum.services.fallback import FallbackResolver
from civicforum.services.upstream import FetchResult

logger = logging.getLogger(__name__)

settings = get_settings()

PHOTO_URL = "https://www.congress.gov/img/member/{bioguide}_200.jpg"

# 2-letter code to state name mapping
STATE_NAMES = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas", "CA": "California",
    "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware", "FL": "Florida", "GA": "Georgia",
    "HI": "Hawaii", "ID": "Idaho", "IL": "Illinois", "IN": "Indiana", "IA": "Iowa",
    "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi", "MO": "Missouri",
    "MT": "Montana", "NE": "Nebraska", "NV": "Nevada", "NH": "New Hampshire", "NJ": "New Jersey",
    "NM": "New Mexico", "NY": "New York", "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio",
    "OK": "Oklahoma", "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah", "VT": "Vermont",
    "VA": "Virginia", "WA": "Washington", "WV": "West Virginia", "WI": "Wisconsin", "WY": "Wyoming",
}


def state_name(abbr: str) -> str:
    """Full state name, or the code itself when unknown."""
    return STATE_NAMES.get(abbr, abbr)


def party_code(party: str | None) -> str:
    """Map registry party text to R, D or I."""
    if party == "Republican":
        return "R"
    if party in ("Democrat", "Democratic"):
        return "D"
    return "I"


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def is_current_senator(raw: dict, today: date) -> bool:
    """True when the latest term is a Senate term that ends after ``today``."""
    terms = raw.get("terms") or []
    if not terms:
        return False
    term = terms[-1]
    end = _parse_date(term.get("end"))
    return term.get("type") == "sen" and end is not None and end > today


def transform_legislator(raw: dict, social: SocialHandles | None = None) -> Legislator:
    """
    Transform a registry record to a Legislator.

    Args:
        raw: One element of legislators-current.json
        social: Handles from the social-media registry, if any

    Returns:
        Legislator built from the latest term

    Raises:
        KeyError, ValidationError: when the record lacks required fields
    """
    ids = raw["id"]
    name = raw["name"]
    bio = raw.get("bio") or {}
    terms = raw["terms"]
    term = terms[-1]
    first_senate_term = next((t for t in terms if t.get("type") == "sen"), None)
    start = _parse_date((first_senate_term or term).get("start"))
    social = social or SocialHandles()
    bioguide_id = ids["bioguide"]
    fec_ids = ids.get("fec") or []

    return Legislator(
        bioguide_id=bioguide_id,
        first_name=name["first"],
        last_name=name["last"],
        full_name=name.get("official_full") or f"{name['first']} {name['last']}",
        state=term["state"],
        party=party_code(term.get("party")),
        chamber="senate" if term.get("type") == "sen" else "house",
        since_year=start.year if start else None,
        term_end=_parse_date(term.get("end")),
        state_rank=term.get("state_rank"),
        phone=term.get("phone"),
        website=term.get("url"),
        office_address=term.get("address"),
        contact_form=term.get("contact_form"),
        twitter=social.twitter,
        facebook=social.facebook,
        youtube=social.youtube,
        instagram=social.instagram,
        opensecrets_id=ids.get("opensecrets"),
        fec_id=fec_ids[0] if fec_ids else None,
        govtrack_id=ids.get("govtrack"),
        birthday=_parse_date(bio.get("birthday")),
        gender=bio.get("gender"),
        photo_url=PHOTO_URL.format(bioguide=bioguide_id.lower()),
    )


def transform_social(data: list) -> dict[str, SocialHandles]:
    """Build a bioguide ID to handles lookup from the social-media registry."""
    lookup = {}
    for entry in data:
        if not isinstance(entry, dict):
            continue
        bioguide = (entry.get("id") or {}).get("bioguide")
        social = entry.get("social")
        if bioguide and isinstance(social, dict):
            lookup[bioguide] = SocialHandles(
                twitter=social.get("twitter"),
                facebook=social.get("facebook"),
                youtube=social.get("youtube"),
                instagram=social.get("instagram"),
            )
    return lookup


def current_senators(
    registry: list,
    social: dict[str, SocialHandles],
    today: date,
) -> list[Legislator]:
    """Filter the registry to sitting senators, skipping malformed records."""
    senators = []
    for raw in registry:
        if not isinstance(raw, dict) or not is_current_senator(raw, today):
            continue
        bioguide = (raw.get("id") or {}).get("bioguide")
        try:
            senators.append(transform_legislator(raw, social.get(bioguide)))
        except (KeyError, TypeError, ValidationError) as exc:
            logger.debug("Skipping malformed registry record %s: %s", bioguide, exc)
    senators.sort(key=lambda s: s.last_name)
    return senators


@dataclass
class SenatorRoster:
    """Sitting senators and whether their social handles could be loaded."""

    senators: list[Legislator]
    social_source: DataSource = DataSource.LIVE


class LegislatorsClient:
    """Client for the public congress-legislators dataset."""

    def __init__(
        self,
        resolver: FallbackResolver,
        mirrors: list[str] | None = None,
        social_mirrors: list[str] | None = None,
        timeout: float | None = None,
    ):
        self.resolver = resolver
        self.mirrors = mirrors if mirrors is not None else settings.legislators_mirrors
        self.social_mirrors = social_mirrors if social_mirrors is not None else settings.social_media_mirrors
        self.timeout = timeout or settings.registry_timeout

    async def fetch_registry(self) -> FetchResult[list]:
        """Get the raw list of current legislators."""
        result = await self.resolver.resolve(
            self.mirrors, source="legislators", ttl=settings.registry_ttl, timeout=self.timeout
        )
        return result.map(_require_list, source="legislators")

    async def fetch_social(self) -> FetchResult[dict[str, SocialHandles]]:
        """Get social-media handles keyed by bioguide ID."""
        result = await self.resolver.resolve(
            self.social_mirrors, source="social_media", ttl=settings.registry_ttl, timeout=self.timeout
        )
        return result.map(lambda data: transform_social(_require_list(data)), source="social_media")

    async def fetch_current_senators(self, today: date | None = None) -> FetchResult[SenatorRoster]:
        """
        Get sitting senators with their social handles.

        Both registries are fetched concurrently. A social registry failure
        only drops the handles and is reported in ``social_source``; a
        legislators registry failure fails the call.

        Args:
            today: Reference date for the current-term filter

        Returns:
            FetchResult with a SenatorRoster sorted by last name
        """
        registry, social = await asyncio.gather(self.fetch_registry(), self.fetch_social())
        if not social.ok:
            logger.warning("Social media registry unavailable, continuing without handles: %s", social.error)
        if not registry.ok:
            return FetchResult.failure(registry.error)
        return FetchResult.success(
            SenatorRoster(
                senators=current_senators(registry.data, social.data or {}, today or date.today()),
                social_source=DataSource.LIVE if social.ok else DataSource.UNAVAILABLE,
            )
        )


def _require_list(data) -> list:
    if not isinstance(data, list):
        raise TypeError(f"expected a JSON array, got {type(data).__name__}")
    return data
