"""Estimated analytics endpoints: history, dark money, lobbyists and timeline.

These series have no public source, so they come from the seeded
generators and are tagged ``estimated``. Dark money prefers real
OpenSecrets contributor data when an OpenSecrets ID is supplied.
"""

import logging

from fastapi import APIRouter, Depends, Path, Query

from civicforum.api.dependencies import get_opensecrets_client
from civicforum.schemas.common import DataSource
from civicforum.schemas.derived import (
    DarkMoneyReport,
    DarkMoneySource,
    HistoricalData,
    LobbyistReport,
    TimelineReport,
)
from civicforum.services.derived_data import GeneratorKind, generate
from civicforum.services.opensecrets import OpenSecretsClient, extract_contributors, parse_dollars

logger = logging.getLogger(__name__)

router = APIRouter()

NAME = Path(..., min_length=2, max_length=100)

# PAC money above this is treated as super PAC spending
SUPER_PAC_THRESHOLD = 50_000


@router.get("/historical/{bioguide_id}", response_model=HistoricalData)
async def get_historical(bioguide_id: str = Path(..., pattern=r"^[A-Za-z]\d{6}$")):
    """Net worth, trading activity and performance series."""
    return generate(bioguide_id.upper(), GeneratorKind.HISTORICAL)


@router.get("/dark-money/{name}", response_model=DarkMoneyReport)
async def get_dark_money(
    name: str = NAME,
    opensecrets_id: str | None = Query(None, pattern=r"^[A-Z]\d{8}$"),
    client: OpenSecretsClient = Depends(get_opensecrets_client),
):
    """Outside spending linked to a senator."""
    if opensecrets_id:
        response = await client.query("candContrib", opensecrets_id)
        contributors = extract_contributors(response.data)
        if contributors:
            sources = []
            for contributor in contributors:
                pacs = parse_dollars(contributor.pacs)
                sources.append(
                    DarkMoneySource(
                        name=contributor.org_name,
                        type="super_pac" if pacs > SUPER_PAC_THRESHOLD else "501c4",
                        amount=contributor.total,
                        amount_value=parse_dollars(contributor.total),
                        cycle=response.cycle,
                        disclosed=pacs == 0,
                    )
                )
            return DarkMoneyReport(
                senator=name,
                sources=sources,
                total=sum(s.amount_value for s in sources),
                source=DataSource.SAMPLE if response.warning else DataSource.LIVE,
                warning=response.warning,
            )
        logger.info("No OpenSecrets contributors for %s, using estimates", opensecrets_id)

    sources = generate(name, GeneratorKind.DARK_MONEY)
    return DarkMoneyReport(
        senator=name,
        sources=sources,
        total=sum(s.amount_value for s in sources),
        source=DataSource.ESTIMATED,
    )


@router.get("/lobbyists/{name}", response_model=LobbyistReport)
async def get_lobbyists(name: str = NAME):
    """Lobbyist relationships for a senator."""
    lobbyists = generate(name, GeneratorKind.LOBBYISTS)
    return LobbyistReport(
        senator=name,
        lobbyists=lobbyists,
        total_spending=sum(l.amount_value for l in lobbyists),
    )


@router.get("/timeline/{name}", response_model=TimelineReport)
async def get_timeline(
    name: str = NAME,
    stock_trades: int = Query(0, ge=0),
    party: str = Query("D", pattern="^[RDI]$"),
):
    """Trades, donations, votes and bills on one timeline, newest first."""
    events = generate(name, GeneratorKind.TIMELINE, stock_trades=stock_trades, party=party)
    return TimelineReport(senator=name, events=events)
