"""Lobbying, news and Wikipedia endpoints keyed by a senator's name."""

from fastapi import APIRouter, Depends, Path

from civicforum.api.dependencies import get_lobbying_client, get_news_client, get_wikipedia_client
from civicforum.schemas.media import LobbyingResponse, NewsResponse, WikipediaSummary
from civicforum.services.lobbying import LobbyingClient
from civicforum.services.news import NewsClient
from civicforum.services.wikipedia import WikipediaClient

router = APIRouter()

NAME = Path(..., min_length=2, max_length=100)


@router.get("/lobbying/{name}", response_model=LobbyingResponse)
async def get_lobbying(name: str = NAME, client: LobbyingClient = Depends(get_lobbying_client)):
    return await client.search(name)


@router.get("/news/{name}", response_model=NewsResponse)
async def get_news(name: str = NAME, client: NewsClient = Depends(get_news_client)):
    """Recent English-language coverage from GDELT."""
    return await client.search(name)


@router.get("/wikipedia/{name}", response_model=WikipediaSummary)
async def get_wikipedia(name: str = NAME, client: WikipediaClient = Depends(get_wikipedia_client)):
    """Lead-section summary of the best matching article."""
    return await client.summary(name)
