"""Shared fixtures: in-memory database, fake upstream hosts and an API client."""

import os

# Must be set before civicforum.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
for key in ("CONGRESS_API_KEY", "FEC_API_KEY", "OPENSECRETS_API_KEY"):
    os.environ[key] = ""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from civicforum import models  # noqa: F401
from civicforum.api.dependencies import get_cache, get_http_client
from civicforum.database import Base, get_db
from civicforum.main import app
from civicforum.services.cache import TTLCache
from civicforum.services.fallback import FallbackResolver
from civicforum.services.upstream import UpstreamClient


class FakeUpstream:
    """Serves canned responses by URL, ignoring the query string.

    Unknown URLs answer 404, so nothing ever reaches the network and no
    transport error triggers retry backoff.
    """

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, json=None, status_code: int = 200, text: str | None = None):
        self.routes[url] = (status_code, json, text)

    def route(self, url: str, handler):
        """Answer ``url`` with ``handler(request)`` for query-dependent responses."""
        self.routes[url] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url).split("?")[0])
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(route):
            return route(request)
        status_code, json, text = route
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=json)

    def requested(self) -> list[str]:
        return [str(r.url).split("?")[0] for r in self.requests]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_upstream():
    return FakeUpstream()


@pytest.fixture
def http_client(fake_upstream):
    return httpx.AsyncClient(transport=fake_upstream.transport)


@pytest.fixture
def cache():
    return TTLCache()


@pytest.fixture
def upstream(http_client, cache):
    return UpstreamClient(http_client, cache)


@pytest.fixture
def resolver(upstream):
    return FallbackResolver(upstream)


@pytest.fixture
def db_session():
    """In-memory SQLite session, fresh tables per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session, http_client, cache):
    """TestClient wired to the fake upstream, a fresh cache and the test database.

    Not entered as a context manager, so the lifespan (real HTTP client,
    real database) never runs.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_http_client] = lambda: http_client
    app.dependency_overrides[get_cache] = lambda: cache
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_legislator_record():
    """Factory for congress-legislators registry records."""

    def make(
        bioguide: str,
        first: str,
        last: str,
        state: str,
        party: str = "Democrat",
        start: str = "2019-01-03",
        end: str = "2031-01-03",
        term_type: str = "sen",
        **term_fields,
    ) -> dict:
        return {
            "id": {"bioguide": bioguide, "fec": [f"S0{state}00000"], "opensecrets": "N00000001"},
            "name": {"first": first, "last": last, "official_full": f"{first} {last}"},
            "bio": {"birthday": "1960-05-01", "gender": "F"},
            "terms": [
                {
                    "type": term_type,
                    "start": start,
                    "end": end,
                    "state": state,
                    "party": party,
                    **term_fields,
                }
            ],
        }

    return make


@pytest.fixture
def sample_registry(make_legislator_record):
    """Three sitting senators, one House member and one former senator."""
    return [
        make_legislator_record("S000001", "Jane", "Smith", "CA", state_rank="junior", phone="202-224-0001"),
        make_legislator_record("T000278", "Tommy", "Tuberville", "AL", party="Republican", start="2021-01-03", end="2033-01-03"),
        make_legislator_record("S000033", "Bernard", "Sanders", "VT", party="Independent", start="2007-01-04"),
        make_legislator_record("H000001", "Harry", "House", "TX", party="Republican", term_type="rep"),
        make_legislator_record("F000001", "Frank", "Former", "OH", end="2023-01-03"),
    ]


@pytest.fixture
def make_trade():
    """Factory for Senate Stock Watcher transaction records."""

    def make(senator: str, ticker: str = "NVDA", type: str = "Purchase", **fields) -> dict:
        record = {
            "senator": senator,
            "ticker": ticker,
            "asset_description": f"{ticker} common stock",
            "asset_type": "Stock",
            "type": type,
            "amount": "$15,001 - $50,000",
            "transaction_date": "2024-11-01",
            "disclosure_date": "2024-11-10",
            "owner": "Self",
        }
        record.update(fields)
        return record

    return make
