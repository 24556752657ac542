"""Tests for the per-source and analytics API endpoints."""

from civicforum.config import get_settings
from civicforum.services import lobbying, news

settings = get_settings()

TRADES_A = settings.stock_trade_mirrors[0]
REGISTRY_A = settings.legislators_mirrors[0]


class TestStockTradesAPI:
    """Tests for /api/stock-trades"""

    def test_fallback_feed(self, client):
        """Should serve the embedded dataset when mirrors fail."""
        data = client.get("/api/stock-trades").json()
        assert data["source"] == "fallback"
        assert data["total"] == len(data["trades"])

    def test_limit(self, client, fake_upstream, make_trade):
        """Should truncate the feed to the requested limit."""
        fake_upstream.add(TRADES_A, json=[make_trade("Jane Smith")] * 5)
        data = client.get("/api/stock-trades?limit=2").json()
        assert data["source"] == "live"
        assert len(data["trades"]) == 2

    def test_trades_for_senator(self, client):
        """Should filter trades by name."""
        data = client.get("/api/stock-trades/Mullin").json()
        assert data["stats"]["total"] == 3

    def test_active_traders(self, client, fake_upstream, sample_registry):
        """Should list reconciled senators with at least three trades."""
        fake_upstream.add(REGISTRY_A, json=sample_registry)
        data = client.get("/api/stock-trades/active-traders").json()
        assert data["source"] == "fallback"
        assert [t["key"] for t in data["traders"]] == ["T000278"]
        assert data["traders"][0]["name"] == "Tommy Tuberville"
        assert data["traders"][0]["count"] == 5


class TestLegislationAPI:
    """Tests for /api/bills, /api/votes and /api/committees"""

    def test_bills_without_key(self, client):
        """Should report the missing key instead of failing."""
        data = client.get("/api/bills/S000001").json()
        assert data["bills"] == []
        assert data["source"] == "unavailable"
        assert data["error"] == "Congress API key not configured"

    def test_votes_fallback(self, client):
        """Should always return a vote set."""
        data = client.get("/api/votes/S000001").json()
        assert data["source"] == "fallback"
        assert data["statistics"]["total_votes"] == 10

    def test_committees_without_key(self, client):
        """Should return an empty, unavailable list."""
        data = client.get("/api/committees/S000001").json()
        assert data["committees"] == []
        assert data["source"] == "unavailable"

    def test_rejects_bad_bioguide(self, client):
        """Should validate the bioguide ID format."""
        assert client.get("/api/votes/not-an-id").status_code == 422


class TestFinanceAPI:
    """Tests for /api/fec and /api/opensecrets"""

    def test_fec_without_key(self, client):
        """Should return 503 when the FEC key is missing."""
        response = client.get("/api/fec/S0CA00000")
        assert response.status_code == 503

    def test_opensecrets_sample(self, client):
        """Should serve sample data with a warning without a key."""
        response = client.get("/api/opensecrets?method=candContrib&cid=N00000001")
        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "sample"
        assert data["warning"]

    def test_opensecrets_invalid_method(self, client):
        """Should return 400 for an unknown method."""
        response = client.get("/api/opensecrets?method=deleteEverything")
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid method"


class TestMediaAPI:
    """Tests for /api/lobbying, /api/news and /api/wikipedia"""

    def test_lobbying_unavailable(self, client):
        """Should return an empty noted response when LDA is down."""
        data = client.get("/api/lobbying/Jane Smith").json()
        assert data["source"] == "unavailable"
        assert data["note"]

    def test_lobbying_live(self, client, fake_upstream):
        """Should pass filings through."""
        fake_upstream.add(lobbying.BASE_URL, json={"count": 1, "results": [{"client": {"name": "Acme"}}]})
        data = client.get("/api/lobbying/Jane Smith").json()
        assert data["filings"][0]["client_name"] == "Acme"

    def test_news(self, client, fake_upstream):
        """Should return articles from GDELT."""
        fake_upstream.add(news.BASE_URL, text='{"articles": [{"title": "Hello"}]}')
        data = client.get("/api/news/Jane Smith").json()
        assert data["total"] == 1

    def test_wikipedia_unavailable(self, client):
        """Should report a failed search."""
        data = client.get("/api/wikipedia/Jane Smith").json()
        assert data["error"] == "Wikipedia search failed"


class TestAnalyticsAPI:
    """Tests for the estimated analytics endpoints."""

    def test_historical(self, client):
        """Should return estimated series for a bioguide ID."""
        data = client.get("/api/historical/S000001").json()
        assert data["source"] == "estimated"
        assert len(data["net_worth"]) == 6
        assert data["net_worth"][0]["net_worth"] == 37_230_000

    def test_dark_money_estimated(self, client):
        """Should use the generator without an OpenSecrets ID."""
        data = client.get("/api/dark-money/AB").json()
        assert data["source"] == "estimated"
        assert len(data["sources"]) == 4
        assert data["total"] == sum(s["amount_value"] for s in data["sources"])

    def test_dark_money_from_contributors(self, client):
        """Should classify OpenSecrets contributors by PAC money."""
        data = client.get("/api/dark-money/Jane Smith?opensecrets_id=N00000001").json()
        assert data["source"] == "sample"
        assert data["warning"]
        first = data["sources"][0]
        assert first["name"] == "Alphabet Inc"
        assert first["amount_value"] == 125000
        assert first["type"] == "501c4"
        assert first["disclosed"] is True

    def test_lobbyists(self, client):
        """Should total lobbying spend."""
        data = client.get("/api/lobbyists/AB").json()
        assert len(data["lobbyists"]) == 5
        assert data["total_spending"] == sum(l["amount_value"] for l in data["lobbyists"])

    def test_timeline(self, client):
        """Should return events newest first."""
        data = client.get("/api/timeline/AB?stock_trades=0&party=D").json()
        dates = [e["date"] for e in data["events"]]
        assert dates == sorted(dates, reverse=True)
        assert len(data["events"]) == 6


class TestHealth:
    """Tests for /health"""

    def test_health(self, client):
        """Should report healthy."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
