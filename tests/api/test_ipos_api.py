"""
API tests for IPO listing endpoints.

Tests cover:
- GET /api/live-ipos, /api/sme-ipos, /api/all-ipos
- GET /api/gmp
- POST /api/cache/clear
- Info endpoints, CORS, lifespan and the generic 500 handler
"""

from fastapi.testclient import TestClient

from ipo_tracker.api.deps import get_listing_service
from ipo_tracker.main import app

from tests.conftest import SELLOWRAP_GMP_URL, FakeGmpSource, FakeIpoSource


# =============================================================================
# LISTINGS
# =============================================================================


class TestListings:
    """Tests for IPO list endpoints."""

    def test_sme_ipos(self, client: TestClient):
        """
        GIVEN one active SME IPO upstream
        WHEN I GET /api/sme-ipos
        THEN the record is returned with camelCase keys and computed figures
        """
        response = client.get("/api/sme-ipos")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        ipo = data[0]
        assert ipo["id"] == "sme-active-1"
        assert ipo["name"] == "Sellowrap Industries"
        assert ipo["exchangePlatform"] == "SME"
        assert ipo["status"] == "Live"
        assert ipo["openDate"] == "Jul 25, 2025"
        assert ipo["lotSize"] == 1600
        assert ipo["applications"]["retailMin"] == {"lots": 2, "shares": 3200, "amount": 304000}
        assert ipo["applications"]["bHniMin"]["lots"] == 7
        assert ipo["applications"]["sHniMax"]["lots"] == 6
        assert ipo["allocation"]["bNii"] == 348800
        assert ipo["allocation"]["sNii"] == 174400
        assert ipo["allocation"]["derived"] is True
        assert ipo["gmp"]["status"] == "Live"
        assert ipo["gmp"]["value"] == "₹105 (10.53%)"

    def test_unknown_figures_are_null(self, client: TestClient, sme_source: FakeIpoSource):
        """
        GIVEN an IPO whose page did not show an issue price
        WHEN I list it
        THEN the field is null, never a placeholder string
        """
        details = sme_source.details[next(iter(sme_source.details))]
        details.price_range = None

        ipo = client.get("/api/sme-ipos").json()[0]

        assert ipo["priceRange"] is None
        assert ipo["applications"] is None

    def test_live_ipos_empty(self, client: TestClient):
        response = client.get("/api/live-ipos")

        assert response.status_code == 200
        assert response.json() == []

    def test_all_ipos(self, client: TestClient):
        response = client.get("/api/all-ipos")

        assert response.status_code == 200
        data = response.json()
        assert data["mainboard"] == []
        assert len(data["sme"]) == 1
        assert data["total"] == 1

    def test_list_served_from_cache(self, client: TestClient, sme_source: FakeIpoSource):
        client.get("/api/sme-ipos")
        client.get("/api/sme-ipos")

        assert sme_source.list_calls == 1


# =============================================================================
# GMP
# =============================================================================


class TestGmp:
    """Tests for GET /api/gmp."""

    def test_lookup(self, client: TestClient):
        response = client.get("/api/gmp", params={"url": SELLOWRAP_GMP_URL})

        assert response.status_code == 200
        assert response.json() == {
            "status": "Live",
            "value": "₹105 (10.53%)",
            "raw": "₹10",
            "url": SELLOWRAP_GMP_URL,
        }

    def test_failed_lookup_is_error_status(self, client: TestClient, gmp_source: FakeGmpSource):
        gmp_source.failing_urls.add(SELLOWRAP_GMP_URL)

        response = client.get("/api/gmp", params={"url": SELLOWRAP_GMP_URL})

        assert response.status_code == 200
        assert response.json()["status"] == "Error"

    def test_missing_url_is_400(self, client: TestClient):
        response = client.get("/api/gmp")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


# =============================================================================
# CACHE
# =============================================================================


class TestCacheClear:
    """Tests for POST /api/cache/clear."""

    def test_clear_counts_listing_and_gmp_entries(self, client: TestClient, sme_source: FakeIpoSource):
        """
        GIVEN a cached SME list and its cached GMP
        WHEN I clear the cache
        THEN both entries are counted and the next request refetches
        """
        client.get("/api/sme-ipos")

        response = client.post("/api/cache/clear")

        assert response.status_code == 200
        assert response.json() == {"cleared": 2}
        client.get("/api/sme-ipos")
        assert sme_source.list_calls == 2

    def test_clear_empty(self, client: TestClient):
        assert client.post("/api/cache/clear").json() == {"cleared": 0}


# =============================================================================
# APP
# =============================================================================


class TestApp:
    """Tests for app-level behavior."""

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client: TestClient):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert "version" in data

    def test_cors_allows_any_origin(self, client: TestClient):
        response = client.get("/api/live-ipos", headers={"Origin": "http://localhost:5173"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_lifespan_starts_and_stops_sweepers(self, app_context):
        """
        GIVEN an application context
        WHEN the app starts and shuts down
        THEN cache sweepers run only while the app is up and caches are emptied
        """
        app.state.context = app_context
        with TestClient(app) as test_client:
            test_client.get("/api/sme-ipos")
            assert app_context.listing_cache.is_running
            assert app_context.gmp_cache.is_running

        assert not app_context.listing_cache.is_running
        assert not app_context.gmp_cache.is_running
        assert len(app_context.listing_cache) == 0
        assert app.state.context is None

    def test_unhandled_error_is_generic_500(self, app_context):
        """
        GIVEN a listing service that raises an unexpected error
        WHEN I GET /api/sme-ipos
        THEN the response is 500 with a generic message
        """

        class BrokenListingService:
            def get_ipos(self, platform):
                raise RuntimeError("selector drifted")

        app.state.context = app_context
        app.dependency_overrides[get_listing_service] = lambda: BrokenListingService()
        try:
            with TestClient(app, raise_server_exceptions=False) as test_client:
                response = test_client.get("/api/sme-ipos")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
