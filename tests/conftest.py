"""
Pytest configuration and fixtures for IPO tracker tests.

This module provides:
- An adjustable clock for TTL and max-age tests
- Fake IPO and GMP sources with call counting and failure injection
- Service fixtures wired to the fakes
- A TestClient fixture backed by an application context of fakes
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

import pytest
from fastapi.testclient import TestClient

from ipo_tracker.app_context import AppContext
from ipo_tracker.config.settings import Settings, reset_settings, set_settings
from ipo_tracker.core.exceptions import FetchError, ParseError
from ipo_tracker.core.timezone import IST_TZ
from ipo_tracker.domain.models import ExchangePlatform, GmpInfo, GmpStatus, IpoRecord
from ipo_tracker.main import app
from ipo_tracker.providers import IpoLink, RawGmp, RawIpoDetails, ScrapedAllocation
from ipo_tracker.services import (
    AllocationDeriver,
    ApplicationAmountCalculator,
    GmpService,
    IpoListingService,
    TimeBoundedCache,
)


# =============================================================================
# TIME HELPERS
# =============================================================================


def ist_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in Asia/Kolkata."""
    return IST_TZ.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: Optional[datetime] = None):
        self._now = start or ist_datetime(2025, 7, 28, 10, 0, 0)

    def __call__(self) -> datetime:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now = self._now + timedelta(seconds=seconds)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock fixed at 2025-07-28 10:00 IST."""
    return FakeClock()


# =============================================================================
# SAMPLE PAGE DATA
# =============================================================================


SELLOWRAP_URL = "https://www.chittorgarh.com/ipo/sellowrap-industries-ipo/2040/"
SELLOWRAP_GMP_URL = "https://www.investorgain.com/chr-gmp/sellowrap-industries-ipo/1234/"


def sellowrap_details(**overrides) -> RawIpoDetails:
    """SME detail page figures: ₹90-95 band, 1600 share lots, NII 5,23,200."""
    values = dict(
        url=SELLOWRAP_URL,
        issue_size="₹30.28 Cr",
        price_range="₹90 - ₹95",
        open_date="Fri, Jul 25, 2025",
        close_date="Tue, Jul 29, 2025",
        lot_size="1600",
        listing_date="Fri, Aug 1, 2025",
        allotment_date="Wed, Jul 30, 2025",
        refund_date="Thu, Jul 31, 2025",
        credit_date="Thu, Jul 31, 2025",
        gmp_url=SELLOWRAP_GMP_URL,
        allocation=ScrapedAllocation(
            nii_shares="5,23,200 (20.02%)",
            retail_shares="12,20,800 (46.71%)",
        ),
    )
    values.update(overrides)
    return RawIpoDetails(**values)


# =============================================================================
# FAKE SOURCES
# =============================================================================


class FakeIpoSource:
    """
    In-memory IpoSource.

    Links are configured per platform and details per URL. URLs listed in
    failing_urls raise FetchError, those in unparseable_urls raise ParseError;
    list_failures makes list pages raise FetchError.
    """

    def __init__(
        self,
        links: Optional[dict[ExchangePlatform, list[IpoLink]]] = None,
        details: Optional[dict[str, RawIpoDetails]] = None,
        failing_urls: Iterable[str] = (),
        unparseable_urls: Iterable[str] = (),
        list_failures: Iterable[ExchangePlatform] = (),
    ):
        self.links = links or {}
        self.details = details or {}
        self.failing_urls = set(failing_urls)
        self.unparseable_urls = set(unparseable_urls)
        self.list_failures = set(list_failures)
        self.list_calls = 0
        self.detail_calls = 0

    def list_ipo_links(self, platform: ExchangePlatform) -> list[IpoLink]:
        self.list_calls += 1
        if platform in self.list_failures:
            raise FetchError(f"list:{platform.value}", "connection refused")
        return list(self.links.get(platform, []))

    def fetch_details(self, link: IpoLink) -> RawIpoDetails:
        self.detail_calls += 1
        if link.url in self.failing_urls:
            raise FetchError(link.url, "timed out after 15s")
        if link.url in self.unparseable_urls:
            raise ParseError("IPO details", link.url)
        if link.url is None:
            return RawIpoDetails()
        return self.details.get(link.url, RawIpoDetails(url=link.url))


class FakeGmpSource:
    """GmpSource returning a fixed premium, or failing for configured URLs."""

    def __init__(
        self,
        result: Optional[RawGmp] = None,
        failing_urls: Iterable[str] = (),
    ):
        self.result = result or RawGmp(status=GmpStatus.LIVE, value="₹105 (10.53%)", raw="₹10")
        self.failing_urls = set(failing_urls)
        self.calls: list[str] = []

    def fetch_gmp(self, gmp_url: str) -> RawGmp:
        self.calls.append(gmp_url)
        if gmp_url in self.failing_urls:
            raise FetchError(gmp_url, "HTTP 503")
        return self.result


@pytest.fixture
def sme_source() -> FakeIpoSource:
    """Source with one announced SME IPO and no mainboard IPOs."""
    return FakeIpoSource(
        links={
            ExchangePlatform.SME: [
                IpoLink(name="Sellowrap Industries IPO", url=SELLOWRAP_URL, announced_active=True),
            ],
        },
        details={SELLOWRAP_URL: sellowrap_details()},
    )


@pytest.fixture
def gmp_source() -> FakeGmpSource:
    return FakeGmpSource()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def listing_cache(fake_clock) -> TimeBoundedCache[list[IpoRecord]]:
    return TimeBoundedCache(ttl_seconds=5 * 3600, name="test-listing", clock=fake_clock)


@pytest.fixture
def gmp_cache(fake_clock) -> TimeBoundedCache[GmpInfo]:
    return TimeBoundedCache(ttl_seconds=30 * 60, name="test-gmp", clock=fake_clock)


@pytest.fixture
def gmp_service(gmp_source, gmp_cache) -> GmpService:
    """Provide test GmpService."""
    return GmpService(source=gmp_source, cache=gmp_cache)


@pytest.fixture
def listing_service_factory(listing_cache, gmp_service):
    """Factory for IpoListingService over a given source, pinned to 2025-07-28."""

    def _create(source, today: date = date(2025, 7, 28), max_ipos: int = 8) -> IpoListingService:
        return IpoListingService(
            source=source,
            cache=listing_cache,
            gmp_service=gmp_service,
            deriver=AllocationDeriver(),
            calculator=ApplicationAmountCalculator(),
            max_ipos=max_ipos,
            today=lambda: today,
        )

    return _create


@pytest.fixture
def listing_service(listing_service_factory, sme_source) -> IpoListingService:
    """Provide test IpoListingService over the SME fake source."""
    return listing_service_factory(sme_source)


# =============================================================================
# API CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment of the test run."""
    settings = Settings(_env_file=None, use_stub_provider=True)
    set_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture
def app_context(test_settings, sme_source, gmp_source, fake_clock) -> AppContext:
    """Application context built on the fake sources."""
    return AppContext(
        settings=test_settings,
        ipo_source=sme_source,
        gmp_source=gmp_source,
        clock=fake_clock,
    )


@pytest.fixture
def client(app_context) -> TestClient:
    """Create test client; the lifespan starts and closes the injected context."""
    app.state.context = app_context
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    app.state.context = None
