"""
Unit tests for GmpService.

Tests cover:
- Lookups with and without a GMP page URL
- Caching for the GMP TTL
- Failed lookups reported as Error and not cached
"""

from ipo_tracker.domain.models import GmpStatus
from ipo_tracker.providers import RawGmp
from ipo_tracker.services import GmpService, TimeBoundedCache

from tests.conftest import SELLOWRAP_GMP_URL, FakeClock, FakeGmpSource


class TestGetGmp:
    """Tests for GMP lookups."""

    def test_no_url_means_no_lookup(self, gmp_service: GmpService, gmp_source: FakeGmpSource):
        """
        GIVEN an IPO without a GMP page link
        WHEN I look up its GMP
        THEN the status is NoURL and the source is not called
        """
        info = gmp_service.get_gmp(None)

        assert info.status == GmpStatus.NO_URL
        assert gmp_source.calls == []

    def test_live_gmp(self, gmp_service: GmpService):
        """
        GIVEN a GMP page with a latest row
        WHEN I look up the GMP
        THEN status is Live with the estimated listing value and raw premium
        """
        info = gmp_service.get_gmp(SELLOWRAP_GMP_URL)

        assert info.status == GmpStatus.LIVE
        assert info.value == "₹105 (10.53%)"
        assert info.raw == "₹10"
        assert info.url == SELLOWRAP_GMP_URL

    def test_cached_for_ttl(
        self,
        gmp_service: GmpService,
        gmp_source: FakeGmpSource,
        fake_clock: FakeClock,
    ):
        """
        GIVEN a GMP fetched once
        WHEN it is requested again within 30 minutes, then after 30 minutes
        THEN the source is hit once for the first window and again after expiry
        """
        gmp_service.get_gmp(SELLOWRAP_GMP_URL)
        fake_clock.advance(29 * 60)
        gmp_service.get_gmp(SELLOWRAP_GMP_URL)
        assert len(gmp_source.calls) == 1

        fake_clock.advance(60)
        gmp_service.get_gmp(SELLOWRAP_GMP_URL)
        assert len(gmp_source.calls) == 2

    def test_failure_is_error_and_not_cached(self, fake_clock: FakeClock):
        """
        GIVEN a GMP source that fails for a URL
        WHEN I look it up twice
        THEN both results are Error and the source is retried each time
        """
        source = FakeGmpSource(failing_urls=[SELLOWRAP_GMP_URL])
        service = GmpService(source=source, cache=TimeBoundedCache(ttl_seconds=1800, clock=fake_clock))

        first = service.get_gmp(SELLOWRAP_GMP_URL)
        second = service.get_gmp(SELLOWRAP_GMP_URL)

        assert first.status == GmpStatus.ERROR
        assert second.status == GmpStatus.ERROR
        assert len(source.calls) == 2

    def test_tbd_status_passes_through(self, fake_clock: FakeClock):
        source = FakeGmpSource(result=RawGmp(status=GmpStatus.TBD))
        service = GmpService(source=source, cache=TimeBoundedCache(ttl_seconds=1800, clock=fake_clock))

        info = service.get_gmp(SELLOWRAP_GMP_URL)

        assert info.status == GmpStatus.TBD
        assert info.value is None

    def test_clear_cache(self, gmp_service: GmpService, gmp_source: FakeGmpSource):
        gmp_service.get_gmp(SELLOWRAP_GMP_URL)

        assert gmp_service.clear_cache() == 1
        gmp_service.get_gmp(SELLOWRAP_GMP_URL)
        assert len(gmp_source.calls) == 2
