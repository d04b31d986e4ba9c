"""Application context: builds and owns every long-lived object.

Caches and the shared HTTP session are constructed here, started by the
FastAPI lifespan and injected into request handlers, instead of living as
module-level singletons.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from ipo_tracker.config.settings import Settings, get_settings
from ipo_tracker.core.timezone import now_ist
from ipo_tracker.domain.models import ExchangePlatform, GmpInfo, IpoRecord
from ipo_tracker.providers import GmpSource, IpoSource, StubGmpSource, StubIpoSource
from ipo_tracker.providers.chittorgarh_provider import ChittorgarhProvider
from ipo_tracker.providers.gmp_provider import InvestorgainGmpProvider
from ipo_tracker.providers.http_fetcher import HttpFetcher
from ipo_tracker.providers.session_pool import ResourcePool, create_session_pool
from ipo_tracker.services import (
    AllocationDeriver,
    AllotmentEstimator,
    ApplicationAmountCalculator,
    FundOptimizer,
    GmpService,
    IpoListingService,
    TimeBoundedCache,
)

logger = logging.getLogger(__name__)


class AppContext:
    """
    Owns caches, the session pool and the services built on them.

    Sources can be injected (tests, offline mode); otherwise they are built
    from settings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        ipo_source: Optional[IpoSource] = None,
        gmp_source: Optional[GmpSource] = None,
        clock: Callable[[], datetime] = now_ist,
    ):
        """
        Build the context.

        Args:
            settings: Configuration. Defaults to the global settings.
            ipo_source: IPO listing source. Built from settings if not provided.
            gmp_source: GMP source. Built from settings if not provided.
            clock: Time source for both caches.
        """
        self.settings = settings or get_settings()
        s = self.settings

        self.session_pool: Optional[ResourcePool] = None
        if ipo_source is None or gmp_source is None:
            if s.use_stub_provider:
                ipo_source = ipo_source or StubIpoSource()
                gmp_source = gmp_source or StubGmpSource()
            else:
                self.session_pool = create_session_pool(s.user_agent, s.session_max_age_seconds)
                fetcher = HttpFetcher(self.session_pool, timeout_seconds=s.request_timeout_seconds)
                ipo_source = ipo_source or ChittorgarhProvider(
                    fetcher,
                    base_url=s.site_base_url,
                    list_urls={
                        ExchangePlatform.MAINBOARD: s.mainboard_list_url,
                        ExchangePlatform.SME: s.sme_list_url,
                    },
                    known_urls=s.known_ipo_urls,
                )
                gmp_source = gmp_source or InvestorgainGmpProvider(fetcher)

        self.listing_cache: TimeBoundedCache[list[IpoRecord]] = TimeBoundedCache(
            ttl_seconds=s.listing_cache_ttl_seconds,
            sweep_interval_seconds=s.listing_cache_sweep_seconds,
            name="listing-cache",
            clock=clock,
        )
        self.gmp_cache: TimeBoundedCache[GmpInfo] = TimeBoundedCache(
            ttl_seconds=s.gmp_cache_ttl_seconds,
            sweep_interval_seconds=s.gmp_cache_sweep_seconds,
            name="gmp-cache",
            clock=clock,
        )

        self.gmp_service = GmpService(source=gmp_source, cache=self.gmp_cache)
        self.listing_service = IpoListingService(
            source=ipo_source,
            cache=self.listing_cache,
            gmp_service=self.gmp_service,
            deriver=AllocationDeriver(big_share_ratio=s.nii_big_share_ratio),
            calculator=ApplicationAmountCalculator(
                hni_threshold_amount=s.hni_threshold_amount,
                retail_lots=s.retail_lots,
                s_hni_min_lots=s.s_hni_min_lots,
                s_hni_max_ratio=s.s_hni_max_ratio,
            ),
            max_ipos=s.max_ipos_to_validate,
        )
        self.fund_optimizer = FundOptimizer()
        self.allotment_estimator = AllotmentEstimator()

    def start(self) -> None:
        """Start background cache sweepers."""
        self.listing_cache.start()
        self.gmp_cache.start()

    def close(self) -> None:
        """Stop sweepers, drop cached data and release the HTTP session."""
        self.listing_cache.stop()
        self.gmp_cache.stop()
        cleared = self.listing_cache.clear() + self.gmp_cache.clear()
        if self.session_pool is not None:
            self.session_pool.close()
        logger.info("Application context closed (%d cache entries cleared)", cleared)
