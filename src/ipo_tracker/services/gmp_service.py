"""GMP lookup service with caching."""

import logging
from typing import Optional

from ipo_tracker.core.exceptions import FetchError
from ipo_tracker.domain.models import GmpInfo, GmpStatus
from ipo_tracker.providers.ipo_source import GmpSource
from ipo_tracker.services.ttl_cache import TimeBoundedCache

logger = logging.getLogger(__name__)


class GmpService:
    """
    Fetches grey market premiums, cached per GMP page URL.

    Failed lookups come back with status Error and are not cached, so the
    next request retries.
    """

    def __init__(self, source: GmpSource, cache: TimeBoundedCache[GmpInfo]):
        self._source = source
        self._cache = cache

    def get_gmp(self, gmp_url: Optional[str]) -> GmpInfo:
        if not gmp_url:
            return GmpInfo(status=GmpStatus.NO_URL)

        cached = self._cache.get(gmp_url)
        if cached is not None:
            logger.debug("Using cached GMP for %s", gmp_url)
            return cached

        try:
            raw = self._source.fetch_gmp(gmp_url)
        except FetchError as exc:
            logger.warning("GMP lookup failed: %s", exc.message)
            return GmpInfo(status=GmpStatus.ERROR, url=gmp_url)

        info = GmpInfo(status=raw.status, value=raw.value, raw=raw.raw, url=gmp_url)
        self._cache.put(gmp_url, info)
        return info

    def clear_cache(self) -> int:
        return self._cache.clear()
