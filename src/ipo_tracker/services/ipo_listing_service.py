"""IPO listing service: cache lookup, scrape on miss, derive secondary figures."""

import logging
import re
from dataclasses import replace
from datetime import date
from typing import Callable, Optional

from ipo_tracker.core.exceptions import FetchError, ParseError
from ipo_tracker.core.numbers import parse_indian_int
from ipo_tracker.core.timezone import parse_listing_date, today_ist
from ipo_tracker.domain.models import ExchangePlatform, GmpInfo, GmpStatus, IpoRecord
from ipo_tracker.providers.ipo_source import IpoLink, IpoSource, RawIpoDetails
from ipo_tracker.services.allocation_deriver import AllocationDeriver
from ipo_tracker.services.application_calculator import ApplicationAmountCalculator
from ipo_tracker.services.gmp_service import GmpService
from ipo_tracker.services.ttl_cache import TimeBoundedCache

logger = logging.getLogger(__name__)

_WEEKDAY_PREFIX_RE = re.compile(r"^[A-Za-z]+,\s*")
_IPO_SUFFIX_RE = re.compile(r"\s+IPO$", re.IGNORECASE)


def _strip_weekday(value: Optional[str]) -> Optional[str]:
    """'Fri, Jul 25, 2025' -> 'Jul 25, 2025'"""
    return _WEEKDAY_PREFIX_RE.sub("", value) if value else value


class IpoListingService:
    """
    Serves the live IPO lists for each exchange platform.

    Listings are cached per platform; GMP is attached on every read from the
    GMP service's own (shorter-lived) cache. A listing is cached only when
    every detail page was fetched, so upstream failures are retried on the
    next request.
    """

    def __init__(
        self,
        source: IpoSource,
        cache: TimeBoundedCache[list[IpoRecord]],
        gmp_service: GmpService,
        deriver: AllocationDeriver,
        calculator: ApplicationAmountCalculator,
        max_ipos: int = 8,
        today: Callable[[], date] = today_ist,
    ):
        self._source = source
        self._cache = cache
        self._gmp = gmp_service
        self._deriver = deriver
        self._calculator = calculator
        self._max_ipos = max_ipos
        self._today = today

    def get_ipos(self, platform: ExchangePlatform) -> list[IpoRecord]:
        """
        Return live IPOs for a platform.

        Upstream failures degrade to an empty list; they are logged, not raised.
        """
        key = f"ipos:{platform.value}"
        records = self._cache.get(key)
        if records is None:
            try:
                records, complete = self._fetch(platform)
            except FetchError as exc:
                logger.warning("Could not fetch %s IPO list: %s", platform.value, exc.message)
                return []
            if complete:
                self._cache.put(key, records)
        else:
            logger.debug("Using cached %s IPO list", platform.value)

        return [replace(r, gmp=self._gmp.get_gmp(r.gmp.url)) for r in records]

    def get_all_ipos(self) -> tuple[list[IpoRecord], list[IpoRecord]]:
        """(mainboard, sme) lists."""
        return self.get_ipos(ExchangePlatform.MAINBOARD), self.get_ipos(ExchangePlatform.SME)

    def clear_cache(self) -> int:
        return self._cache.clear()

    def build_record(
        self,
        platform: ExchangePlatform,
        index: int,
        link: IpoLink,
        details: RawIpoDetails,
    ) -> IpoRecord:
        """Combine raw page fields with computed application tiers and allocation."""
        applications = self._calculator.calculate(details.price_range, details.lot_size)
        s_hni_min_shares = applications.s_hni_min.shares if applications else None
        retail_min_shares = applications.retail_min.shares if applications else None
        allocation = self._deriver.resolve(details.allocation, s_hni_min_shares, retail_min_shares)

        if platform == ExchangePlatform.SME:
            record_id = f"sme-active-{index + 1}"
        else:
            record_id = str(index + 1)

        return IpoRecord(
            id=record_id,
            name=_IPO_SUFFIX_RE.sub("", link.name.strip()),
            exchange_platform=platform,
            link=details.url or link.url,
            issue_size=details.issue_size,
            price_range=details.price_range,
            open_date=_strip_weekday(details.open_date),
            close_date=_strip_weekday(details.close_date),
            lot_size=parse_indian_int(details.lot_size),
            listing_date=details.listing_date,
            allotment_date=details.allotment_date,
            refund_date=details.refund_date,
            credit_date=details.credit_date,
            gmp=GmpInfo(
                status=GmpStatus.TBD if details.gmp_url else GmpStatus.NO_URL,
                url=details.gmp_url,
            ),
            applications=applications,
            allocation=allocation,
        )

    def is_open_today(self, details: RawIpoDetails) -> bool:
        """True when today (IST) lies within the parsed subscription window."""
        opens = parse_listing_date(details.open_date)
        closes = parse_listing_date(details.close_date)
        if opens is None or closes is None:
            return False
        return opens <= self._today() <= closes

    def _fetch(self, platform: ExchangePlatform) -> tuple[list[IpoRecord], bool]:
        links = sorted(
            self._source.list_ipo_links(platform),
            key=lambda link: link.announced_active,
            reverse=True,
        )
        records: list[IpoRecord] = []
        complete = True

        for link in links[: self._max_ipos]:
            try:
                details = self._source.fetch_details(link)
            except (FetchError, ParseError) as exc:
                logger.warning("Could not read details for %s: %s", link.name, exc.message)
                complete = False
                if link.announced_active:
                    records.append(self.build_record(platform, len(records), link, RawIpoDetails(url=link.url)))
                continue

            if not link.announced_active:
                if not details.has_core_fields or not self.is_open_today(details):
                    logger.debug("Skipping inactive IPO %s", link.name)
                    continue
            if link.url is None:
                complete = False
            records.append(self.build_record(platform, len(records), link, details))

        logger.info("Found %d live %s IPOs", len(records), platform.value)
        return records, complete
