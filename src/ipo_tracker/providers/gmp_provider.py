"""Grey market premium extraction from investorgain GMP trend pages."""

import logging

from bs4 import BeautifulSoup

from ipo_tracker.domain.models import GmpStatus
from ipo_tracker.providers.http_fetcher import HttpFetcher
from ipo_tracker.providers.ipo_source import RawGmp

logger = logging.getLogger(__name__)


def parse_gmp_page(html: str) -> RawGmp:
    """
    Read the latest row of the GMP trend table.

    The trend table is recognised by its headers rather than CSS classes.
    Without a table, the page wording decides between TBD and Closed.
    """
    soup = BeautifulSoup(html, "html.parser")

    for table in soup.find_all("table"):
        table_text = table.get_text(" ", strip=True)
        if "GMP Date" not in table_text or "Estimated Listing Price" not in table_text:
            continue
        body = table.find("tbody") or table
        first_row = next((tr for tr in body.find_all("tr") if tr.find("td")), None)
        if first_row is None:
            continue

        listing_price = gmp_raw = None
        for cell in first_row.find_all("td"):
            title = cell.get("data-title", "")
            if title == "Estimated Listing Price":
                listing_price = cell.get_text(" ", strip=True) or None
            elif title == "GMP":
                gmp_raw = cell.get_text(" ", strip=True) or None

        if listing_price or gmp_raw:
            return RawGmp(status=GmpStatus.LIVE, value=listing_price or gmp_raw, raw=gmp_raw)

    body_text = soup.get_text(" ", strip=True).lower()
    if "not yet started" in body_text or "not available" in body_text:
        return RawGmp(status=GmpStatus.TBD)
    if "closed" in body_text:
        return RawGmp(status=GmpStatus.CLOSED)
    return RawGmp(status=GmpStatus.TBD)


class InvestorgainGmpProvider:
    """GmpSource that fetches a GMP page and parses its trend table."""

    def __init__(self, fetcher: HttpFetcher):
        self._fetcher = fetcher

    def fetch_gmp(self, gmp_url: str) -> RawGmp:
        html = self._fetcher.get_text(gmp_url)
        result = parse_gmp_page(html)
        logger.info("GMP for %s: %s (%s)", gmp_url, result.value or "-", result.status.value)
        return result
