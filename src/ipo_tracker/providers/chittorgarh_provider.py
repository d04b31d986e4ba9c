"""Chittorgarh.com listing and detail page scraper."""

import logging
import re
from typing import Mapping, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ipo_tracker.core.exceptions import ParseError
from ipo_tracker.domain.models import ExchangePlatform
from ipo_tracker.providers.http_fetcher import HttpFetcher
from ipo_tracker.providers.ipo_source import IpoLink, RawIpoDetails, ScrapedAllocation
from ipo_tracker.providers.url_resolver import (
    LinkTextResolver,
    LookupResolver,
    ResolverChain,
    SlugResolver,
)

logger = logging.getLogger(__name__)

_DETAIL_HREF_RE = re.compile(r"/ipo/[^/]+-ipo/\d+/?$")
_SKIP_LINK_WORDS = ("dashboard", "tracker", "reports", "message board", "grey market", "discussions")
_ANNOUNCEMENT_RE = re.compile(
    r"current\s+(?:mainboard\s+|sme\s+)?active\s+(?:sme\s+|mainboard\s+)?ipos\s+are\s+([^.]+)",
    re.IGNORECASE,
)

_OPEN_FALLBACK_RE = re.compile(r"IPO opens on ([^,]+,\s*\d{4})", re.IGNORECASE)
_CLOSE_FALLBACK_RE = re.compile(r"closes on ([^.]+)\.", re.IGNORECASE)
_PRICE_FALLBACK_RE = re.compile(r"₹\s*([\d,.]+)\s*to\s*₹\s*([\d,.]+)\s*per\s+share", re.IGNORECASE)
_LOT_FALLBACK_RE = re.compile(r"(?:lot size|minimum lot)[^\d]{0,40}([\d,]+)\s*shares", re.IGNORECASE)


def extract_announced_names(page_text: str) -> list[str]:
    """Names from sentences like 'The current active SME IPOs are A IPO, B IPO and C IPO.'"""
    match = _ANNOUNCEMENT_RE.search(page_text)
    if not match:
        return []
    parts = re.split(r",|\band\b", match.group(1))
    names = [re.sub(r"\s+IPO$", "", p.strip(), flags=re.IGNORECASE) for p in parts]
    return [n for n in names if len(n) > 2]


def extract_detail_links(soup: BeautifulSoup, base_url: str) -> list[tuple[str, str]]:
    """(link text, absolute URL) for every IPO detail page link, de-duplicated."""
    seen: set[str] = set()
    links = []
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        text = anchor.get_text(" ", strip=True)
        if not _DETAIL_HREF_RE.search(href):
            continue
        lowered = f"{text} {href}".lower()
        if any(word in lowered for word in _SKIP_LINK_WORDS):
            continue
        url = urljoin(base_url + "/", href)
        if url in seen:
            continue
        seen.add(url)
        links.append((text, url))
    return links


def _cell_texts(row) -> list[str]:
    return [cell.get_text(" ", strip=True) for cell in row.find_all(["td", "th"])]


def parse_detail_page(html: str, url: Optional[str] = None) -> RawIpoDetails:
    """
    Pull raw label/value pairs out of every two-column table row.

    The first match for each field wins; values are kept as printed.
    """
    soup = BeautifulSoup(html, "html.parser")
    details = RawIpoDetails(url=url)
    alloc = details.allocation

    def first(obj, attr: str, value: Optional[str]) -> None:
        if value and getattr(obj, attr) is None:
            setattr(obj, attr, value)

    for row in soup.find_all("tr"):
        cells = _cell_texts(row)
        if len(cells) < 2:
            continue
        label, value = cells[0].lower(), cells[1]
        extra = cells[2] if len(cells) > 2 else None

        if "b-nii" in label and "shares" in label:
            first(alloc, "b_nii_shares", value)
            first(alloc, "max_b_nii_allottees", extra)
        elif "s-nii" in label and "shares" in label:
            first(alloc, "s_nii_shares", value)
            first(alloc, "max_s_nii_allottees", extra)
        elif ("nii" in label or "hni" in label) and "shares offered" in label:
            first(alloc, "nii_shares", value)
        elif "retail shares offered" in label:
            first(alloc, "retail_shares", value)
            first(alloc, "max_retail_allottees", extra)
        elif "qib shares" in label:
            first(alloc, "qib_shares", value)
        elif "tentative allotment" in label or "basis of allotment" in label:
            first(details, "allotment_date", value)
        elif "refund" in label:
            first(details, "refund_date", value)
        elif "credit of shares" in label:
            first(details, "credit_date", value)
        elif "listing date" in label:
            first(details, "listing_date", value)
        elif "open date" in label:
            first(details, "open_date", value)
        elif "close date" in label:
            first(details, "close_date", value)
        elif "price band" in label or "issue price" in label:
            first(details, "price_range", value)
        elif "lot size" in label:
            digits = re.sub(r"[^\d]", "", value)
            first(details, "lot_size", digits or None)
        elif "issue size" in label:
            first(details, "issue_size", value)

    # Prose fallbacks when the tables did not carry a field
    text = soup.get_text(" ", strip=True)
    if details.open_date is None:
        match = _OPEN_FALLBACK_RE.search(text)
        details.open_date = match.group(1).strip() if match else None
    if details.close_date is None:
        match = _CLOSE_FALLBACK_RE.search(text)
        details.close_date = match.group(1).strip() if match else None
    if details.price_range is None:
        match = _PRICE_FALLBACK_RE.search(text)
        details.price_range = f"₹{match.group(1)} - ₹{match.group(2)}" if match else None
    if details.lot_size is None:
        match = _LOT_FALLBACK_RE.search(text)
        details.lot_size = match.group(1).replace(",", "") if match else None

    for anchor in soup.find_all("a", href=True):
        if "investorgain.com" in anchor["href"] and "chr-gmp" in anchor["href"]:
            details.gmp_url = anchor["href"]
            break

    return details


class ChittorgarhProvider:
    """
    IpoSource backed by chittorgarh.com.

    Listing pages announce the currently active IPOs in prose; those names
    are resolved to detail pages through a resolver chain (explicit table,
    links on the same page, generated slug).
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        base_url: str,
        list_urls: Mapping[ExchangePlatform, str],
        known_urls: Optional[Mapping[str, str]] = None,
    ):
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")
        self._list_urls = dict(list_urls)
        self._known_urls = dict(known_urls or {})

    def list_ipo_links(self, platform: ExchangePlatform) -> list[IpoLink]:
        list_url = self._list_urls[platform]
        logger.info("Fetching %s IPO list from %s", platform.value, list_url)
        html = self._fetcher.get_text(list_url)
        soup = BeautifulSoup(html, "html.parser")

        names = extract_announced_names(soup.get_text(" ", strip=True))
        page_links = extract_detail_links(soup, self._base_url)
        logger.info("Found %d announced IPOs and %d detail links", len(names), len(page_links))

        if not names:
            return [IpoLink(name=text, url=url) for text, url in page_links]

        chain = ResolverChain(
            [
                LookupResolver(self._known_urls),
                LinkTextResolver(page_links),
                SlugResolver(self._base_url, self._fetcher.exists),
            ]
        )
        return [IpoLink(name=name, url=chain.resolve(name), announced_active=True) for name in names]

    def fetch_details(self, link: IpoLink) -> RawIpoDetails:
        if not link.url:
            return RawIpoDetails()
        html = self._fetcher.get_text(link.url)
        details = parse_detail_page(html, url=link.url)
        if not details.has_core_fields and details.lot_size is None and details.allocation.nii_shares is None:
            raise ParseError("IPO details", link.url)
        return details
