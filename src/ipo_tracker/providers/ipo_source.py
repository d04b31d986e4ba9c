"""IPO data source protocols and the raw field types they return."""

from dataclasses import dataclass, field
from typing import Optional, Protocol

from ipo_tracker.domain.models import ExchangePlatform, GmpStatus


@dataclass(frozen=True)
class IpoLink:
    """An IPO found on a listing page."""

    name: str
    url: Optional[str]
    announced_active: bool = False


@dataclass
class ScrapedAllocation:
    """Allocation figures exactly as printed on a detail page (unparsed text)."""

    qib_shares: Optional[str] = None
    nii_shares: Optional[str] = None
    b_nii_shares: Optional[str] = None
    s_nii_shares: Optional[str] = None
    retail_shares: Optional[str] = None
    max_retail_allottees: Optional[str] = None
    max_b_nii_allottees: Optional[str] = None
    max_s_nii_allottees: Optional[str] = None

    @property
    def has_direct_split(self) -> bool:
        """True when the page lays out the B-NII/S-NII split itself."""
        return bool(self.b_nii_shares or self.s_nii_shares)


@dataclass
class RawIpoDetails:
    """Raw field values scraped from an IPO detail page. None means not found."""

    url: Optional[str] = None
    issue_size: Optional[str] = None
    price_range: Optional[str] = None
    open_date: Optional[str] = None
    close_date: Optional[str] = None
    lot_size: Optional[str] = None
    listing_date: Optional[str] = None
    allotment_date: Optional[str] = None
    refund_date: Optional[str] = None
    credit_date: Optional[str] = None
    gmp_url: Optional[str] = None
    allocation: ScrapedAllocation = field(default_factory=ScrapedAllocation)

    @property
    def has_core_fields(self) -> bool:
        return bool(self.open_date or self.close_date or self.price_range)


@dataclass(frozen=True)
class RawGmp:
    """Latest GMP row (or page state) from a GMP tracking page."""

    status: GmpStatus
    value: Optional[str] = None
    raw: Optional[str] = None


class IpoSource(Protocol):
    """
    Protocol for IPO listing sources.

    Implementations raise FetchError when a page cannot be retrieved and
    ParseError when a detail page yields none of the expected fields.
    """

    def list_ipo_links(self, platform: ExchangePlatform) -> list[IpoLink]:
        """Return candidate IPOs for a platform, announced-active ones first."""
        ...

    def fetch_details(self, link: IpoLink) -> RawIpoDetails:
        """Fetch and extract the raw fields of one IPO detail page."""
        ...


class GmpSource(Protocol):
    """Protocol for grey-market-premium sources."""

    def fetch_gmp(self, gmp_url: str) -> RawGmp:
        """Fetch the latest GMP from a tracking page. Raises FetchError on failure."""
        ...
