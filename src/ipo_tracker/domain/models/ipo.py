"""IPO domain models."""

from dataclasses import dataclass, field
from typing import Optional

from ipo_tracker.domain.models.enums import ExchangePlatform, GmpStatus


@dataclass(frozen=True)
class ApplicationTier:
    """Lots, shares and rupee amount for one application size."""

    lots: int
    shares: int
    amount: int


@dataclass(frozen=True)
class ApplicationTiers:
    """
    Minimum/maximum application sizes per investor tier.

    Either fully computed from a valid price and lot size, or absent.
    """

    retail_min: ApplicationTier
    retail_max: ApplicationTier
    s_hni_min: ApplicationTier
    s_hni_max: ApplicationTier
    b_hni_min: ApplicationTier


@dataclass(frozen=True)
class AllocationSplit:
    """Category quotas and maximum-allottee counts. None means unknown."""

    nii_shares: Optional[int] = None
    b_nii: Optional[int] = None
    s_nii: Optional[int] = None
    qib_shares: Optional[int] = None
    retail_shares: Optional[int] = None
    max_b_nii_allottees: Optional[int] = None
    max_s_nii_allottees: Optional[int] = None
    max_retail_allottees: Optional[int] = None
    derived: bool = False


@dataclass(frozen=True)
class GmpInfo:
    """Grey market premium lookup result."""

    status: GmpStatus
    value: Optional[str] = None
    raw: Optional[str] = None
    url: Optional[str] = None


@dataclass
class IpoRecord:
    """
    One IPO as served to the dashboard.

    Scalar fields that could not be scraped are None rather than "TBD".
    """

    id: str
    name: str
    exchange_platform: ExchangePlatform
    link: Optional[str] = None
    status: str = "Live"
    issue_size: Optional[str] = None
    price_range: Optional[str] = None
    open_date: Optional[str] = None
    close_date: Optional[str] = None
    lot_size: Optional[int] = None
    listing_date: Optional[str] = None
    allotment_date: Optional[str] = None
    refund_date: Optional[str] = None
    credit_date: Optional[str] = None
    gmp: GmpInfo = field(default_factory=lambda: GmpInfo(status=GmpStatus.NO_URL))
    applications: Optional[ApplicationTiers] = None
    allocation: Optional[AllocationSplit] = None
