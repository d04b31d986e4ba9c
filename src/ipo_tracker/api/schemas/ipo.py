"""Pydantic schemas for IPO listing endpoints."""

from typing import Optional

from ipo_tracker.api.schemas.base import CamelModel
from ipo_tracker.domain.models import ExchangePlatform, GmpStatus


class GmpResponse(CamelModel):
    """Grey market premium for one IPO."""

    status: GmpStatus
    value: Optional[str] = None
    raw: Optional[str] = None
    url: Optional[str] = None


class ApplicationTierResponse(CamelModel):
    lots: int
    shares: int
    amount: int


class ApplicationTiersResponse(CamelModel):
    """Minimum/maximum application sizes per investor category."""

    retail_min: ApplicationTierResponse
    retail_max: ApplicationTierResponse
    s_hni_min: ApplicationTierResponse
    s_hni_max: ApplicationTierResponse
    b_hni_min: ApplicationTierResponse


class AllocationResponse(CamelModel):
    """Share reservation split and the allottee counts it implies."""

    qib_shares: Optional[int] = None
    nii_shares: Optional[int] = None
    retail_shares: Optional[int] = None
    b_nii: Optional[int] = None
    s_nii: Optional[int] = None
    max_b_nii_allottees: Optional[int] = None
    max_s_nii_allottees: Optional[int] = None
    max_retail_allottees: Optional[int] = None
    derived: bool = False


class IpoResponse(CamelModel):
    """Response schema for a single live IPO."""

    id: str
    name: str
    exchange_platform: ExchangePlatform
    status: str
    link: Optional[str] = None
    issue_size: Optional[str] = None
    price_range: Optional[str] = None
    open_date: Optional[str] = None
    close_date: Optional[str] = None
    lot_size: Optional[int] = None
    listing_date: Optional[str] = None
    allotment_date: Optional[str] = None
    refund_date: Optional[str] = None
    credit_date: Optional[str] = None
    gmp: GmpResponse
    applications: Optional[ApplicationTiersResponse] = None
    allocation: Optional[AllocationResponse] = None


class AllIposResponse(CamelModel):
    """Both platforms in one payload."""

    mainboard: list[IpoResponse]
    sme: list[IpoResponse]
    total: int


class CacheClearedResponse(CamelModel):
    cleared: int
