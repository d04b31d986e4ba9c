"""Live IPO listing endpoints."""

from fastapi import APIRouter, Depends, Query

from ipo_tracker.api.deps import get_gmp_service, get_listing_service
from ipo_tracker.api.schemas import (
    AllIposResponse,
    CacheClearedResponse,
    GmpResponse,
    IpoResponse,
)
from ipo_tracker.domain.models import ExchangePlatform
from ipo_tracker.services import GmpService, IpoListingService

router = APIRouter(prefix="/api", tags=["ipos"])


@router.get("/live-ipos", response_model=list[IpoResponse])
def get_live_ipos(
    listing: IpoListingService = Depends(get_listing_service),
) -> list[IpoResponse]:
    """Get currently open mainboard IPOs."""
    return [IpoResponse.model_validate(r) for r in listing.get_ipos(ExchangePlatform.MAINBOARD)]


@router.get("/sme-ipos", response_model=list[IpoResponse])
def get_sme_ipos(
    listing: IpoListingService = Depends(get_listing_service),
) -> list[IpoResponse]:
    """Get currently open SME IPOs."""
    return [IpoResponse.model_validate(r) for r in listing.get_ipos(ExchangePlatform.SME)]


@router.get("/all-ipos", response_model=AllIposResponse)
def get_all_ipos(
    listing: IpoListingService = Depends(get_listing_service),
) -> AllIposResponse:
    """Get mainboard and SME IPOs together."""
    mainboard, sme = listing.get_all_ipos()
    return AllIposResponse(
        mainboard=[IpoResponse.model_validate(r) for r in mainboard],
        sme=[IpoResponse.model_validate(r) for r in sme],
        total=len(mainboard) + len(sme),
    )


@router.get("/gmp", response_model=GmpResponse)
def get_gmp(
    url: str = Query(..., min_length=1, description="GMP page URL"),
    gmp: GmpService = Depends(get_gmp_service),
) -> GmpResponse:
    """Look up the grey market premium for one GMP page."""
    return GmpResponse.model_validate(gmp.get_gmp(url))


@router.post("/cache/clear", response_model=CacheClearedResponse)
def clear_cache(
    listing: IpoListingService = Depends(get_listing_service),
    gmp: GmpService = Depends(get_gmp_service),
) -> CacheClearedResponse:
    """Drop cached listings and premiums so the next request refetches."""
    return CacheClearedResponse(cleared=listing.clear_cache() + gmp.clear_cache())
