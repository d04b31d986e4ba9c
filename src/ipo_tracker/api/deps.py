"""Dependency injection for FastAPI."""

from fastapi import Request

from ipo_tracker.app_context import AppContext
from ipo_tracker.services import (
    AllotmentEstimator,
    FundOptimizer,
    GmpService,
    IpoListingService,
)


def get_app_context(request: Request) -> AppContext:
    """Provide the AppContext created by the lifespan handler."""
    return request.app.state.context


def get_listing_service(request: Request) -> IpoListingService:
    """Provide IpoListingService instance."""
    return get_app_context(request).listing_service


def get_gmp_service(request: Request) -> GmpService:
    """Provide GmpService instance."""
    return get_app_context(request).gmp_service


def get_fund_optimizer(request: Request) -> FundOptimizer:
    """Provide FundOptimizer instance."""
    return get_app_context(request).fund_optimizer


def get_allotment_estimator(request: Request) -> AllotmentEstimator:
    """Provide AllotmentEstimator instance."""
    return get_app_context(request).allotment_estimator
