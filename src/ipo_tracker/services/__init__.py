"""Service layer - caching, derivations and request orchestration."""

from ipo_tracker.services.ttl_cache import TimeBoundedCache
from ipo_tracker.services.allocation_deriver import AllocationDeriver
from ipo_tracker.services.application_calculator import ApplicationAmountCalculator
from ipo_tracker.services.fund_optimizer import FundOptimizer
from ipo_tracker.services.allotment_estimator import AllotmentEstimator
from ipo_tracker.services.gmp_service import GmpService
from ipo_tracker.services.ipo_listing_service import IpoListingService

__all__ = [
    "TimeBoundedCache",
    "AllocationDeriver",
    "ApplicationAmountCalculator",
    "FundOptimizer",
    "AllotmentEstimator",
    "GmpService",
    "IpoListingService",
]
