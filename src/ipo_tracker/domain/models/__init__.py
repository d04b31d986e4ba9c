"""Domain models package."""

from ipo_tracker.domain.models.enums import ExchangePlatform, GmpStatus, InvestorCategory
from ipo_tracker.domain.models.cache import CacheEntry
from ipo_tracker.domain.models.account import FundAccount
from ipo_tracker.domain.models.ipo import (
    ApplicationTier,
    ApplicationTiers,
    AllocationSplit,
    GmpInfo,
    IpoRecord,
)

__all__ = [
    "ExchangePlatform",
    "GmpStatus",
    "InvestorCategory",
    "CacheEntry",
    "FundAccount",
    "ApplicationTier",
    "ApplicationTiers",
    "AllocationSplit",
    "GmpInfo",
    "IpoRecord",
]
