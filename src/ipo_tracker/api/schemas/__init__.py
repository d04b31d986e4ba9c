"""API request/response schemas."""

from ipo_tracker.api.schemas.ipo import (
    AllIposResponse,
    AllocationResponse,
    ApplicationTierResponse,
    ApplicationTiersResponse,
    CacheClearedResponse,
    GmpResponse,
    IpoResponse,
)
from ipo_tracker.api.schemas.optimizer import (
    AccountAnalysisResponse,
    AccountInput,
    AllotmentRequest,
    AllotmentResponse,
    OptimizationResponse,
    OptimizeAccountsRequest,
    SummaryResponse,
    TransferResponse,
)

__all__ = [
    "AllIposResponse",
    "AllocationResponse",
    "ApplicationTierResponse",
    "ApplicationTiersResponse",
    "CacheClearedResponse",
    "GmpResponse",
    "IpoResponse",
    "AccountAnalysisResponse",
    "AccountInput",
    "AllotmentRequest",
    "AllotmentResponse",
    "OptimizationResponse",
    "OptimizeAccountsRequest",
    "SummaryResponse",
    "TransferResponse",
]
