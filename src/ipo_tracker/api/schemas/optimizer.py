"""Pydantic schemas for fund optimizer and allotment estimator endpoints."""

from decimal import Decimal

from pydantic import Field

from ipo_tracker.api.schemas.base import CamelModel
from ipo_tracker.domain.models import InvestorCategory


class AccountInput(CamelModel):
    """One bank account taking part in IPO applications."""

    name: str = Field(..., min_length=1)
    balance: Decimal = Field(..., ge=0)
    required_amount: Decimal = Field(..., ge=0)


class OptimizeAccountsRequest(CamelModel):
    """Request schema for fund transfer optimization."""

    accounts: list[AccountInput] = Field(..., min_length=1)


class AccountAnalysisResponse(CamelModel):
    name: str
    balance: float
    required_amount: float
    shortfall: float
    surplus: float


class TransferResponse(CamelModel):
    from_account: str = Field(..., alias="from")
    to_account: str = Field(..., alias="to")
    amount: float
    reason: str


class SummaryResponse(CamelModel):
    message: str
    status: str


class OptimizationResponse(CamelModel):
    """Response schema for an optimization run."""

    can_proceed: bool
    total_required: float
    total_available: float
    total_shortfall: float
    total_surplus: float
    transfer_count: int
    total_transfer_amount: float
    account_analysis: list[AccountAnalysisResponse]
    transfers: list[TransferResponse]
    summary: SummaryResponse


class AllotmentRequest(CamelModel):
    """Request schema for the allotment-probability estimator."""

    application_amount: Decimal = Field(..., gt=0)
    lot_size: int = Field(..., gt=0)
    share_price: Decimal = Field(..., gt=0)
    oversubscription_ratio: Decimal = Field(..., gt=0)
    category: InvestorCategory = InvestorCategory.RETAIL


class AllotmentResponse(CamelModel):
    lots_applied: int
    probability_percentage: float
    expected_allotment: int
    total_applications: int
    available_shares: int
