"""Fund optimizer and allotment estimator endpoints."""

from fastapi import APIRouter, Depends

from ipo_tracker.api.deps import get_allotment_estimator, get_fund_optimizer
from ipo_tracker.api.schemas import (
    AccountAnalysisResponse,
    AllotmentRequest,
    AllotmentResponse,
    OptimizationResponse,
    OptimizeAccountsRequest,
    SummaryResponse,
    TransferResponse,
)
from ipo_tracker.domain.models import FundAccount
from ipo_tracker.services import AllotmentEstimator, FundOptimizer

router = APIRouter(prefix="/api", tags=["optimizer"])


@router.post("/optimize-accounts", response_model=OptimizationResponse)
def optimize_accounts(
    data: OptimizeAccountsRequest,
    optimizer: FundOptimizer = Depends(get_fund_optimizer),
) -> OptimizationResponse:
    """Propose transfers so every account can cover its IPO applications."""
    result = optimizer.optimize(
        [
            FundAccount(name=a.name, balance=a.balance, required_amount=a.required_amount)
            for a in data.accounts
        ]
    )

    return OptimizationResponse(
        can_proceed=result.can_proceed,
        total_required=float(result.total_required),
        total_available=float(result.total_available),
        total_shortfall=float(result.total_shortfall),
        total_surplus=float(result.total_surplus),
        transfer_count=result.transfer_count,
        total_transfer_amount=float(result.total_transfer_amount),
        account_analysis=[
            AccountAnalysisResponse(
                name=a.name,
                balance=float(a.balance),
                required_amount=float(a.required_amount),
                shortfall=float(a.shortfall),
                surplus=float(a.surplus),
            )
            for a in result.account_analysis
        ],
        transfers=[
            TransferResponse(
                from_account=t.from_account,
                to_account=t.to_account,
                amount=float(t.amount),
                reason=t.reason,
            )
            for t in result.transfers
        ],
        summary=SummaryResponse(message=result.summary.message, status=result.summary.status),
    )


@router.post("/allotment-probability", response_model=AllotmentResponse)
def allotment_probability(
    data: AllotmentRequest,
    estimator: AllotmentEstimator = Depends(get_allotment_estimator),
) -> AllotmentResponse:
    """Rough chance of allotment for an application size and subscription level."""
    estimate = estimator.estimate(
        application_amount=data.application_amount,
        lot_size=data.lot_size,
        share_price=data.share_price,
        oversubscription_ratio=data.oversubscription_ratio,
        category=data.category,
    )
    return AllotmentResponse(
        lots_applied=estimate.lots_applied,
        probability_percentage=float(estimate.probability_percentage),
        expected_allotment=estimate.expected_allotment,
        total_applications=estimate.total_applications,
        available_shares=estimate.available_shares,
    )
