"""View models for fund optimization and allotment estimate outputs."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class AccountAnalysis:
    """Per-account breakdown of an optimization run."""

    name: str
    balance: Decimal
    required_amount: Decimal
    shortfall: Decimal
    surplus: Decimal


@dataclass(frozen=True)
class Transfer:
    """A single proposed movement of funds between two accounts."""

    from_account: str
    to_account: str
    amount: Decimal
    reason: str = ""


@dataclass(frozen=True)
class OptimizationSummary:
    """Human-readable outcome shown by the dashboard."""

    message: str
    status: str  # "success" | "warning" | "error"


@dataclass
class OptimizationResult:
    """Fund transfer optimization result."""

    can_proceed: bool
    total_required: Decimal
    total_available: Decimal
    total_shortfall: Decimal
    total_surplus: Decimal
    summary: OptimizationSummary
    account_analysis: list[AccountAnalysis] = field(default_factory=list)
    transfers: list[Transfer] = field(default_factory=list)

    @property
    def transfer_count(self) -> int:
        return len(self.transfers)

    @property
    def total_transfer_amount(self) -> Decimal:
        return sum((t.amount for t in self.transfers), Decimal("0"))


@dataclass(frozen=True)
class AllotmentEstimate:
    """Result of the allotment-probability estimator."""

    lots_applied: int
    probability_percentage: Decimal
    expected_allotment: int
    total_applications: int
    available_shares: int
