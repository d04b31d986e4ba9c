"""View models for service outputs."""

from ipo_tracker.domain.views.optimization import (
    AccountAnalysis,
    Transfer,
    OptimizationSummary,
    OptimizationResult,
    AllotmentEstimate,
)

__all__ = [
    "AccountAnalysis",
    "Transfer",
    "OptimizationSummary",
    "OptimizationResult",
    "AllotmentEstimate",
]
