"""Fund transfer optimizer: plans transfers that cover every account's shortfall."""

import logging
from decimal import Decimal
from typing import Sequence

from ipo_tracker.core.numbers import format_inr
from ipo_tracker.domain.models import FundAccount
from ipo_tracker.domain.views import (
    AccountAnalysis,
    OptimizationResult,
    OptimizationSummary,
    Transfer,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class FundOptimizer:
    """
    Greedy shortfall/surplus matcher.

    Not globally optimal, but deterministic: both lists are stable-sorted by
    amount (largest first), so equal amounts keep their input order. The plan
    uses at most (#shortfall + #surplus - 1) transfers.
    """

    def optimize(self, accounts: Sequence[FundAccount]) -> OptimizationResult:
        analysis = [
            AccountAnalysis(
                name=a.name,
                balance=a.balance,
                required_amount=a.required_amount,
                shortfall=a.shortfall,
                surplus=a.surplus,
            )
            for a in accounts
        ]

        total_required = sum((a.required_amount for a in accounts), ZERO)
        total_available = sum((a.balance for a in accounts), ZERO)
        total_shortfall = sum((a.shortfall for a in analysis), ZERO)
        total_surplus = sum((a.surplus for a in analysis), ZERO)
        can_proceed = total_surplus >= total_shortfall

        transfers = self._match(analysis) if can_proceed else []
        summary = self._summarize(can_proceed, total_shortfall - total_surplus, transfers)

        logger.debug(
            "Optimized %d accounts: can_proceed=%s transfers=%d",
            len(accounts),
            can_proceed,
            len(transfers),
        )
        return OptimizationResult(
            can_proceed=can_proceed,
            total_required=total_required,
            total_available=total_available,
            total_shortfall=total_shortfall,
            total_surplus=total_surplus,
            summary=summary,
            account_analysis=analysis,
            transfers=transfers,
        )

    @staticmethod
    def _match(analysis: list[AccountAnalysis]) -> list[Transfer]:
        needs = sorted((a for a in analysis if a.shortfall > 0), key=lambda a: a.shortfall, reverse=True)
        donors = sorted((a for a in analysis if a.surplus > 0), key=lambda a: a.surplus, reverse=True)
        remaining = [d.surplus for d in donors]

        transfers: list[Transfer] = []
        donor_idx = 0
        for need in needs:
            outstanding = need.shortfall
            while outstanding > 0 and donor_idx < len(donors):
                amount = min(outstanding, remaining[donor_idx])
                transfers.append(
                    Transfer(
                        from_account=donors[donor_idx].name,
                        to_account=need.name,
                        amount=amount,
                        reason=f"Cover shortfall in {need.name}",
                    )
                )
                outstanding -= amount
                remaining[donor_idx] -= amount
                if remaining[donor_idx] == 0:
                    donor_idx += 1
        return transfers

    @staticmethod
    def _summarize(can_proceed: bool, deficit: Decimal, transfers: list[Transfer]) -> OptimizationSummary:
        if not can_proceed:
            return OptimizationSummary(
                message=f"Insufficient total funds. You need {format_inr(deficit)} more.",
                status="error",
            )
        if not transfers:
            return OptimizationSummary(
                message="All accounts have sufficient funds. No transfers needed.",
                status="success",
            )
        total = sum((t.amount for t in transfers), ZERO)
        noun = "transfer" if len(transfers) == 1 else "transfers"
        return OptimizationSummary(
            message=f"{len(transfers)} {noun} totalling {format_inr(total)} will cover all shortfalls.",
            status="warning",
        )
