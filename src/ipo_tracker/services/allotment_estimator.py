"""Rough allotment-probability estimate for a single IPO application."""

from decimal import ROUND_HALF_UP, Decimal
from math import floor

from ipo_tracker.core.exceptions import ValidationError
from ipo_tracker.domain.models import InvestorCategory
from ipo_tracker.domain.views import AllotmentEstimate


class AllotmentEstimator:
    """
    Heuristic estimator backing the dashboard's allotment calculator.

    The probability curve is a simplification and does not model the
    exchange's actual lottery.
    """

    def estimate(
        self,
        application_amount: Decimal,
        lot_size: int,
        share_price: Decimal,
        oversubscription_ratio: Decimal,
        category: InvestorCategory = InvestorCategory.RETAIL,
    ) -> AllotmentEstimate:
        if application_amount <= 0 or lot_size <= 0 or share_price <= 0 or oversubscription_ratio <= 0:
            raise ValidationError(
                "application_amount, lot_size, share_price and oversubscription_ratio must be positive"
            )

        lots_applied = int(application_amount // (lot_size * share_price))
        probability = self._probability(Decimal(oversubscription_ratio), InvestorCategory(category))

        expected = floor(lots_applied * probability / 100)
        total_applications = floor(1000 * oversubscription_ratio)
        available_shares = floor(total_applications / oversubscription_ratio)

        return AllotmentEstimate(
            lots_applied=lots_applied,
            probability_percentage=probability.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
            expected_allotment=expected,
            total_applications=total_applications,
            available_shares=available_shares,
        )

    @staticmethod
    def _probability(ratio: Decimal, category: InvestorCategory) -> Decimal:
        if category == InvestorCategory.RETAIL:
            if ratio <= 1:
                return Decimal("100")
            if ratio <= 2:
                return Decimal("85") - (ratio - 1) * 35
            if ratio <= 5:
                return Decimal("50") - (ratio - 2) * 10
            return max(Decimal("5"), Decimal("20") - ratio)
        if category == InvestorCategory.HNI:
            return max(Decimal("2"), Decimal("30") / ratio)
        return max(Decimal("5"), Decimal("40") / ratio)
