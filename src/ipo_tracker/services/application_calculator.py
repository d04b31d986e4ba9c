"""Application amount calculator for IPO investor tiers."""

from decimal import Decimal
from math import ceil
from typing import Optional, Union

from ipo_tracker.core.numbers import parse_indian_int, parse_price_high, round_half_up
from ipo_tracker.domain.models import ApplicationTier, ApplicationTiers


class ApplicationAmountCalculator:
    """
    Computes the rupee commitment at each tier's application size.

    All amounts are priced at the upper end of the band. The S-HNI maximum
    is a heuristic (a fraction of the B-HNI minimum lot count), not a
    regulatory constant.
    """

    def __init__(
        self,
        hni_threshold_amount: int = 1_000_000,
        retail_lots: int = 2,
        s_hni_min_lots: int = 3,
        s_hni_max_ratio: float = 0.8,
    ):
        self._threshold = Decimal(hni_threshold_amount)
        self._retail_lots = retail_lots
        self._s_hni_min_lots = s_hni_min_lots
        self._s_hni_max_ratio = Decimal(str(s_hni_max_ratio))

    def b_hni_min_lots(self, lot_size: int, price: Decimal) -> int:
        """Smallest whole lot count whose amount strictly exceeds the HNI threshold."""
        lot_value = Decimal(lot_size) * price
        if lot_value <= 0:
            raise ValueError("lot value must be positive")
        lots = int(self._threshold // lot_value) + 1
        return max(lots, 1)

    def s_hni_max_lots(self, b_hni_min_lots: int) -> int:
        return ceil(self._s_hni_max_ratio * b_hni_min_lots)

    def calculate(
        self,
        price_range: Optional[str],
        lot_size: Union[int, str, None],
    ) -> Optional[ApplicationTiers]:
        """
        Build every tier from a price band and lot size.

        Returns None when either input does not parse to a positive number;
        no fallback price or lot size is assumed.
        """
        price = parse_price_high(price_range)
        lots_per = parse_indian_int(lot_size)
        if price is None or not lots_per:
            return None

        b_hni_lots = self.b_hni_min_lots(lots_per, price)

        def tier(lots: int) -> ApplicationTier:
            shares = lots * lots_per
            return ApplicationTier(lots=lots, shares=shares, amount=round_half_up(shares * price))

        retail = tier(self._retail_lots)
        return ApplicationTiers(
            retail_min=retail,
            retail_max=retail,
            s_hni_min=tier(self._s_hni_min_lots),
            s_hni_max=tier(self.s_hni_max_lots(b_hni_lots)),
            b_hni_min=tier(b_hni_lots),
        )
