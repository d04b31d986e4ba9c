"""Funding account model used by the transfer optimizer."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class FundAccount:
    """
    A bank/trading account with a balance and an amount it must hold.

    Built fresh per optimization request. Names identify transfer endpoints,
    so they should be unique within one request.
    """

    name: str
    balance: Decimal
    required_amount: Decimal

    @property
    def shortfall(self) -> Decimal:
        return max(Decimal("0"), self.required_amount - self.balance)

    @property
    def surplus(self) -> Decimal:
        return max(Decimal("0"), self.balance - self.required_amount)
