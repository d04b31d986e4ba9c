"""Number helpers for Indian-locale figures (lakh/crore digit grouping, rupee bands)."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

_INTEGER_RE = re.compile(r"\d[\d,]*")
_NUMBER_RE = re.compile(r"\d[\d,]*(?:\.\d+)?")
_PAISE = Decimal("0.01")

Number = Union[int, float, Decimal]


def round_half_up(value: Number) -> int:
    """Round to the nearest whole unit, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_indian_int(text: Optional[Union[str, int]]) -> Optional[int]:
    """
    Parse the first integer in a locale-formatted string.

    "5,23,200 (20.02%)" -> 523200. Returns None when no digits are present.
    """
    if text is None:
        return None
    if isinstance(text, int):
        return text if text >= 0 else None
    match = _INTEGER_RE.search(text)
    if not match:
        return None
    return int(match.group(0).replace(",", ""))


def parse_price_high(price_range: Optional[str]) -> Optional[Decimal]:
    """
    Return the upper bound of a price band, or the single fixed price.

    "₹90 - ₹95" -> 95, "₹1,020 to ₹1,075" -> 1075, "₹95" -> 95.
    """
    if not price_range:
        return None
    prices = []
    for raw in _NUMBER_RE.findall(price_range):
        try:
            prices.append(Decimal(raw.replace(",", "")))
        except InvalidOperation:
            continue
    if not prices:
        return None
    high = max(prices)
    return high if high > 0 else None


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_indian(value: Number) -> str:
    """
    Format a number with Indian digit grouping (12,34,567).

    Whole values print without decimals; anything else keeps two places,
    rounded half-up, so 0.4 prints as "0.40" rather than "0".
    """
    amount = Decimal(str(value)).quantize(_PAISE, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    text = sign + _group_indian(whole)
    if fraction != "00":
        text += "." + fraction
    return text


def format_inr(value: Number) -> str:
    """Format an amount as rupees: ₹1,23,456 or ₹1,23,456.40."""
    return f"₹{format_indian(value)}"
