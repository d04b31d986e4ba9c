"""Enumerations for domain models."""

from enum import Enum


class ExchangePlatform(str, Enum):
    """Listing platform of an IPO."""

    MAINBOARD = "Mainboard"
    SME = "SME"


class GmpStatus(str, Enum):
    """Outcome of a grey-market-premium lookup."""

    LIVE = "Live"
    TBD = "TBD"  # GMP trading not started / not available yet
    CLOSED = "Closed"
    ERROR = "Error"  # fetch failed; never cached
    NO_URL = "NoURL"  # detail page has no GMP link


class InvestorCategory(str, Enum):
    """Investor categories for allotment estimates."""

    RETAIL = "retail"
    HNI = "hni"
    INSTITUTIONAL = "institutional"
