"""IPO and GMP data providers."""

from ipo_tracker.providers.ipo_source import (
    GmpSource,
    IpoLink,
    IpoSource,
    RawGmp,
    RawIpoDetails,
    ScrapedAllocation,
)
from ipo_tracker.providers.stub_provider import StubGmpSource, StubIpoSource

__all__ = [
    "GmpSource",
    "IpoLink",
    "IpoSource",
    "RawGmp",
    "RawIpoDetails",
    "ScrapedAllocation",
    "StubGmpSource",
    "StubIpoSource",
]
