"""Cache entry model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """
    A cached value stamped with the time it was stored.

    IMPORTANT: Never edit in place; replace the whole entry.
    """

    value: V
    stored_at: datetime

    def age_seconds(self, now: datetime) -> float:
        return (now - self.stored_at).total_seconds()
