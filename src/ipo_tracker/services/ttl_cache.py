"""In-memory key/value cache with a fixed time-to-live and a background sweeper."""

import logging
import threading
from datetime import datetime
from typing import Callable, Generic, Hashable, Optional, TypeVar

from ipo_tracker.core.timezone import now_ist
from ipo_tracker.domain.models import CacheEntry

logger = logging.getLogger(__name__)

V = TypeVar("V")


class TimeBoundedCache(Generic[V]):
    """
    Memoizes expensive fetch results under a key for a fixed TTL.

    Expired entries are evicted lazily on read and periodically by a
    sweeper thread started with start() and stopped with stop().
    All access to the mapping goes through one lock, so the cache can be
    shared by requests handled on different threads.

    None is never stored: get() returning None means a miss.
    """

    def __init__(
        self,
        ttl_seconds: float,
        sweep_interval_seconds: Optional[float] = None,
        name: str = "cache",
        clock: Callable[[], datetime] = now_ist,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._sweep_interval = sweep_interval_seconds or ttl_seconds * 2
        self._name = name
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry[V]] = {}
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._sweeper: Optional[threading.Thread] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: Hashable) -> Optional[V]:
        """Return the cached value, or None if absent or expired (expired entries are evicted)."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._is_expired(entry, self._clock()):
                del self._entries[key]
                logger.debug("%s: entry expired for %s", self._name, key)
                return None
            return entry.value

    def put(self, key: Hashable, value: V) -> None:
        """Store value under key, replacing any existing entry."""
        if value is None:
            raise ValueError("None cannot be cached; it is reserved for cache misses")
        entry = CacheEntry(value=value, stored_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        logger.debug("%s: cached %s", self._name, key)

    def invalidate(self, key: Hashable) -> bool:
        """Drop one entry. Returns True if it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def sweep(self) -> int:
        """Remove all expired entries; fresh entries are untouched."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if self._is_expired(e, now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info("%s: cleared %d expired cache entries", self._name, len(expired))
        return len(expired)

    def start(self) -> None:
        """Start the background sweeper (no-op if already running)."""
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(
            target=self._run_sweeper,
            name=f"{self._name}-sweeper",
            daemon=True,
        )
        self._sweeper.start()
        logger.info(
            "%s: sweeper started (ttl=%ss, interval=%ss)", self._name, self._ttl, self._sweep_interval
        )

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Signal the sweeper to exit and wait for it."""
        if self._sweeper is None:
            return
        self._stop_event.set()
        self._sweeper.join(timeout)
        self._sweeper = None
        logger.info("%s: sweeper stopped", self._name)

    @property
    def is_running(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def _run_sweeper(self) -> None:
        while not self._stop_event.wait(self._sweep_interval):
            try:
                self.sweep()
            except Exception:
                logger.exception("%s: sweep failed", self._name)

    def _is_expired(self, entry: CacheEntry[V], now: datetime) -> bool:
        return entry.age_seconds(now) >= self._ttl
