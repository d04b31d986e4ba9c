"""Single shared fetch resource with max-age recycling and a liveness check."""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Generic, Iterator, Optional, TypeVar

import requests

from ipo_tracker.core.timezone import now_ist

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors after which a requests.Session is recycled. HTTP status errors are
# not among them.
TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (requests.ConnectionError, requests.Timeout)


class ResourcePool(Generic[T]):
    """
    A one-resource pool.

    The resource is created lazily, handed out through acquire(), and
    replaced when it is older than max_age_seconds, fails its liveness
    check, or a caller's work with it raised one of ``discard_on``.
    close() releases it.

    Callers share the resource. A replaced resource is only closed once the
    last caller still holding it has left its acquire() block.
    """

    def __init__(
        self,
        factory: Callable[[], T],
        max_age_seconds: float,
        closer: Callable[[T], None] = lambda r: None,
        is_alive: Callable[[T], bool] = lambda r: True,
        clock: Callable[[], datetime] = now_ist,
        name: str = "resource",
        discard_on: tuple[type[BaseException], ...] = (Exception,),
    ):
        self._factory = factory
        self._closer = closer
        self._is_alive = is_alive
        self._max_age = max_age_seconds
        self._clock = clock
        self._name = name
        self._discard_on = discard_on
        self._resource: Optional[T] = None
        self._created_at: Optional[datetime] = None
        self._users: dict[int, int] = {}
        self._retired: dict[int, T] = {}
        self._lock = threading.Lock()

    @property
    def created_at(self) -> Optional[datetime]:
        return self._created_at

    def needs_restart(self) -> bool:
        """True when there is no resource, it is too old, or it is no longer alive."""
        if self._resource is None or self._created_at is None:
            return True
        age = (self._clock() - self._created_at).total_seconds()
        if age > self._max_age:
            logger.info("%s expired after %.0fs, restarting", self._name, age)
            return True
        if not self._is_alive(self._resource):
            logger.info("%s is no longer alive, restarting", self._name)
            return True
        return False

    @contextmanager
    def acquire(self) -> Iterator[T]:
        """Yield the shared resource; a discard_on error inside the block retires it."""
        with self._lock:
            if self.needs_restart():
                self._discard()
                self._resource = self._factory()
                self._created_at = self._clock()
                logger.debug("%s created", self._name)
            resource = self._resource
            self._users[id(resource)] = self._users.get(id(resource), 0) + 1
        try:
            yield resource
        except self._discard_on:
            with self._lock:
                if self._resource is resource:
                    self._discard()
            raise
        finally:
            with self._lock:
                self._release(resource)

    def close(self) -> None:
        with self._lock:
            self._discard()

    def _discard(self) -> None:
        """Detach the current resource; close it now unless a caller still holds it."""
        if self._resource is None:
            return
        resource, self._resource, self._created_at = self._resource, None, None
        if self._users.get(id(resource)):
            logger.debug("%s retired while in use, closing on release", self._name)
            self._retired[id(resource)] = resource
        else:
            self._close(resource)

    def _release(self, resource: T) -> None:
        key = id(resource)
        remaining = self._users.get(key, 0) - 1
        if remaining > 0:
            self._users[key] = remaining
            return
        self._users.pop(key, None)
        retired = self._retired.pop(key, None)
        if retired is not None:
            self._close(retired)

    def _close(self, resource: T) -> None:
        try:
            self._closer(resource)
        except Exception:
            logger.warning("Error closing %s", self._name, exc_info=True)


def create_http_session(user_agent: str) -> requests.Session:
    """Build a requests session with browser-like headers."""
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Cache-Control": "no-cache",
        }
    )
    return session


def create_session_pool(user_agent: str, max_age_seconds: float) -> ResourcePool[requests.Session]:
    """Pool holding one HTTP session, recycled every max_age_seconds or after a transport error."""
    return ResourcePool(
        factory=lambda: create_http_session(user_agent),
        max_age_seconds=max_age_seconds,
        closer=lambda s: s.close(),
        name="http-session",
        discard_on=TRANSPORT_ERRORS,
    )
