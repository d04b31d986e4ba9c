"""Blocking HTML fetcher with a bounded timeout."""

import logging

import requests

from ipo_tracker.core.exceptions import FetchError
from ipo_tracker.providers.session_pool import ResourcePool

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Fetches page text through the shared session; every failure becomes FetchError."""

    def __init__(self, pool: ResourcePool[requests.Session], timeout_seconds: float = 15):
        self._pool = pool
        self._timeout = timeout_seconds

    def get_text(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            with self._pool.acquire() as session:
                response = session.get(url, timeout=self._timeout)
            response.raise_for_status()
            return response.text
        except requests.Timeout as exc:
            raise FetchError(url, f"timed out after {self._timeout}s") from exc
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc

    def exists(self, url: str) -> bool:
        """True if the URL answers with a 2xx status."""
        try:
            self.get_text(url)
        except FetchError:
            return False
        return True
