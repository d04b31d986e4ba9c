"""Resolve an IPO company name to its detail page URL."""

import logging
import re
from typing import Callable, Mapping, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    """'Shree Refrigerations Ltd.' -> 'shree-refrigerations-ltd'"""
    slug = re.sub(r"\s+", "-", name.strip().lower())
    slug = re.sub(r"[^a-z0-9\-]", "", slug)
    return re.sub(r"-{2,}", "-", slug).strip("-")


def normalize_name(name: str) -> str:
    return re.sub(r"\s+ipo$", "", name.strip(), flags=re.IGNORECASE).lower()


class UrlResolver(Protocol):
    def resolve(self, name: str) -> Optional[str]:
        ...


class LookupResolver:
    """Exact (case-insensitive) name -> URL table."""

    def __init__(self, table: Mapping[str, str]):
        self._table = {normalize_name(k): v for k, v in table.items()}

    def resolve(self, name: str) -> Optional[str]:
        return self._table.get(normalize_name(name))


class SlugResolver:
    """
    Guess '<base>/ipo/<slug>-ipo/' from the company name.

    The guess is only returned if probe(url) accepts it.
    """

    def __init__(self, base_url: str, probe: Callable[[str], bool]):
        self._base_url = base_url.rstrip("/")
        self._probe = probe

    def resolve(self, name: str) -> Optional[str]:
        slug = slugify(normalize_name(name))
        if not slug:
            return None
        url = f"{self._base_url}/ipo/{slug}-ipo/"
        if self._probe(url):
            return url
        logger.info("Generated URL did not respond: %s", url)
        return None


class ResolverChain:
    """Try each resolver in priority order; the first URL found wins."""

    def __init__(self, resolvers: Sequence[UrlResolver]):
        self._resolvers = list(resolvers)

    def resolve(self, name: str) -> Optional[str]:
        for resolver in self._resolvers:
            url = resolver.resolve(name)
            if url:
                return url
        logger.warning("No URL found for %s", name)
        return None


class LinkTextResolver:
    """Match a name against links found on a listing page (by link text or URL slug)."""

    def __init__(self, links: Sequence[tuple[str, str]]):
        self._links = [(normalize_name(text), url) for text, url in links]

    def resolve(self, name: str) -> Optional[str]:
        wanted = normalize_name(name)
        slug = slugify(wanted)
        for text, url in self._links:
            if wanted and wanted in text:
                return url
        for _, url in self._links:
            if slug and f"/{slug}" in url.lower():
                return url
        return None
