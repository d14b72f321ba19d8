# spa_nav/loader/cache.py
"""
Page cache: URL -> raw markup for the lifetime of the session.

No eviction, no expiry. A failed fetch stores nothing, so the next navigation
to the same URL simply tries again. Concurrent misses on one URL are not
deduplicated; navigations are user-paced.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from spa_nav.loader.fetcher import Fetcher
from spa_nav.loader.models import PageData

logger = logging.getLogger("SpaNav")


class PageCache:
    def __init__(self, fetcher: Fetcher, store: Optional[Dict[str, str]] = None) -> None:
        self.fetcher = fetcher
        self._pages: Dict[str, str] = store if store is not None else {}

    def __contains__(self, url: object) -> bool:
        return url in self._pages

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._pages)

    def get(self, url: str) -> Optional[str]:
        return self._pages.get(url)

    def store(self, url: str, markup: str) -> str:
        """Write-once: the first stored markup for *url* wins."""
        return self._pages.setdefault(url, markup)

    async def resolve(self, url: str) -> PageData:
        """Cached markup without network access, otherwise exactly one fetch (FetchFailure propagates)."""
        cached = self._pages.get(url)
        if cached is not None:
            logger.debug("Cache hit: %s", url)
            return PageData(url, cached, from_cache=True)
        logger.debug("Cache miss: %s", url)
        markup = await self.fetcher.fetch_text(url)
        return PageData(url, self.store(url, markup), from_cache=False)
