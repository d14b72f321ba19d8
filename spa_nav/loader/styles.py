# spa_nav/loader/styles.py
"""
StyleLoader: page-scoped stylesheets end up in <head> exactly once.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Set

from spa_nav.browser.dom import Document
from spa_nav.errors import FetchFailure, StyleLoadFailure
from spa_nav.loader.fetcher import Fetcher

logger = logging.getLogger("SpaNav")


class StyleLoader:
    def __init__(self, document: Document, fetcher: Fetcher, loaded: Optional[Set[str]] = None) -> None:
        self.document = document
        self.fetcher = fetcher
        self.loaded: Set[str] = loaded if loaded is not None else set()

    def seed(self, hrefs: Iterable[str]) -> None:
        """Register stylesheets the initial document already carries (absolute ones are global)."""
        for href in hrefs:
            if href and not href.startswith("http"):
                self.loaded.add(href)

    async def ensure(self, hrefs: Iterable[str]) -> None:
        """
        Append every new href to <head> and wait until all of them loaded or failed.

        Each href is marked loaded before the first await, so a concurrent call
        for the same href never appends it twice.
        """
        pending = []
        for href in hrefs:
            if href in self.loaded:
                logger.debug("Stylesheet already present: %s", href)
                continue
            self.document.append_stylesheet(href)
            self.loaded.add(href)
            pending.append(self._wait_loaded(href))
        if pending:
            await asyncio.gather(*pending)

    async def _wait_loaded(self, href: str) -> None:
        try:
            await self.fetcher.probe(href)
        except FetchFailure as exc:
            logger.warning("%s", StyleLoadFailure(href, exc.reason))
