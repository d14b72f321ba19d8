# spa_nav/loader/fetcher.py
"""
Fetcher module: one GET per call, page markup as text, everything else a FetchFailure.

No retries: a page is requested at most once per call so request counts stay
predictable for the cache. No timeout unless the config sets one.
"""
from __future__ import annotations

import asyncio
import logging
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession

from spa_nav.config import NavigatorConfig
from spa_nav.errors import FetchFailure

_TEXT_TYPES = ("text/", "application/xhtml+xml")


class Fetcher:
    """Issues network requests for page documents, stylesheets and images."""

    def __init__(self, session: ClientSession, config: NavigatorConfig) -> None:
        self.session = session
        self.config = config
        self.requests_made = 0
        self.logger = logging.getLogger("SpaNav")

    def absolute(self, url: str) -> str:
        """Resolve *url* (as written in an href) against the site root."""
        return urljoin(self.config.site_root, url)

    async def fetch_text(self, url: str) -> str:
        """
        Fetch a page and return its markup.

        Raises FetchFailure on network errors, non-2xx statuses and non-text bodies.
        """
        target = self.absolute(url)
        self.requests_made += 1
        try:
            async with self.session.get(target) as resp:
                if resp.status >= 400:
                    raise FetchFailure(url, f"HTTP {resp.status}")
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if not mime.startswith(_TEXT_TYPES):
                    raise FetchFailure(url, f"non-text response ({mime or 'unknown type'})")
                text = await resp.text()
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
            raise FetchFailure(url, str(exc) or type(exc).__name__) from exc
        self.logger.debug("Fetched %s (%d chars)", target, len(text))
        return text

    async def probe(self, url: str) -> None:
        """Load a subresource (stylesheet, image) and discard the body."""
        target = self.absolute(url)
        self.requests_made += 1
        try:
            async with self.session.get(target) as resp:
                if resp.status >= 400:
                    raise FetchFailure(url, f"HTTP {resp.status}")
                await resp.read()
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchFailure(url, str(exc) or type(exc).__name__) from exc
