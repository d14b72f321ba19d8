# spa_nav/loader/preloader.py
"""
Preloader: warms the page cache and image cache for likely next hops.

Everything here is fire-and-forget. Failures are logged at DEBUG and leave no
cache entry behind, so a later real navigation just fetches normally.
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Coroutine, Dict, Optional, Set

from spa_nav.browser.dom import Document
from spa_nav.errors import FetchFailure
from spa_nav.loader.cache import PageCache
from spa_nav.loader.fetcher import Fetcher
from spa_nav.parser.html_parser import find_image_urls
from spa_nav.utils import is_spa_link

logger = logging.getLogger("SpaNav")


class Preloader:
    def __init__(
        self,
        cache: PageCache,
        fetcher: Fetcher,
        images: Optional[Set[str]] = None,
        image_pattern: str = r"https://images\.unsplash\.com[^\"]+",
    ) -> None:
        self.cache = cache
        self.fetcher = fetcher
        self.images: Set[str] = images if images is not None else set()
        self.image_pattern = image_pattern
        self._image_re = re.compile(image_pattern)
        self._image_tasks: Dict[str, asyncio.Task] = {}
        self._tasks: Set[asyncio.Task] = set()
        self._idle: Optional[asyncio.Task] = None

    # Pages ------------------------------------------------------------------
    async def warm(self, url: str) -> None:
        if url in self.cache:
            return
        try:
            page = await self.cache.resolve(url)
        except FetchFailure as exc:
            logger.debug("Preload of %s failed: %s", url, exc.reason)
            return
        for src in find_image_urls(page.content, self.image_pattern):
            self.preload_image(src)

    def schedule(self, url: str) -> asyncio.Task:
        """Start ``warm(url)`` in the background."""
        return self._spawn(self.warm(url))

    def schedule_idle(self, document: Document, nav_class: str, page_extension: str, delay_ms: int) -> asyncio.Task:
        """After *delay_ms* of quiet, warm every in-site navigation link currently in the document."""

        async def _idle() -> None:
            await asyncio.sleep(delay_ms / 1000)
            for link in document.nav_links(nav_class):
                href = link.get("href")
                if isinstance(href, str) and is_spa_link(href, page_extension):
                    self.schedule(href)

        if self._idle is not None:
            self._idle.cancel()
        self._idle = asyncio.ensure_future(_idle())
        return self._idle

    # Images -----------------------------------------------------------------
    def preload_image(self, src: Optional[str]) -> Optional[asyncio.Task]:
        if not src or src in self.images:
            return None
        self.images.add(src)
        task = self._spawn(self._load_image(src))
        self._image_tasks[src] = task
        return task

    def preload_visible(self, document: Document) -> None:
        for img in document.images():
            src = img.get("src")
            if isinstance(src, str) and self._image_re.match(src):
                self.preload_image(src)

    def image_task(self, src: str) -> Optional[asyncio.Task]:
        return self._image_tasks.get(src)

    def is_loaded(self, src: str) -> bool:
        task = self._image_tasks.get(src)
        return task is not None and task.done() and not task.cancelled()

    async def _load_image(self, src: str) -> None:
        try:
            await self.fetcher.probe(src)
        except FetchFailure as exc:
            logger.debug("Image preload of %s failed: %s", src, exc.reason)

    # Lifecycle --------------------------------------------------------------
    def _spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every outstanding preload, including ones started meanwhile (not the idle timer)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel_all(self) -> None:
        if self._idle is not None:
            self._idle.cancel()
        for task in list(self._tasks):
            task.cancel()

    async def shutdown(self) -> None:
        self.cancel_all()
        pending = list(self._tasks) + ([self._idle] if self._idle is not None else [])
        await asyncio.gather(*pending, return_exceptions=True)
