# spa_nav/navigation/controller.py
"""
NavigationController: one navigation end-to-end.

    Idle -> Dimming -> Resolving -> Transitioning -> Settled
    Idle -> Dimming -> Resolving -> Failed (-> hard navigation)

Any error while resolving, extracting, loading styles or swapping content
abandons the in-page transition and falls back to a full browser navigation.
The content region is restored to full opacity and interactivity in every case.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from bs4.element import Tag

from spa_nav.browser.window import Window
from spa_nav.config import NavigatorConfig
from spa_nav.loader.cache import PageCache
from spa_nav.loader.preloader import Preloader
from spa_nav.loader.styles import StyleLoader
from spa_nav.parser.html_parser import ExtractedContent, extract
from spa_nav.utils import filename_of, page_name

logger = logging.getLogger("SpaNav")

_LAZY_FADE_IN = "transition: opacity 0.3s; opacity: 1"


class NavState(str, Enum):
    IDLE = "idle"
    DIMMING = "dimming"
    RESOLVING = "resolving"
    TRANSITIONING = "transitioning"
    SETTLED = "settled"
    FAILED = "failed"


@dataclass(slots=True)
class Transition:
    """Ephemeral state of one navigation, dropped once it settles or fails."""

    url: str
    state: NavState = NavState.IDLE
    from_cache: Optional[bool] = None


@dataclass(slots=True, frozen=True)
class CurrentPage:
    """What is on screen right now. Replaced as a whole at the DOM swap."""

    url: str
    title: str
    page_name: str


class NavigationController:
    def __init__(
        self,
        window: Window,
        cache: PageCache,
        styles: StyleLoader,
        preloader: Preloader,
        config: NavigatorConfig,
    ) -> None:
        self.window = window
        self.cache = cache
        self.styles = styles
        self.preloader = preloader
        self.config = config
        self._lock: Optional[asyncio.Lock] = asyncio.Lock() if config.serialize_navigations else None
        self.active: List[Transition] = []
        self.completed = 0
        self.current = self._record(window.location, window.document.title)

    def _record(self, url: str, title: str) -> CurrentPage:
        filename = filename_of(url, self.config.entry_page)
        return CurrentPage(url=url, title=title, page_name=page_name(filename, self.config.entry_page))

    async def navigate(self, url: str, *, push: bool = True) -> bool:
        """
        Swap in the page at *url* without a reload.

        Returns True when the page settled in place, False when a hard
        navigation was performed instead or the page was already being left. ``push=False`` is used for
        back/forward: the entry already exists and is only refreshed.
        """
        if self.window.unloaded:
            logger.debug("Page is unloading, ignoring navigation to %s", url)
            return False
        document = self.window.document
        region = document.region
        if document.main is None:
            logger.warning("No content region in document, loading %s normally", url)
            self.window.assign(url)
            return False

        transition = Transition(url, NavState.DIMMING)
        self.active.append(transition)
        region.dim(self.config.dim_opacity)
        try:
            if self._lock is not None:
                async with self._lock:
                    content = await self._transition(transition, push)
            else:
                content = await self._transition(transition, push)
        except Exception as exc:
            transition.state = NavState.FAILED
            if self.window.unloaded:
                logger.debug("Navigation to %s failed while the page was unloading: %s", url, exc)
                return False
            logger.warning("In-page navigation to %s failed (%s), falling back to full load", url, exc)
            self.window.assign(url)
            return False
        finally:
            region.restore()
            self.active.remove(transition)

        if content is None:
            transition.state = NavState.FAILED
            return False
        self._settle(transition, content)
        return True

    async def _transition(self, transition: Transition, push: bool) -> Optional[ExtractedContent]:
        """Resolve and swap; None when a full navigation took over while this one waited."""
        cfg = self.config
        document = self.window.document
        region = document.region
        url = transition.url

        if self.window.unloaded:
            logger.debug("Dropping queued navigation to %s, page is unloading", url)
            return None

        # queued navigations dim again once it is their turn
        region.dim(cfg.dim_opacity)
        transition.state = NavState.RESOLVING
        page = await self.cache.resolve(url)
        transition.from_cache = page.from_cache

        content = extract(page.content, cfg.default_title, cfg.content_selector)
        await self.styles.ensure(content.style_hrefs)

        transition.state = NavState.TRANSITIONING
        region.fade_out(cfg.fade_out_ms)
        await asyncio.sleep(cfg.fade_out_ms / 1000)
        if self.window.unloaded:
            logger.debug("Dropping navigation to %s before the swap, page is unloading", url)
            return None

        document.replace_main(content.main_html)
        document.title = content.title
        if document.body_class != content.body_class:
            document.body_class = content.body_class
        if push:
            self.window.history.push_state({"url": url}, content.title, url)
        else:
            self.window.history.replace_state({"url": url}, content.title, url)
        self.update_active_nav(url)
        self.current = self._record(url, content.title)

        region.restore()
        region.scroll_top = 0
        return content

    def _settle(self, transition: Transition, content: ExtractedContent) -> None:
        transition.state = NavState.SETTLED
        self.completed += 1
        logger.info(
            "Navigated to %s (%s)", transition.url, "cache" if transition.from_cache else "network"
        )
        self.preloader.preload_visible(self.window.document)
        self.reinit_page()
        self.window.events.emit(
            self.config.page_loaded_event,
            detail={"url": transition.url, "title": content.title, "from_cache": transition.from_cache},
        )

    def update_active_nav(self, url: str) -> Optional[Tag]:
        """Mark the nav link whose href equals the filename of *url*; unmark the rest."""
        filename = filename_of(url, self.config.entry_page)
        document = self.window.document
        active: Optional[Tag] = None
        for link in document.nav_links(self.config.nav_link_class):
            is_active = (link.get("href") or "") == filename
            document.toggle_class(link, self.config.active_class, is_active)
            if is_active and active is None:
                active = link
        return active

    def reinit_page(self) -> None:
        """Fade lazy images of the new content in once they have loaded."""
        for img in self.window.document.images(in_region=True):
            if img.get("loading") != "lazy":
                continue
            src = img.get("src")
            if not isinstance(src, str) or self.preloader.is_loaded(src):
                continue
            task = self.preloader.preload_image(src) or self.preloader.image_task(src)
            if task is None:
                continue
            img["style"] = "opacity: 0"
            _fade_in_when_loaded(img, task)


def _fade_in_when_loaded(img: Tag, task: asyncio.Task) -> None:
    def _done(_: asyncio.Task) -> None:
        img["style"] = _LAZY_FADE_IN

    task.add_done_callback(_done)
