# spa_nav/navigation/history_bridge.py
"""
HistoryBridge: browser events in, NavigationController calls out.

* start: replace the current entry with ``{"url": <current filename>}`` so the
  first back-navigation to the entry page has a state to restore.
* popstate: navigate to the state's URL, or to the filename of the current
  location when the entry was not created by us.
* click: intercept same-site page links; everything else keeps its default.
* mouseover: warm the cache for same-site page links.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Optional

from bs4.element import Tag

from spa_nav.browser.events import Event
from spa_nav.browser.window import Window
from spa_nav.config import NavigatorConfig
from spa_nav.loader.preloader import Preloader
from spa_nav.navigation.controller import NavigationController
from spa_nav.utils import filename_of, is_spa_link

logger = logging.getLogger("SpaNav")


def _href_of(target: Any) -> Optional[str]:
    if isinstance(target, Tag):
        href = target.get("href")
        return href if isinstance(href, str) else None
    if isinstance(target, str):
        return target
    return None


class HistoryBridge:
    def __init__(
        self,
        window: Window,
        controller: NavigationController,
        preloader: Preloader,
        config: NavigatorConfig,
    ) -> None:
        self.window = window
        self.controller = controller
        self.preloader = preloader
        self.config = config

    def current_filename(self) -> str:
        return filename_of(self.window.pathname, self.config.entry_page)

    def start(self) -> None:
        self.window.history.replace_state(
            {"url": self.current_filename()}, self.window.document.title, self.window.location
        )
        events = self.window.events
        events.add_listener("popstate", self.on_popstate)
        events.add_listener("click", self.on_click)
        events.add_listener("mouseover", self.on_hover)

    def stop(self) -> None:
        events = self.window.events
        events.remove_listener("popstate", self.on_popstate)
        events.remove_listener("click", self.on_click)
        events.remove_listener("mouseover", self.on_hover)

    def on_popstate(self, event: Event) -> Coroutine[Any, Any, bool]:
        state = event.detail
        url = state.get("url") if isinstance(state, dict) else None
        if not url:
            url = self.current_filename()
            logger.debug("popstate without state, using location: %s", url)
        return self.controller.navigate(url, push=False)

    def on_click(self, event: Event) -> Optional[Coroutine[Any, Any, bool]]:
        href = _href_of(event.target)
        if not is_spa_link(href, self.config.page_extension):
            return None
        event.prevent_default()
        return self.controller.navigate(href)

    def on_hover(self, event: Event) -> Optional[asyncio.Task]:
        href = _href_of(event.target)
        if not is_spa_link(href, self.config.page_extension):
            return None
        return self.preloader.schedule(href)
