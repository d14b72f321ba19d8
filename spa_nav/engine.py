# File: spa_nav/engine.py
"""spa_nav.engine: Сборка навигационной сессии — окно, кэши, загрузчики, контроллер и мост истории."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Iterable, List, Optional, Set, TypeVar

from aiohttp import ClientSession, ClientTimeout

from spa_nav.browser.dom import Document, class_list
from spa_nav.browser.events import Event
from spa_nav.browser.history import History
from spa_nav.browser.window import Window
from spa_nav.config import NavigatorConfig
from spa_nav.errors import FetchFailure
from spa_nav.loader.cache import PageCache
from spa_nav.loader.fetcher import Fetcher
from spa_nav.loader.models import SessionCaches
from spa_nav.loader.preloader import Preloader
from spa_nav.loader.styles import StyleLoader
from spa_nav.logger import logger
from spa_nav.navigation.controller import NavigationController
from spa_nav.navigation.history_bridge import HistoryBridge
from spa_nav.utils import filename_of, loads_document

__all__ = ["NavigatorSession", "start_browse"]

T = TypeVar("T")


class NavigatorSession:
    """
    Фасад для CLI и тестов: открывает сайт, как браузер при полной загрузке,
    и даёт действия пользователя (клик, наведение, назад/вперёд).

    Каждая полная загрузка страницы начинает новую сессию кэшей — как новый
    запуск скрипта в браузере. История браузера при этом сохраняется.
    """

    def __init__(self, config: NavigatorConfig) -> None:
        """Инициализирует сессию с заданной конфигурацией."""
        self.config = config
        self.http: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.window: Optional[Window] = None
        self.caches = SessionCaches()
        self.cache: Optional[PageCache] = None
        self.styles: Optional[StyleLoader] = None
        self.preloader: Optional[Preloader] = None
        self.controller: Optional[NavigationController] = None
        self.bridge: Optional[HistoryBridge] = None
        self.full_loads = 0
        self._background: Set[asyncio.Task] = set()
        self._retired: List[Preloader] = []

    async def __aenter__(self) -> NavigatorSession:
        self.http = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
        )
        self.fetcher = Fetcher(self.http, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        for task in list(self._background):
            task.cancel()
        await asyncio.gather(*self._background, return_exceptions=True)
        for preloader in self._retired + ([self.preloader] if self.preloader is not None else []):
            await preloader.shutdown()
        if self.http and not self.http.closed:
            await self.http.close()

    # ------------------------------------------------------------------ #
    # Full page load                                                     #
    # ------------------------------------------------------------------ #
    async def open(self, url: Optional[str] = None) -> Window:
        """Полная загрузка страницы; FetchFailure пробрасывается вызывающему."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        url = url or self.config.entry_page
        markup = await self.fetcher.fetch_text(url)
        history = self.window.history if self.window is not None else None
        return self._boot(url, markup, history)

    def _boot(self, url: str, markup: str, history: Optional[History]) -> Window:
        cfg = self.config
        fetcher = self._require(self.fetcher, "Session not initialized")
        if self.preloader is not None:
            self.preloader.cancel_all()
            self._retired.append(self.preloader)
        if self.bridge is not None:
            self.bridge.stop()

        self.caches = SessionCaches()
        document = Document(markup, content_selector=cfg.content_selector)
        window = Window(document, url, on_hard_navigate=self._hard_navigate, history=history)
        self.window = window

        self.cache = PageCache(fetcher, self.caches.pages)
        self.cache.store(filename_of(url, cfg.entry_page), markup)
        self.styles = StyleLoader(document, fetcher, self.caches.styles)
        self.styles.seed(document.stylesheet_hrefs())
        self.preloader = Preloader(self.cache, fetcher, self.caches.images, cfg.image_host_pattern)
        self.controller = NavigationController(window, self.cache, self.styles, self.preloader, cfg)
        self.controller.update_active_nav(url)
        self.bridge = HistoryBridge(window, self.controller, self.preloader, cfg)
        self.bridge.start()

        self.preloader.preload_visible(document)
        self.preloader.schedule_idle(document, cfg.nav_link_class, cfg.page_extension, cfg.preload_delay_ms)
        self.full_loads += 1
        logger.info("Loaded %s (%d stylesheets already present)", url, len(self.caches.styles))
        return window

    def _hard_navigate(self, url: str) -> None:
        task = asyncio.ensure_future(self._reload(url))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _reload(self, url: str) -> None:
        try:
            await self.open(url)
        except FetchFailure as exc:
            logger.error("Full page load of %s failed: %s", url, exc.reason)
            # the old document stays on screen and keeps working
            if self.window is not None:
                self.window.unloaded = False

    # ------------------------------------------------------------------ #
    # User actions                                                       #
    # ------------------------------------------------------------------ #
    @staticmethod
    def _require(component: Optional[T], message: str = "No page open, call open() first") -> T:
        if component is None:
            raise RuntimeError(message)
        return component

    def _require_window(self) -> Window:
        return self._require(self.window)

    @staticmethod
    def _target(window: Window, href: str) -> Any:
        anchor = window.document.find_anchor(href)
        return anchor if anchor is not None else href

    def click(self, href: str) -> List[asyncio.Task]:
        """Клик по ссылке: SPA-переход, либо обычная навигация браузера."""
        window = self._require_window()
        event = Event("click", target=self._target(window, href))
        tasks = window.events.dispatch(event)
        # anchors and mailto:/tel: links are handled by the browser without leaving the page
        if not event.default_prevented and loads_document(href):
            window.assign(href)
        return tasks

    def hover(self, href: str) -> List[asyncio.Task]:
        window = self._require_window()
        return window.events.emit("mouseover", target=self._target(window, href))

    def back(self) -> List[asyncio.Task]:
        return self._require_window().history.back()

    def forward(self) -> List[asyncio.Task]:
        return self._require_window().history.forward()

    async def follow(self, href: str) -> None:
        await self.wait(self.click(href))

    async def go_back(self) -> None:
        await self.wait(self.back())

    async def go_forward(self) -> None:
        await self.wait(self.forward())

    @staticmethod
    async def wait(tasks: Iterable[asyncio.Task]) -> List[Any]:
        return list(await asyncio.gather(*tasks))

    async def settle(self, *, preloads: bool = True) -> None:
        """Дожидается фоновых полных загрузок и, по желанию, предзагрузок."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
        if preloads and self.preloader is not None:
            await self.preloader.drain()

    # Public API, same names the page script exposes --------------------
    async def navigate_to(self, url: str) -> bool:
        return await self._require(self.controller).navigate(url)

    async def preload_page(self, url: str) -> None:
        await self._require(self.preloader).warm(url)

    def preload_image(self, src: str) -> Optional[asyncio.Task]:
        return self._require(self.preloader).preload_image(src)

    # ------------------------------------------------------------------ #
    # Inspection                                                         #
    # ------------------------------------------------------------------ #
    def snapshot(self) -> Dict[str, Any]:
        """Состояние сессии для отчёта и CLI."""
        window = self._require_window()
        current = self._require(self.controller).current
        active_nav = [
            link.get("href")
            for link in window.document.nav_links(self.config.nav_link_class)
            if self.config.active_class in class_list(link)
        ]
        return {
            "current": {"url": current.url, "title": current.title, "page": current.page_name},
            "document_title": window.document.title,
            "body_class": window.document.body_class,
            "active_nav": active_nav,
            "history": {
                "index": window.history.index,
                "entries": [
                    {"url": e.url, "title": e.title, "state": e.state} for e in window.history.entries
                ],
            },
            "cached_pages": sorted(self.caches.pages),
            "loaded_styles": sorted(self.caches.styles),
            "preloaded_images": sorted(self.caches.images),
            "hard_navigations": list(window.hard_navigations),
            "full_loads": self.full_loads,
            "requests_made": self.fetcher.requests_made if self.fetcher else 0,
        }


async def start_browse(
    cfg: NavigatorConfig,
    entry: Optional[str] = None,
    pages: Iterable[str] = (),
    back_steps: int = 0,
) -> Dict[str, Any]:
    """
    Открывает сайт, проходит по страницам кликами, при необходимости
    возвращается назад и отдаёт снимок состояния сессии.

    Parameters
    ----------
    cfg : NavigatorConfig
        Конфигурация навигатора.
    entry : str, optional
        Страница полной загрузки (по умолчанию ``cfg.entry_page``).
    pages : Iterable[str]
        Ссылки, по которым кликаем по очереди.
    back_steps : int
        Сколько раз нажать «назад» в конце.
    """
    async with NavigatorSession(cfg) as session:
        await session.open(entry)
        for href in pages:
            await session.follow(href)
            await session.settle(preloads=False)
        for _ in range(back_steps):
            await session.go_back()
        await session.settle(preloads=False)
        return session.snapshot()
