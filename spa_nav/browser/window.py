# spa_nav/browser/window.py
"""
Window: document, history, location and the global event target in one place.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from spa_nav.browser.dom import Document
from spa_nav.browser.events import EventTarget
from spa_nav.browser.history import History

logger = logging.getLogger("SpaNav")


class Window:
    """Headless stand-in for the browser window the navigator runs in."""

    def __init__(
        self,
        document: Document,
        url: str,
        on_hard_navigate: Optional[Callable[[str], None]] = None,
        history: Optional[History] = None,
    ) -> None:
        self.document = document
        self.events = EventTarget()
        # a full page load keeps the tab's history, only the document is new
        if history is not None:
            history.rebind(self.events)
            self.history = history
        else:
            self.history = History(self.events, url, document.title)
        self.hard_navigations: List[str] = []
        self.on_hard_navigate = on_hard_navigate
        # set once a full navigation has started; scripts of this page must stop writing
        self.unloaded = False

    @property
    def location(self) -> str:
        """URL of the current history entry, relative to the site root."""
        return self.history.current.url

    @property
    def pathname(self) -> str:
        return "/" + self.location.split("#", 1)[0].split("?", 1)[0].lstrip("/")

    def assign(self, url: str) -> None:
        """Full browser navigation: the page is left and *url* is loaded from scratch."""
        logger.debug("Hard navigation to %s", url)
        self.hard_navigations.append(url)
        self.unloaded = True
        self.history.push_state(None, "", url)
        if self.on_hard_navigate is not None:
            self.on_hard_navigate(url)
