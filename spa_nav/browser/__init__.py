"""spa_nav.browser: headless model of the browser surface the navigator drives."""

from .dom import ContentRegion, Document
from .events import Event, EventTarget
from .history import History, HistoryEntry
from .window import Window

__all__ = ["ContentRegion", "Document", "Event", "EventTarget", "History", "HistoryEntry", "Window"]
