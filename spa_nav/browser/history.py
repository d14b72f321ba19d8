# spa_nav/browser/history.py
"""
Session history: a list of entries with a cursor.

``push_state`` drops forward entries, ``replace_state`` rewrites the current one,
and traversal (``back``/``forward``/``go``) fires ``popstate`` with the state of
the entry that became current.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from spa_nav.browser.events import Event, EventTarget


@dataclass(slots=True)
class HistoryEntry:
    """State object, title and URL of one history entry."""

    state: Optional[Dict[str, Any]]
    title: str
    url: str


class History:
    def __init__(self, events: EventTarget, initial_url: str, title: str = "") -> None:
        self._events = events
        self._entries: List[HistoryEntry] = [HistoryEntry(None, title, initial_url)]
        self._index = 0

    def rebind(self, events: EventTarget) -> None:
        """Send popstate to a new window's event target (after a full page load)."""
        self._events = events

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> HistoryEntry:
        return self._entries[self._index]

    @property
    def state(self) -> Optional[Dict[str, Any]]:
        return self.current.state

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def push_state(self, state: Optional[Dict[str, Any]], title: str, url: str) -> None:
        del self._entries[self._index + 1:]
        self._entries.append(HistoryEntry(dict(state) if state else None, title, url))
        self._index += 1

    def replace_state(self, state: Optional[Dict[str, Any]], title: str, url: str) -> None:
        self._entries[self._index] = HistoryEntry(dict(state) if state else None, title, url)

    def go(self, delta: int) -> List[asyncio.Task]:
        """Move the cursor by *delta*; out-of-range moves are ignored like in browsers."""
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return []
        self._index = target
        entry = self.current
        return self._events.dispatch(Event("popstate", detail=entry.state, target=entry))

    def back(self) -> List[asyncio.Task]:
        return self.go(-1)

    def forward(self) -> List[asyncio.Task]:
        return self.go(1)
