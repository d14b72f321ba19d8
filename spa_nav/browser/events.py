# spa_nav/browser/events.py
"""
Minimal event target: listeners are plain callables or coroutine functions.

Coroutines returned by listeners are scheduled on the running loop, the same
way a browser runs async handlers without the dispatcher waiting for them.
``dispatch`` hands the scheduled tasks back so tests and the CLI can await them.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, DefaultDict, List, Optional

Listener = Callable[["Event"], Any]

logger = logging.getLogger("SpaNav")


@dataclass(slots=True)
class Event:
    """A dispatched event with an optional payload and DOM-ish target."""

    type: str
    detail: Any = None
    target: Any = None
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True


class EventTarget:
    """Registry of listeners keyed by event type."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    def add_listener(self, event_type: str, listener: Listener) -> None:
        if listener not in self._listeners[event_type]:
            self._listeners[event_type].append(listener)

    def remove_listener(self, event_type: str, listener: Listener) -> None:
        try:
            self._listeners[event_type].remove(listener)
        except ValueError:
            pass

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners.get(event_type, ()))

    def dispatch(self, event: Event) -> List[asyncio.Task]:
        """Call every listener in registration order, scheduling async results."""
        tasks: List[asyncio.Task] = []
        for listener in list(self._listeners.get(event.type, ())):
            try:
                result = listener(event)
            except Exception:
                # one broken listener must not keep the others from running
                logger.exception("Listener for %r failed", event.type)
                continue
            if inspect.isawaitable(result):
                tasks.append(asyncio.ensure_future(result))
        return tasks

    def emit(self, event_type: str, detail: Any = None, target: Optional[Any] = None) -> List[asyncio.Task]:
        return self.dispatch(Event(event_type, detail=detail, target=target))
