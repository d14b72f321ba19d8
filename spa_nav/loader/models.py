"""
Data models for the SpaNav loader.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set


@dataclass(slots=True)
class PageData:
    """Raw markup of a page and whether it was served from the page cache."""

    url: str
    content: str
    from_cache: bool = False


@dataclass(slots=True)
class SessionCaches:
    """
    Session-wide shared state, built once per full page load and handed by
    reference to every component that reads or writes it.

    pages  — URL (as written in href) -> raw markup, write-once.
    styles — stylesheet hrefs already present in <head>.
    images — image URLs a preload has been issued for.
    """

    pages: Dict[str, str] = field(default_factory=dict)
    styles: Set[str] = field(default_factory=set)
    images: Set[str] = field(default_factory=set)
