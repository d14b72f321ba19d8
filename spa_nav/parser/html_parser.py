# === FILE: spa_nav/parser/html_parser.py ===
"""HTML parsing utilities for SpaNav.

:func:`extract` turns the raw markup of a fetched page into the fragment the
navigator swaps in:

* main_html   — inner markup of the ``<main>`` element or ``""`` if absent.
* title       — document <title> text, or the default title if missing/empty.
* body_class  — class attribute of <body> or ``""``.
* style_hrefs — local stylesheet hrefs in document order. Absolute and external
  stylesheets are skipped: those are loaded globally by every page.

The function is total. Broken or partial markup degrades to empty/default
fields instead of raising, so a navigation can still complete with a blank
content region.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import List
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from spa_nav.browser.dom import class_list, is_stylesheet

__all__: Sequence[str] = (
    "DEFAULT_TITLE",
    "ExtractedContent",
    "extract",
    "find_image_urls",
    "is_local_stylesheet",
)

DEFAULT_TITLE = "Music App"

logger = logging.getLogger("SpaNav")


@dataclass(slots=True)
class ExtractedContent:
    """Page fragment derived from raw markup (never cached, rebuilt per navigation)."""

    main_html: str = ""
    title: str = DEFAULT_TITLE
    body_class: str = ""
    style_hrefs: List[str] = field(default_factory=list)


def is_local_stylesheet(href: str) -> bool:
    """Same-origin relative path ending in ``.css``."""
    if not href or href.startswith(("//", "http:", "https:")):
        return False
    parsed = urlparse(href)
    if parsed.scheme or parsed.netloc:
        return False
    return parsed.path.endswith(".css")


def extract(markup: str, default_title: str = DEFAULT_TITLE, content_selector: str = "main") -> ExtractedContent:
    """Parse *markup* as a full document and pull out the swappable parts."""
    try:
        soup = BeautifulSoup(markup or "", "html.parser")

        main = soup.select_one(content_selector)
        main_html = main.decode_contents() if isinstance(main, Tag) else ""

        title_tag = soup.find("title")
        title = title_tag.get_text() if isinstance(title_tag, Tag) else ""

        body = soup.find("body")
        body_class = " ".join(class_list(body)) if isinstance(body, Tag) else ""

        styles: List[str] = []
        for link in soup.find_all("link"):
            if not isinstance(link, Tag) or not is_stylesheet(link):
                continue
            href = link.get("href")
            if isinstance(href, str) and is_local_stylesheet(href):
                styles.append(href)
    except Exception as exc:
        logger.debug("Markup could not be parsed, using empty content: %s", exc)
        return ExtractedContent(title=default_title)

    return ExtractedContent(
        main_html=main_html,
        title=title or default_title,
        body_class=body_class,
        style_hrefs=styles,
    )


def find_image_urls(markup: str, pattern: str) -> List[str]:
    """Return ``src="..."`` values matching *pattern*, deduplicated, in order of appearance."""
    src_re = re.compile(r'src="(' + pattern + r')"')
    return list(dict.fromkeys(m.group(1) for m in src_re.finditer(markup or "")))
