# spa_nav/browser/dom.py
"""
Live document model on top of BeautifulSoup.

The navigator only needs a handful of DOM operations: read/write the title and
body class, swap the inner markup of the content region, append stylesheets to
<head>, and toggle classes on navigation links. Everything else in the page
passes through untouched.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

logger = logging.getLogger("SpaNav")

_EMPTY_DOCUMENT = "<html><head></head><body></body></html>"


def class_list(tag: Tag) -> List[str]:
    """Return the class attribute as a list whatever form bs4 stored it in."""
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def is_stylesheet(tag: Tag) -> bool:
    rel = tag.get("rel")
    if rel is None:
        return False
    values = rel.split() if isinstance(rel, str) else rel
    return "stylesheet" in (v.lower() for v in values)


@dataclass(slots=True)
class ContentRegion:
    """Visual state of the content region (what the inline style would hold)."""

    opacity: float = 1.0
    interactive: bool = True
    scroll_top: int = 0
    transition: str = ""

    def dim(self, opacity: float) -> None:
        self.opacity = opacity
        self.interactive = False

    def fade_out(self, duration_ms: int) -> None:
        self.transition = f"opacity {duration_ms / 1000:g}s ease"
        self.opacity = 0.0

    def restore(self) -> None:
        self.opacity = 1.0
        self.interactive = True

    @property
    def is_idle(self) -> bool:
        return self.opacity == 1.0 and self.interactive


class Document:
    """A parsed HTML document plus the content region state."""

    def __init__(self, markup: str = "", *, content_selector: str = "main") -> None:
        self.content_selector = content_selector
        self.region = ContentRegion()
        try:
            self.soup = BeautifulSoup(markup or _EMPTY_DOCUMENT, "html.parser")
        except Exception as exc:
            logger.debug("Unparseable document, starting blank: %s", exc)
            self.soup = BeautifulSoup(_EMPTY_DOCUMENT, "html.parser")

    # Structure helpers ------------------------------------------------------
    def _ensure(self, name: str) -> Tag:
        tag = self.soup.find(name)
        if isinstance(tag, Tag):
            return tag
        html = self.soup.find("html")
        if not isinstance(html, Tag):
            html = self.soup.new_tag("html")
            for child in list(self.soup.contents):
                html.append(child.extract())
            self.soup.append(html)
        tag = self.soup.new_tag(name)
        if name == "head":
            html.insert(0, tag)
        else:
            html.append(tag)
        return tag

    @property
    def head(self) -> Tag:
        return self._ensure("head")

    @property
    def body(self) -> Tag:
        return self._ensure("body")

    @property
    def main(self) -> Optional[Tag]:
        tag = self.soup.select_one(self.content_selector)
        return tag if isinstance(tag, Tag) else None

    # Title / body class -----------------------------------------------------
    @property
    def title(self) -> str:
        tag = self.soup.find("title")
        return tag.get_text() if isinstance(tag, Tag) else ""

    @title.setter
    def title(self, value: str) -> None:
        tag = self.soup.find("title")
        if not isinstance(tag, Tag):
            tag = self.soup.new_tag("title")
            self.head.append(tag)
        tag.string = value

    @property
    def body_class(self) -> str:
        return " ".join(class_list(self.body))

    @body_class.setter
    def body_class(self, value: str) -> None:
        if value:
            self.body["class"] = value.split()
        elif "class" in self.body.attrs:
            del self.body["class"]

    # Content region ---------------------------------------------------------
    @property
    def main_html(self) -> str:
        main = self.main
        return main.decode_contents() if main is not None else ""

    def replace_main(self, html: str) -> None:
        main = self.main
        if main is None:
            raise LookupError(f"No content region matching {self.content_selector!r}")
        fragment = BeautifulSoup(html, "html.parser")
        main.clear()
        for child in list(fragment.contents):
            main.append(child.extract())

    # Stylesheets ------------------------------------------------------------
    def stylesheet_hrefs(self) -> List[str]:
        hrefs: List[str] = []
        for tag in self.soup.find_all("link"):
            if isinstance(tag, Tag) and is_stylesheet(tag):
                href = tag.get("href")
                if isinstance(href, str) and href:
                    hrefs.append(href)
        return hrefs

    def append_stylesheet(self, href: str) -> Tag:
        link = self.soup.new_tag("link", rel="stylesheet", href=href)
        self.head.append(link)
        return link

    def count_stylesheets(self, href: str) -> int:
        return self.stylesheet_hrefs().count(href)

    # Links / images ---------------------------------------------------------
    def anchors(self) -> List[Tag]:
        return [a for a in self.soup.find_all("a", href=True) if isinstance(a, Tag)]

    def nav_links(self, nav_class: str) -> List[Tag]:
        return [a for a in self.soup.find_all("a", class_=nav_class) if isinstance(a, Tag)]

    def find_anchor(self, href: str) -> Optional[Tag]:
        for a in self.anchors():
            if a.get("href") == href:
                return a
        return None

    def images(self, *, in_region: bool = False) -> List[Tag]:
        scope = self.main if in_region else self.soup
        if scope is None:
            return []
        return [img for img in scope.find_all("img") if isinstance(img, Tag)]

    @staticmethod
    def toggle_class(tag: Tag, name: str, on: bool) -> None:
        classes = [c for c in class_list(tag) if c != name]
        if on:
            classes.append(name)
        if classes:
            tag["class"] = classes
        elif "class" in tag.attrs:
            del tag["class"]

    def serialize(self) -> str:
        return str(self.soup)
