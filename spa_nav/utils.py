# File: spa_nav/utils.py
"""spa_nav.utils: Утилитарные функции для работы с адресами страниц и ссылками."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urlparse

from spa_nav.logger import logger

__all__: Sequence[str] = (
    "filename_of",
    "page_name",
    "is_spa_link",
    "loads_document",
)

_SKIP_PREFIXES = ("#", "mailto:", "javascript:", "tel:", "//", "http:", "https:")


def filename_of(url: str, entry_page: str = "index.html") -> str:
    """Возвращает последний сегмент пути; пустой путь (корень сайта) — домашняя страница."""
    return url.split("/")[-1] or entry_page


def page_name(filename: str, entry_page: str = "index.html") -> str:
    """Имя страницы для состояния навигации: ``discover.html`` -> ``discover``, домашняя -> ``home``."""
    if filename == entry_page:
        return "home"
    stem, dot, _ = filename.rpartition(".")
    return stem if dot else filename


def is_spa_link(href: str | None, page_extension: str = ".html") -> bool:
    """Проверяет, что ссылку можно открыть без перезагрузки: относительная, на страницу сайта."""
    if not href or href.startswith(_SKIP_PREFIXES):
        return False
    parsed = urlparse(href)
    if parsed.scheme or parsed.netloc:
        return False
    intercept = href.endswith(page_extension)
    logger.debug("Link %s intercepted: %s", href, intercept)
    return intercept


def loads_document(href: str | None) -> bool:
    """Ссылка, переход по которой загружает новый документ (не якорь, не mailto:/tel:/javascript:)."""
    if not href or href.startswith("#"):
        return False
    return urlparse(href).scheme in ("", "http", "https")
