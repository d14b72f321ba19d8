"""
Исключения слоя SPA-навигации.

Ошибки разбора разметки сюда не входят: извлечение контента никогда не бросает
исключений и деградирует к пустым полям.
"""
from __future__ import annotations


class NavigationError(Exception):
    """Базовое исключение навигации."""

    pass


class FetchFailure(NavigationError):
    """Сетевая ошибка, не-2xx статус или не текстовый ответ при загрузке ресурса."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class StyleLoadFailure(NavigationError):
    """Таблица стилей не загрузилась. Не фатально: навигация продолжается без стилей."""

    def __init__(self, href: str, reason: str) -> None:
        self.href = href
        super().__init__(f"Stylesheet {href} failed to load: {reason}")


__all__ = ["NavigationError", "FetchFailure", "StyleLoadFailure"]
