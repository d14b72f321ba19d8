"""spa_nav.parser: извлечение контента страницы из сырой разметки."""

from .html_parser import DEFAULT_TITLE, ExtractedContent, extract, find_image_urls, is_local_stylesheet

__all__ = ["DEFAULT_TITLE", "ExtractedContent", "extract", "find_image_urls", "is_local_stylesheet"]
