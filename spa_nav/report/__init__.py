"""spa_nav.report: сохранение снимка навигационной сессии для CLI и тестов."""

from .json_report import render_json

__all__ = ["render_json"]
