# === FILE: spa_nav/config.py ===
"""
Модуль для загрузки и валидации конфигурации навигатора SpaNav.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)


class NavigatorConfig(BaseModel):
    """Конфигурация одной навигационной сессии."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Корень сайта, относительно которого разрешаются страницы.")
    entry_page: str = Field("index.html", min_length=1, description="Имя файла домашней страницы.")
    page_extension: str = Field(".html", min_length=1, description="Расширение перехватываемых ссылок.")
    default_title: str = Field("Music App", description="Заголовок, если в разметке нет <title>.")

    content_selector: str = Field("main", min_length=1, description="Точка монтирования контента.")
    nav_link_class: str = Field("nav-link", min_length=1, description="Класс ссылок навигации.")
    active_class: str = Field("active", min_length=1, description="Класс активной ссылки.")

    dim_opacity: float = Field(0.5, ge=0.0, le=1.0, description="Прозрачность во время загрузки.")
    fade_out_ms: int = Field(150, ge=0, description="Длительность затухания (мс).")
    preload_delay_ms: int = Field(2000, ge=0, description="Задержка фоновой предзагрузки (мс).")

    image_host_pattern: str = Field(
        r"https://images\.unsplash\.com[^\"]+",
        description="Регулярное выражение для картинок, которые стоит предзагрузить.",
    )
    page_loaded_event: str = Field("spa:pageload", min_length=1, description="Имя события загрузки страницы.")
    user_agent: str = Field("SpaNav/1.0", min_length=1, description="Заголовок User-Agent.")
    timeout: Optional[float] = Field(None, gt=0, description="Таймаут на запрос (секунд), None — без таймаута.")
    serialize_navigations: bool = Field(True, description="Выполнять переходы строго по очереди.")

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("image_host_pattern")
    def _check_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"Неправильное регулярное выражение: {exc}") from exc
        return v

    @property
    def site_root(self) -> str:
        """base_url со слешем на конце — база для urljoin."""
        return str(self.base_url).rstrip("/") + "/"


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> NavigatorConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект NavigatorConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return NavigatorConfig(**data)
    except ValidationError:
        raise
