"""spa_nav.loader: сеть, кэш страниц, стили и предзагрузка."""

from .cache import PageCache
from .fetcher import Fetcher
from .models import PageData, SessionCaches
from .preloader import Preloader
from .styles import StyleLoader

__all__ = ["Fetcher", "PageCache", "PageData", "Preloader", "SessionCaches", "StyleLoader"]
