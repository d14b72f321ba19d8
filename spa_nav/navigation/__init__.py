"""spa_nav.navigation: контроллер переходов и мост к истории браузера."""

from .controller import CurrentPage, NavigationController, NavState, Transition
from .history_bridge import HistoryBridge

__all__ = ["CurrentPage", "HistoryBridge", "NavigationController", "NavState", "Transition"]
