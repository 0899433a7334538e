"""Screen components for the TUI application."""

from textual.screen import Screen

from .base import BaseModal, BaseScreen, ModalPanel
from .home import HomeScreen
from .modals import (
    CurrencyLanguageModal,
    InboxModal,
    TransactionRecordsModal,
    TurnoverModal,
)

# Screen registry for navigation
_SCREEN_REGISTRY: dict[str, type[Screen[None]]] = {
    "home": HomeScreen,
    "inbox": InboxModal,
    "transactions": TransactionRecordsModal,
    "turnover": TurnoverModal,
    "currency_language": CurrencyLanguageModal,
}


def get_screen_by_name(name: str) -> Screen[None] | None:
    """Get a screen instance by its registered name.

    Args:
        name: The registered name of the screen

    Returns:
        A new instance of the screen, or None if not found
    """
    screen_class = _SCREEN_REGISTRY.get(name)
    if screen_class:
        return screen_class()
    return None


def register_screen(name: str, screen_class: type[Screen[None]]) -> None:
    """Register a screen class with a name for navigation."""
    _SCREEN_REGISTRY[name] = screen_class


def get_registered_screens() -> list[str]:
    return list(_SCREEN_REGISTRY.keys())


__all__ = [
    "BaseModal",
    "BaseScreen",
    "CurrencyLanguageModal",
    "HomeScreen",
    "InboxModal",
    "ModalPanel",
    "TransactionRecordsModal",
    "TurnoverModal",
    "get_registered_screens",
    "get_screen_by_name",
    "register_screen",
]
