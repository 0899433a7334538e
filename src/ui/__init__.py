"""User interface components using Textual framework."""

from .app import AppState, PortalApp
from .screens import (
    BaseScreen,
    HomeScreen,
    get_registered_screens,
    get_screen_by_name,
    register_screen,
)

__all__ = [
    "AppState",
    "BaseScreen",
    "HomeScreen",
    "PortalApp",
    "get_registered_screens",
    "get_screen_by_name",
    "register_screen",
]
