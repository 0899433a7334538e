"""Data models for the Khelaghor terminal portal."""

from .catalog import (
    Banner,
    Category,
    CategorySummary,
    Favourite,
    FavouriteAction,
    Game,
    PopularGame,
)
from .config import AppConfig
from .theme import DEFAULT_THEME, CategoryTabsTheme, ThemeConfig

__all__ = [
    "AppConfig",
    "Banner",
    "Category",
    "CategorySummary",
    "CategoryTabsTheme",
    "DEFAULT_THEME",
    "Favourite",
    "FavouriteAction",
    "Game",
    "PopularGame",
    "ThemeConfig",
]
