"""Custom widgets for the portal screens."""

from .banner import HeroBanner
from .category_tabs import CategoryButton, CategoryTabs
from .game_grid import GameGrid, GameTile
from .strip import DragScroll, FavouritesStrip, PopularGamesStrip, PromoCard, PromoStrip

__all__ = [
    "CategoryButton",
    "CategoryTabs",
    "DragScroll",
    "FavouritesStrip",
    "GameGrid",
    "GameTile",
    "HeroBanner",
    "PopularGamesStrip",
    "PromoCard",
    "PromoStrip",
]
