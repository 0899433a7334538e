"""Portal catalogue data models."""

from dataclasses import dataclass
from enum import Enum


class FavouriteAction(Enum):
    """What a favourite does when activated."""
    URL = "url"
    MODAL = "modal"


@dataclass(frozen=True)
class Category:
    """A named grouping of games with a display icon."""
    id: str
    name: str
    icon: str  # Relative path, resolved against the API base URL


@dataclass(frozen=True)
class CategorySummary:
    """Denormalised category copy embedded in a game listing."""
    id: str
    name: str
    icon: str


@dataclass(frozen=True)
class Game:
    """A playable entry in a category listing."""
    id: str
    title: str
    image: str
    url: str
    category: CategorySummary


@dataclass(frozen=True)
class Favourite:
    """A pinned item shown in the favourites strip."""
    id: str
    image: str
    title: str
    action_type: FavouriteAction
    url: str | None = None
    modal_options: str | None = None
    is_active: bool = True
    order: int = 0


@dataclass(frozen=True)
class PopularGame:
    """A promoted game shown in the popular games strip."""
    id: str
    image: str
    title: str
    redirect_url: str
    is_active: bool = True
    order: int = 0


@dataclass(frozen=True)
class Banner:
    """A hero carousel slide with its caption in both languages."""
    id: str
    title: str
    image_url: str
    text_english: str = ""
    text_bangla: str = ""
    order: int = 0
    is_active: bool = True
