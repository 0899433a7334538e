"""Catalogue state: category selection, the dependent game list and promo feeds.

These classes hold the view state the widgets render. They know nothing about
Textual; widgets drive them and re-render from their `on_change` callbacks.
"""

from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Generic, Protocol, TypeVar

import structlog

from ..models.catalog import Category, Game
from .errors import handle_error
from .portal_api import PortalApiService

log = structlog.stdlib.get_logger()


class LoadState(Enum):
    """Lifecycle of a fetched collection."""
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"


CategoryChangeCallback = Callable[[str], None]
ChangeCallback = Callable[[], None]


class CategoryProvider:
    """Fetches the category list once and owns the active category.

    State machine: LOADING -> READY(categories, active_id) or LOADING -> EMPTY.
    There is no way back to LOADING; `load()` only fetches on its first call.
    """

    COMPONENT = "category_provider"

    def __init__(
        self,
        api: PortalApiService,
        on_category_change: CategoryChangeCallback,
        on_change: ChangeCallback | None = None,
    ) -> None:
        self._api = api
        self._on_category_change = on_category_change
        self._on_change = on_change
        self._categories: list[Category] = []
        self._active_id: str | None = None
        self._state = LoadState.LOADING
        self._load_started = False

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    async def load(self) -> None:
        """Fetch categories and activate the first one.

        Failures are logged and leave the provider EMPTY; nothing is raised.
        """
        if self._load_started:
            log.debug("Categories already requested, ignoring reload")
            return
        self._load_started = True

        try:
            categories = await self._api.fetch_categories()
        except Exception as e:
            _ = handle_error(e, operation="fetch_categories", component=self.COMPONENT)
            categories = []

        if not categories:
            self._state = LoadState.EMPTY
            log.info("No categories available")
            self._notify()
            return

        self._categories = categories
        self._active_id = categories[0].id
        self._state = LoadState.READY
        log.info("Categories loaded", count=len(categories), active_id=self._active_id)
        self._notify()
        self._on_category_change(self._active_id)

    def select_category(self, category_id: str) -> None:
        """Make a loaded category active and re-notify, even if unchanged.

        Raises:
            ValueError: If the id is not one of the loaded categories
        """
        if not any(category.id == category_id for category in self._categories):
            raise ValueError(f"Unknown category id: {category_id}")

        self._active_id = category_id
        log.info("Category selected", category_id=category_id)
        self._notify()
        self._on_category_change(category_id)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


class GameListView:
    """Game list scoped to the active category.

    Overlapping requests are not sequenced: if the category changes while a
    request is in flight, whichever response arrives last is kept, even when
    it belongs to the earlier category.
    """

    COMPONENT = "game_list"

    def __init__(
        self,
        api: PortalApiService,
        on_change: ChangeCallback | None = None,
    ) -> None:
        self._api = api
        self._on_change = on_change
        self._category_id: str | None = None
        self._games: list[Game] = []
        self._state = LoadState.EMPTY

    @property
    def category_id(self) -> str | None:
        return self._category_id

    @property
    def games(self) -> list[Game]:
        return list(self._games)

    @property
    def state(self) -> LoadState:
        return self._state

    async def set_category(self, category_id: str | None) -> None:
        """Point the list at a category and fetch its games.

        Re-supplying the current id is a no-op. An empty or missing id clears
        the list without issuing a request.
        """
        if category_id == self._category_id:
            log.debug("Category unchanged, skipping fetch", category_id=category_id)
            return
        self._category_id = category_id

        if not category_id:
            self._games = []
            self._state = LoadState.EMPTY
            self._notify()
            return

        self._state = LoadState.LOADING
        self._notify()

        try:
            games = await self._api.fetch_games(category_id)
        except Exception as e:
            _ = handle_error(
                e,
                operation="fetch_games",
                component=self.COMPONENT,
                context={"category_id": category_id},
            )
            games = []

        self._games = games
        self._state = LoadState.READY if games else LoadState.EMPTY
        log.info("Game list updated", category_id=category_id, count=len(games))
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


class Activatable(Protocol):
    """Anything carrying an `is_active` flag."""

    @property
    def is_active(self) -> bool: ...


ItemT = TypeVar("ItemT", bound=Activatable)


class PromoFeed(Generic[ItemT]):
    """A list fetched once on mount and shown only while it has active items.

    Backs the favourites and popular games strips. Items are rendered in the
    order the backend returns them.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Sequence[ItemT]]],
        component: str,
        on_change: ChangeCallback | None = None,
    ) -> None:
        self._fetch = fetch
        self._component = component
        self._on_change = on_change
        self._items: list[ItemT] = []
        self._state = LoadState.LOADING
        self._load_started = False

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def items(self) -> list[ItemT]:
        """Active items only."""
        return [item for item in self._items if item.is_active]

    @property
    def visible(self) -> bool:
        """Whether the strip should render at all (header included)."""
        return self._state == LoadState.LOADING or bool(self.items)

    async def load(self) -> None:
        if self._load_started:
            return
        self._load_started = True

        try:
            items = list(await self._fetch())
        except Exception as e:
            _ = handle_error(e, operation="fetch", component=self._component)
            items = []

        self._items = items
        self._state = LoadState.READY if self.items else LoadState.EMPTY
        log.info("Feed loaded", component=self._component, count=len(self.items))
        if self._on_change is not None:
            self._on_change()


class Carousel:
    """Wrap-around slide position over a fixed number of slides."""

    def __init__(self, count: int = 0) -> None:
        self._count = count
        self._index = 0

    @property
    def count(self) -> int:
        return self._count

    @property
    def index(self) -> int:
        return self._index

    def reset(self, count: int) -> None:
        """Start over at the first of `count` slides."""
        self._count = count
        self._index = 0

    def next(self) -> int:
        if self._count:
            self._index = (self._index + 1) % self._count
        return self._index

    def previous(self) -> int:
        if self._count:
            self._index = (self._index - 1) % self._count
        return self._index

    def go_to(self, index: int) -> int:
        """Jump to a slide, as an indicator click does.

        Raises:
            ValueError: If there is no slide at that index
        """
        if not 0 <= index < self._count:
            raise ValueError(f"No slide {index} among {self._count}")
        self._index = index
        return self._index
