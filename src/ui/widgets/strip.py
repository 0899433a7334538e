"""Horizontally scrolling promo strips (favourites, popular games)."""

from dataclasses import dataclass
from typing import Any, ClassVar

from typing_extensions import override

from textual import events
from textual.app import ComposeResult
from textual.containers import HorizontalScroll
from textual.widget import Widget
from textual.widgets import Static

import structlog

from src.models.catalog import Favourite, FavouriteAction, PopularGame
from src.services.catalog import LoadState, PromoFeed
from src.services.i18n import Language, LanguageService
from src.services.portal_api import PortalApiService

log = structlog.stdlib.get_logger()

DRAG_SPEED = 2


@dataclass
class DragScroll:
    """Pointer drag state for drag-to-scroll.

    new_offset = offset_at_start - (pointer_x - pointer_x_at_start) * DRAG_SPEED
    """

    dragging: bool = False
    start_x: float = 0.0
    start_offset: float = 0.0

    def start(self, pointer_x: float, scroll_offset: float) -> None:
        self.dragging = True
        self.start_x = pointer_x
        self.start_offset = scroll_offset

    def move(self, pointer_x: float) -> float | None:
        """Return the scroll offset for the pointer position, or None when idle."""
        if not self.dragging:
            return None
        return self.start_offset - (pointer_x - self.start_x) * DRAG_SPEED

    def end(self) -> None:
        self.dragging = False


def describe_favourite(favourite: Favourite) -> str:
    """Short description of what activating a favourite does."""
    if favourite.action_type == FavouriteAction.URL:
        return f"Opens {favourite.url or '(no url)'}"
    return f"Opens modal: {favourite.modal_options or '(no options)'}"


class PromoCard(Static):
    """One card in a strip."""

    def __init__(self, title: str, image_url: str, detail: str) -> None:
        super().__init__(title, classes="promo-card")
        self.tooltip = f"{title}\n{detail}\nImage: {image_url}"


class PromoStrip(Widget):
    """Base strip: fetched once, hidden entirely when empty, drag to scroll."""

    HEADER_KEY: ClassVar[str] = ""
    COMPONENT: ClassVar[str] = "promo_strip"

    DEFAULT_CSS: ClassVar[str] = """
    PromoStrip {
        height: auto;
        margin-bottom: 1;
    }

    PromoStrip .strip-header {
        text-style: bold;
        color: $error;
        margin-bottom: 1;
    }

    PromoStrip .strip-loading {
        color: $text-muted;
        padding: 1;
    }

    PromoStrip .strip-track {
        height: 7;
        display: none;
    }

    PromoStrip.-loaded .strip-track {
        display: block;
    }

    PromoStrip.-loaded .strip-loading {
        display: none;
    }

    PromoStrip.-dragging .strip-track {
        background: $boost;
    }

    PromoStrip .promo-card {
        width: 30;
        height: 5;
        margin-right: 1;
        content-align: center middle;
        text-align: center;
        background: $error-darken-3;
    }
    """

    def __init__(
        self,
        api: PortalApiService,
        language: LanguageService,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._api = api
        self._language = language
        self._feed: PromoFeed[Any] = self._create_feed()
        self._drag = DragScroll()

    @property
    def feed(self) -> PromoFeed[Any]:
        return self._feed

    def _create_feed(self) -> PromoFeed[Any]:
        raise NotImplementedError

    def _build_card(self, item: Any) -> PromoCard:
        raise NotImplementedError

    @override
    def compose(self) -> ComposeResult:
        yield Static(self._language.t(self.HEADER_KEY), classes="strip-header")
        yield Static("Loading...", classes="strip-loading")
        yield HorizontalScroll(classes="strip-track")

    def on_mount(self) -> None:
        self._language.subscribe(self._on_language_changed)
        _ = self.run_worker(self._feed.load(), name=f"{self.COMPONENT}_worker", exclusive=True)

    def on_unmount(self) -> None:
        self._language.unsubscribe(self._on_language_changed)

    def _refresh_items(self) -> None:
        if not self.is_mounted:
            return

        if not self._feed.visible:
            # Nothing to show: the header goes too
            self.display = False
            return

        if self._feed.state == LoadState.LOADING:
            return

        track = self.query_one(".strip-track", HorizontalScroll)
        _ = track.remove_children()
        _ = track.mount_all(self._build_card(item) for item in self._feed.items)
        _ = self.add_class("-loaded")

    def _on_language_changed(self, language: Language) -> None:
        _ = language
        self.query_one(".strip-header", Static).update(self._language.t(self.HEADER_KEY))

    @property
    def _strip_track(self) -> HorizontalScroll:
        return self.query_one(".strip-track", HorizontalScroll)

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if event.button != 1:
            return
        self._drag.start(event.screen_x, self._strip_track.scroll_x)
        self.capture_mouse()
        _ = self.add_class("-dragging")

    def on_mouse_move(self, event: events.MouseMove) -> None:
        offset = self._drag.move(event.screen_x)
        if offset is None:
            return
        event.stop()
        self._strip_track.scroll_to(x=offset, animate=False)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        _ = event
        self._end_drag()

    def on_leave(self, event: events.Leave) -> None:
        _ = event
        self._end_drag()

    def _end_drag(self) -> None:
        if not self._drag.dragging:
            return
        self._drag.end()
        self.release_mouse()
        _ = self.remove_class("-dragging")


class FavouritesStrip(PromoStrip):
    """Pinned favourites from /api/favourites."""

    HEADER_KEY: ClassVar[str] = "favourites"
    COMPONENT: ClassVar[str] = "favourites"

    @override
    def _create_feed(self) -> PromoFeed[Favourite]:
        return PromoFeed(self._api.fetch_favourites, self.COMPONENT, on_change=self._refresh_items)

    @override
    def _build_card(self, item: Favourite) -> PromoCard:
        return PromoCard(item.title, self._api.resolve_asset(item.image), describe_favourite(item))


class PopularGamesStrip(PromoStrip):
    """Promoted games from /api/popular-games."""

    HEADER_KEY: ClassVar[str] = "popularGames"
    COMPONENT: ClassVar[str] = "popular_games"

    @override
    def _create_feed(self) -> PromoFeed[PopularGame]:
        return PromoFeed(self._api.fetch_popular_games, self.COMPONENT, on_change=self._refresh_items)

    @override
    def _build_card(self, item: PopularGame) -> PromoCard:
        return PromoCard(item.title, self._api.resolve_asset(item.image), f"Opens {item.redirect_url}")
