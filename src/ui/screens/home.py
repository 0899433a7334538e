"""Home screen: hero banner, category tabs, the game grid and the promo strips."""

from typing import ClassVar

from typing_extensions import override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Static

import structlog

from src.ui.widgets.banner import HeroBanner
from src.ui.widgets.category_tabs import CategoryTabs
from src.ui.widgets.game_grid import GameGrid
from src.ui.widgets.strip import FavouritesStrip, PopularGamesStrip

from .base import BaseScreen

log = structlog.stdlib.get_logger()


class HomeScreen(BaseScreen):
    """Portal landing page.

    The game grid stays hidden until the tab bar announces its first
    category; every later announcement is forwarded to the grid, which
    ignores repeats of the category it already shows.
    """

    SCREEN_TITLE: ClassVar[str] = "Home"
    SCREEN_NAME: ClassVar[str] = "home"

    CSS: ClassVar[str] = """
    #home-content {
        padding: 1 2;
    }

    #site-name {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("i", "open_inbox", "Inbox", show=True),
        Binding("r", "open_transactions", "Records", show=True),
        Binding("t", "open_turnover", "Turnover", show=True),
        Binding("l", "open_currency_language", "Language", show=True),
    ]

    @override
    def compose(self) -> ComposeResult:
        app = self.portal_app
        with VerticalScroll(id="home-content"):
            yield Static(app.portal_theme.site_name, id="site-name")
            yield HeroBanner(app.api, app.language, id="hero-banner")
            yield CategoryTabs(app.api, app.portal_theme, id="category-tabs")
            yield GameGrid(app.api, app.language, id="game-grid")
            yield FavouritesStrip(app.api, app.language, id="favourites-strip")
            yield PopularGamesStrip(app.api, app.language, id="popular-games-strip")

    def on_mount(self) -> None:
        self.query_one("#site-name", Static).styles.color = self.portal_app.portal_theme.accent

    def on_category_tabs_changed(self, message: CategoryTabs.Changed) -> None:
        log.info("Category activated", category_id=message.category_id)
        self.portal_app.set_active_category(message.category_id)
        self.query_one("#game-grid", GameGrid).category_id = message.category_id

    async def _navigate_to(self, screen_name: str) -> None:
        try:
            await self.portal_app.push_screen_with_tracking(screen_name)
        except Exception as e:
            _ = self.handle_exception(e, operation="navigate", context={"target": screen_name})

    async def action_open_inbox(self) -> None:
        await self._navigate_to("inbox")

    async def action_open_transactions(self) -> None:
        await self._navigate_to("transactions")

    async def action_open_turnover(self) -> None:
        await self._navigate_to("turnover")

    async def action_open_currency_language(self) -> None:
        await self._navigate_to("currency_language")
