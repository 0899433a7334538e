"""Game grid showing the games of the active category."""

from typing import ClassVar

from typing_extensions import override

from textual.app import ComposeResult
from textual.containers import Grid
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

import structlog

from src.models.catalog import Game
from src.services.catalog import GameListView, LoadState
from src.services.i18n import Language, LanguageService
from src.services.portal_api import PortalApiService

log = structlog.stdlib.get_logger()


def get_tile_tooltip(game: Game, image_url: str) -> str:
    """Tooltip text for a game tile: where it plays and its artwork."""
    return f"{game.title}\nPlay: {game.url}\nImage: {image_url}"


class GameTile(Static):
    """A single game entry in the grid."""

    def __init__(self, game: Game, image_url: str) -> None:
        super().__init__(game.title, classes="game-tile")
        self.game: Game = game
        self.tooltip = get_tile_tooltip(game, image_url)


class GameGrid(Widget):
    """Grid of games for `category_id`.

    Changing `category_id` triggers one fetch; assigning the same value again
    does nothing. The grid is hidden while no category is set.
    """

    DEFAULT_CSS: ClassVar[str] = """
    GameGrid {
        height: auto;
        margin-bottom: 1;
        display: none;
    }

    GameGrid.has-category {
        display: block;
    }

    GameGrid .section-header {
        text-style: bold;
        color: $error;
        margin-bottom: 1;
    }

    GameGrid #grid-loading {
        text-align: center;
        padding: 1;
        display: none;
    }

    GameGrid.-loading #grid-loading {
        display: block;
    }

    GameGrid.-loading #grid-tiles {
        display: none;
    }

    GameGrid #grid-tiles {
        grid-size: 6;
        grid-gutter: 1;
        height: auto;
    }

    GameGrid .game-tile {
        height: 3;
        content-align: center middle;
        text-align: center;
        background: $error-darken-3;
    }

    GameGrid .game-tile:hover {
        background: $error-darken-2;
    }
    """

    category_id: reactive[str] = reactive("", init=False)

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
        self._listing = GameListView(api, on_change=self._refresh_games)

    @property
    def listing(self) -> GameListView:
        return self._listing

    @override
    def compose(self) -> ComposeResult:
        yield Static(self._language.t("hot"), id="grid-header", classes="section-header")
        yield Static("Loading...", id="grid-loading")
        yield Grid(id="grid-tiles")

    def on_mount(self) -> None:
        self._language.subscribe(self._on_language_changed)

    def on_unmount(self) -> None:
        self._language.unsubscribe(self._on_language_changed)

    def watch_category_id(self, category_id: str) -> None:
        """Fetch games for the new category.

        Workers are not exclusive: an earlier request is not cancelled, so
        the last response to arrive decides what is shown.
        """
        self.set_class(bool(category_id), "has-category")
        log.debug("Game grid category changed", category_id=category_id)
        _ = self.run_worker(
            self._listing.set_category(category_id),
            group="game_fetch",
            exclusive=False,
        )

    def _refresh_games(self) -> None:
        if not self.is_mounted:
            return

        state = self._listing.state
        self.set_class(state == LoadState.LOADING, "-loading")
        if state == LoadState.LOADING:
            return

        grid = self.query_one("#grid-tiles", Grid)
        _ = grid.remove_children()
        games = self._listing.games
        if games:
            _ = grid.mount_all(
                GameTile(game, self._api.resolve_asset(game.image)) for game in games
            )
        log.debug("Game grid rendered", tiles=len(games))

    def _on_language_changed(self, language: Language) -> None:
        _ = language
        self.query_one("#grid-header", Static).update(self._language.t("hot"))
