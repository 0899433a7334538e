"""Tests for UI navigation, the screen registry and the home screen."""

from unittest.mock import AsyncMock

import pytest
from hypothesis import given, settings, strategies as st
from textual.pilot import Pilot

from src.models import DEFAULT_THEME, Banner, Category, CategorySummary, Game, ThemeConfig
from src.services import Language, LanguageService, PortalApiService
from src.services.portal_api import parse_theme_config
from src.ui.app import AppState, PortalApp
from src.ui.screens import (
    BaseModal,
    BaseScreen,
    CurrencyLanguageModal,
    HomeScreen,
    InboxModal,
    TransactionRecordsModal,
    TurnoverModal,
    get_registered_screens,
    get_screen_by_name,
    register_screen,
)
from src.ui.widgets import (
    CategoryButton,
    CategoryTabs,
    FavouritesStrip,
    GameGrid,
    GameTile,
    HeroBanner,
    PopularGamesStrip,
)


MODAL_SCREENS: dict[str, type[BaseModal]] = {
    "inbox": InboxModal,
    "transactions": TransactionRecordsModal,
    "turnover": TurnoverModal,
    "currency_language": CurrencyLanguageModal,
}


def make_api(
    categories: list[Category] | None = None,
    games: list[Game] | None = None,
    banners: list[Banner] | None = None,
) -> AsyncMock:
    api = AsyncMock(spec=PortalApiService)
    api.fetch_banners.return_value = banners if banners is not None else []
    api.fetch_categories.return_value = categories if categories is not None else []
    api.fetch_games.return_value = games if games is not None else []
    api.fetch_favourites.return_value = []
    api.fetch_popular_games.return_value = []
    api.resolve_asset.side_effect = lambda path: f"http://portal.test{path}"
    return api


async def settle(pilot: Pilot[None]) -> None:
    """Let chained workers (categories, then games) finish and render."""
    for _ in range(3):
        await pilot.app.workers.wait_for_complete()
        await pilot.pause()


class TestScreenRegistry:
    """Tests for screen registry functionality."""

    def test_home_is_registered(self) -> None:
        screen = get_screen_by_name("home")
        assert isinstance(screen, HomeScreen)

    @pytest.mark.parametrize(("name", "screen_class"), list(MODAL_SCREENS.items()))
    def test_modals_are_registered(self, name: str, screen_class: type[BaseModal]) -> None:
        screen = get_screen_by_name(name)
        assert isinstance(screen, screen_class)
        assert screen_class.SCREEN_NAME == name

    def test_unknown_screen_returns_none(self) -> None:
        assert get_screen_by_name("deposit") is None

    def test_register_screen(self) -> None:
        class PromotionsModal(BaseModal):
            SCREEN_NAME = "promotions"

        register_screen("promotions", PromotionsModal)

        assert "promotions" in get_registered_screens()
        assert isinstance(get_screen_by_name("promotions"), PromotionsModal)

    def test_registered_screen_names(self) -> None:
        names = get_registered_screens()
        for expected in ["home", *MODAL_SCREENS]:
            assert expected in names


class TestAppState:
    """Tests for application state management."""

    def test_app_state_defaults(self) -> None:
        state = AppState()
        assert state.active_category_id is None
        assert state.theme == DEFAULT_THEME

    def test_app_uses_injected_theme(self) -> None:
        theme = ThemeConfig(site_name="Test Portal")
        app = PortalApp(api=make_api(), portal_theme=theme)
        assert app.portal_theme is theme
        assert app.app_state.theme is theme

    def test_set_active_category(self) -> None:
        app = PortalApp(api=make_api())
        app.set_active_category("c1")
        assert app.app_state.active_category_id == "c1"

    def test_api_required_for_screens(self) -> None:
        app = PortalApp()
        with pytest.raises(RuntimeError):
            _ = app.api


class TestNavigationStack:
    """Tests for navigation stack management."""

    def test_app_starts_with_empty_navigation_stack(self) -> None:
        assert PortalApp().navigation_stack == []

    def test_navigation_stack_is_copy(self) -> None:
        app = PortalApp()
        stack = app.navigation_stack
        stack.append("inbox")
        assert "inbox" not in app.navigation_stack

    @given(st.lists(st.sampled_from(["inbox", "turnover", "home"]), min_size=1, max_size=10))
    @settings(max_examples=50)
    def test_forgetting_a_screen_removes_latest_entry(self, screens: list[str]) -> None:
        """
        **Property: closing a screen removes only its most recent stack entry**
        """
        app = PortalApp()
        app._navigation_stack.extend(screens)

        closed = screens[-1]
        app._forget_screen(closed)

        assert app.navigation_stack == screens[:-1]


class TestScreenMetadata:
    """Tests for screen constants."""

    def test_base_screen_defaults(self) -> None:
        assert BaseScreen.SCREEN_TITLE == "Screen"
        assert BaseScreen.SCREEN_NAME == "base"

    def test_home_screen_metadata(self) -> None:
        assert HomeScreen.SCREEN_NAME == "home"
        assert HomeScreen().screen_is_active is False

    def test_transaction_columns(self) -> None:
        assert TransactionRecordsModal.COLUMNS == ["Type", "Amount", "Status", "Txn Date"]

    def test_language_options_cover_all_languages(self) -> None:
        options = {language for language, _ in CurrencyLanguageModal.LANGUAGE_OPTIONS}
        assert options == set(Language)


class TestHomeScreen:
    """Tests running the app headless against a mocked backend."""

    @pytest.mark.asyncio
    async def test_first_category_games_are_shown(self) -> None:
        lucky7 = Game(
            id="g1",
            title="Lucky7",
            image="/uploads/lucky7.png",
            url="https://play.example.com/lucky7",
            category=CategorySummary(id="c1", name="Slots", icon="/icons/slots.png"),
        )
        api = make_api([Category(id="c1", name="Slots", icon="/icons/slots.png")], [lucky7])
        app = PortalApp(api=api)

        async with app.run_test() as pilot:
            await settle(pilot)

            assert isinstance(app.screen, HomeScreen)
            assert app.navigation_stack == ["home"]
            tiles = list(app.screen.query(GameTile))
            assert [tile.game.title for tile in tiles] == ["Lucky7"]
            assert app.app_state.active_category_id == "c1"
            api.fetch_games.assert_awaited_once_with("c1")

    @pytest.mark.asyncio
    async def test_empty_feeds_hide_strips(self) -> None:
        app = PortalApp(api=make_api([Category(id="c1", name="Slots", icon="/i.png")]))

        async with app.run_test() as pilot:
            await settle(pilot)

            assert app.screen.query_one(FavouritesStrip).display is False
            assert app.screen.query_one(PopularGamesStrip).display is False

    @pytest.mark.asyncio
    async def test_no_categories_means_no_game_request(self) -> None:
        api = make_api([])
        app = PortalApp(api=api)

        async with app.run_test() as pilot:
            await settle(pilot)

            api.fetch_games.assert_not_awaited()
            assert not app.screen.query_one(GameGrid).has_class("has-category")

    @pytest.mark.asyncio
    async def test_modal_opens_and_closes(self) -> None:
        app = PortalApp(api=make_api())

        async with app.run_test() as pilot:
            await settle(pilot)

            await pilot.press("i")
            await pilot.pause()
            assert isinstance(app.screen, InboxModal)
            assert app.navigation_stack == ["home", "inbox"]

            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, HomeScreen)
            assert app.navigation_stack == ["home"]

    @pytest.mark.asyncio
    async def test_language_modal_switches_language(self) -> None:
        language = LanguageService()
        app = PortalApp(api=make_api(), language=language)

        async with app.run_test() as pilot:
            await settle(pilot)

            await pilot.press("l")
            await pilot.pause()
            assert isinstance(app.screen, CurrencyLanguageModal)

            await pilot.click("#language-bangla")
            await pilot.pause()

            assert language.language == Language.BANGLA
            assert app.screen.query_one("#language-bangla").has_class("-selected")
            assert not app.screen.query_one("#language-english").has_class("-selected")

    @pytest.mark.asyncio
    async def test_unrenderable_theme_colours_do_not_break_home(self) -> None:
        gradient = "linear-gradient(to bottom, #db110f, #750503)"
        theme = parse_theme_config({"category_tabs": {"bg": gradient}, "colors": {"accent": gradient}})
        app = PortalApp(api=make_api([Category(id="c1", name="Slots", icon="/i.png")]), portal_theme=theme)

        async with app.run_test() as pilot:
            await settle(pilot)

            assert isinstance(app.screen, HomeScreen)
            assert len(app.screen.query(CategoryButton)) == 1


class TestCategoryTabsInteraction:
    """Tests pressing category tabs in the running app."""

    CATEGORIES = [
        Category(id="c1", name="Slots", icon="/icons/slots.png"),
        Category(id="c2", name="Crash", icon="/icons/crash.png"),
    ]

    @pytest.mark.asyncio
    async def test_pressing_another_tab_refetches_games(self) -> None:
        api = make_api(self.CATEGORIES)
        app = PortalApp(api=api)

        async with app.run_test() as pilot:
            await settle(pilot)
            crash_tab = list(app.screen.query(CategoryButton))[1]

            await pilot.click(crash_tab)
            await settle(pilot)

            assert [call.args for call in api.fetch_games.await_args_list] == [("c1",), ("c2",)]
            assert app.screen.query_one(CategoryTabs).provider.active_id == "c2"
            assert crash_tab.has_class("-active-tab")
            assert app.app_state.active_category_id == "c2"

    @pytest.mark.asyncio
    async def test_pressing_active_tab_does_not_refetch(self) -> None:
        api = make_api(self.CATEGORIES)
        app = PortalApp(api=api)

        async with app.run_test() as pilot:
            await settle(pilot)
            slots_tab = list(app.screen.query(CategoryButton))[0]

            await pilot.click(slots_tab)
            await settle(pilot)

            api.fetch_games.assert_awaited_once_with("c1")
            assert slots_tab.has_class("-active-tab")


class TestModalInteraction:
    """Tests closing modals by mouse and the turnover tabs."""

    @pytest.mark.asyncio
    async def test_backdrop_click_closes_modal(self) -> None:
        app = PortalApp(api=make_api())

        async with app.run_test() as pilot:
            await settle(pilot)
            await pilot.press("i")
            await pilot.pause()
            assert isinstance(app.screen, InboxModal)

            await pilot.click(offset=(1, 1))
            await pilot.pause()

            assert isinstance(app.screen, HomeScreen)
            assert app.navigation_stack == ["home"]

    @pytest.mark.asyncio
    async def test_panel_click_keeps_modal_open(self) -> None:
        app = PortalApp(api=make_api())

        async with app.run_test() as pilot:
            await settle(pilot)
            await pilot.press("i")
            await pilot.pause()

            await pilot.click(".inbox-subject")
            await pilot.pause()

            assert isinstance(app.screen, InboxModal)
            assert app.navigation_stack == ["home", "inbox"]

    @pytest.mark.asyncio
    async def test_close_button_closes_modal(self) -> None:
        app = PortalApp(api=make_api())

        async with app.run_test() as pilot:
            await settle(pilot)
            await pilot.press("r")
            await pilot.pause()
            assert isinstance(app.screen, TransactionRecordsModal)

            await pilot.click(".modal-close")
            await pilot.pause()

            assert isinstance(app.screen, HomeScreen)
            assert app.navigation_stack == ["home"]

    @pytest.mark.asyncio
    async def test_turnover_tabs_toggle(self) -> None:
        app = PortalApp(api=make_api())

        async with app.run_test() as pilot:
            await settle(pilot)
            await pilot.press("t")
            await pilot.pause()
            modal = app.screen
            assert isinstance(modal, TurnoverModal)
            assert modal.query_one("#turnover-active").has_class("-active-tab")

            await pilot.click("#turnover-completed")
            await pilot.pause()

            assert modal.active_tab == "completed"
            assert modal.query_one("#turnover-completed").has_class("-active-tab")
            assert not modal.query_one("#turnover-active").has_class("-active-tab")

            await pilot.click("#turnover-active")
            await pilot.pause()

            assert modal.active_tab == "active"
            assert isinstance(app.screen, TurnoverModal)


class TestHeroBanner:
    """Tests for the banner carousel on the home screen."""

    BANNERS = [
        Banner(id=f"b{index}", title=f"Banner {index}", image_url=f"/uploads/b{index}.png")
        for index in range(3)
    ]

    @pytest.mark.asyncio
    async def test_no_banners_hides_carousel(self) -> None:
        app = PortalApp(api=make_api())

        async with app.run_test() as pilot:
            await settle(pilot)

            assert app.screen.query_one(HeroBanner).display is False

    @pytest.mark.asyncio
    async def test_arrows_wrap_around(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(HeroBanner, "AUTO_ADVANCE_SECONDS", 600.0)
        app = PortalApp(api=make_api(banners=self.BANNERS))

        async with app.run_test() as pilot:
            await settle(pilot)
            banner = app.screen.query_one(HeroBanner)
            assert banner.display is True
            assert banner.carousel.count == 3
            assert banner.current_banner == self.BANNERS[0]

            await pilot.click("#banner-prev")
            await pilot.pause()
            assert banner.carousel.index == 2

            await pilot.click("#banner-next")
            await pilot.pause()
            assert banner.carousel.index == 0

            await pilot.click("#banner-dot-1")
            await pilot.pause()
            assert banner.current_banner == self.BANNERS[1]
            assert banner.query_one("#banner-dot-1").has_class("-current")
