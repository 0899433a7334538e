"""The portal's Textual application: navigation stack and shared services."""

from dataclasses import dataclass, replace
from typing import ClassVar

from typing_extensions import override

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Footer, Header

import structlog

from src.models.theme import DEFAULT_THEME, ThemeConfig
from src.services.i18n import LanguageService
from src.services.portal_api import PortalApiService


log = structlog.stdlib.get_logger()


@dataclass
class AppState:
    """What the app currently shows, replaced wholesale on every change."""

    active_category_id: str | None = None
    theme: ThemeConfig = DEFAULT_THEME


class PortalApp(App[None]):
    """Terminal front-end for the Khelaghor gaming portal.

    Owns the screen registry navigation, the shared language service and
    the theme loaded at startup. Screens reach the backend through `api`.
    """

    CSS: ClassVar[str] = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True, priority=True),
        Binding("escape", "go_back", "Back", show=True),
        Binding("?", "show_help", "Help", show=True),
    ]

    app_state: reactive[AppState] = reactive(AppState, init=False)

    _api: PortalApiService | None
    _language: LanguageService
    _portal_theme: ThemeConfig
    _navigation_stack: list[str]

    def __init__(
        self,
        api: PortalApiService | None = None,
        language: LanguageService | None = None,
        portal_theme: ThemeConfig | None = None,
    ) -> None:
        """
        Args:
            api: Client for the portal REST endpoints
            language: Shared language service (English when omitted)
            portal_theme: Theme fetched at startup (built-in default when omitted)
        """
        super().__init__()
        self._api = api
        self._language = language or LanguageService()
        self._portal_theme = portal_theme or DEFAULT_THEME
        self._navigation_stack = []
        self.title = self._portal_theme.site_name  # type: ignore[assignment]
        self.sub_title = "Games portal"  # type: ignore[assignment]
        self.app_state = AppState(theme=self._portal_theme)

        log.info("PortalApp initialized", site_name=self._portal_theme.site_name)

    @property
    def api(self) -> PortalApiService:
        """Get the portal API service.

        Raises:
            RuntimeError: If the app was started without one
        """
        if self._api is None:
            raise RuntimeError("PortalApp was created without a portal API service")
        return self._api

    @property
    def language(self) -> LanguageService:
        return self._language

    @property
    def portal_theme(self) -> ThemeConfig:
        return self._portal_theme

    @property
    def navigation_stack(self) -> list[str]:
        """Get the current navigation stack."""
        return self._navigation_stack.copy()

    @override
    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer()

    async def on_mount(self) -> None:
        log.info("Application mounted")
        await self.push_screen_with_tracking("home")

    async def push_screen_with_tracking(self, screen_name: str) -> None:
        """Push a screen and track it in the navigation stack.

        Modal screens leave the stack again when they are dismissed, however
        they were closed.

        Args:
            screen_name: Name of the screen to push
        """
        # Lazy import to avoid circular dependency
        from src.ui.screens import get_screen_by_name

        screen = get_screen_by_name(screen_name)
        if screen is None:
            log.warning("Unknown screen requested", screen=screen_name)
            return

        self._navigation_stack.append(screen_name)
        if isinstance(screen, ModalScreen):

            def forget_modal(result: None) -> None:
                _ = result
                self._forget_screen(screen_name)

            _ = self.push_screen(screen, callback=forget_modal)
        else:
            await self.push_screen(screen)
        log.info("Screen pushed", screen=screen_name, stack_depth=len(self._navigation_stack))

    def _forget_screen(self, screen_name: str) -> None:
        for index in range(len(self._navigation_stack) - 1, -1, -1):
            if self._navigation_stack[index] == screen_name:
                del self._navigation_stack[index]
                break
        log.info("Screen closed", screen=screen_name, stack_depth=len(self._navigation_stack))

    async def action_go_back(self) -> None:
        """Navigate back to the previous screen."""
        if len(self._navigation_stack) <= 1:
            log.debug("Already at root screen, cannot go back")
            return

        if isinstance(self.screen, ModalScreen):
            # The dismiss callback updates the navigation stack
            _ = self.screen.dismiss(None)
            return

        current = self._navigation_stack.pop()
        log.info("Navigating back", from_screen=current, stack_depth=len(self._navigation_stack))
        _ = self.pop_screen()

    async def action_show_help(self) -> None:
        log.info("Help requested")
        self.notify(
            "Keys: i inbox, r transaction records, t turnover, "
            "l currency & language, escape back, q quit"
        )

    def set_active_category(self, category_id: str) -> None:
        """Record the category the home screen is showing."""
        self.app_state = replace(self.app_state, active_category_id=category_id)
        log.debug("Active category recorded", category_id=category_id)
