"""Screen and modal base classes shared by the portal's views."""

from typing import TYPE_CHECKING, ClassVar

from textual import events, on
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import Button

import structlog

from src.services.errors import ErrorSeverity, UserFriendlyError, handle_error

if TYPE_CHECKING:
    from src.ui.app import PortalApp

log = structlog.stdlib.get_logger()


def _portal_app(screen: Screen[None]) -> "PortalApp":
    from src.ui.app import PortalApp

    if isinstance(screen.app, PortalApp):
        return screen.app
    raise RuntimeError("Screen is not attached to a PortalApp")


class BaseScreen(Screen[None]):
    """Full-page screen of the portal.

    Escape walks back through the app's navigation stack. Failures are
    routed through the error service and surfaced as notifications.
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "go_back", "Back", show=True),
    ]

    SCREEN_TITLE: ClassVar[str] = "Screen"
    SCREEN_NAME: ClassVar[str] = "base"

    _is_active: bool

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name=name or self.SCREEN_NAME)
        self._is_active = False

    @property
    def portal_app(self) -> "PortalApp":
        """Get the parent PortalApp instance.

        Raises:
            RuntimeError: If the screen is not attached to a PortalApp
        """
        return _portal_app(self)

    @property
    def screen_is_active(self) -> bool:
        """Check if this screen is currently active."""
        return self._is_active

    async def on_mount(self) -> None:
        log.info("Screen mounted", screen=self.SCREEN_NAME, title=self.SCREEN_TITLE)
        self._is_active = True

    async def on_unmount(self) -> None:
        log.info("Screen unmounted", screen=self.SCREEN_NAME)
        self._is_active = False

    def on_screen_resume(self) -> None:
        log.debug("Screen resumed", screen=self.SCREEN_NAME)
        self._is_active = True

    def on_screen_suspend(self) -> None:
        log.debug("Screen suspended", screen=self.SCREEN_NAME)
        self._is_active = False

    async def action_go_back(self) -> None:
        """Navigate back to the previous screen."""
        await self.portal_app.action_go_back()

    def notify_error(self, message: str) -> None:
        self.notify(message, severity="error")
        log.error("User notification", message=message, screen=self.SCREEN_NAME)

    def notify_warning(self, message: str) -> None:
        self.notify(message, severity="warning")
        log.warning("User notification", message=message, screen=self.SCREEN_NAME)

    def handle_exception(
        self,
        error: Exception,
        operation: str,
        context: dict[str, str | int | float | bool] | None = None,
    ) -> UserFriendlyError:
        """Log an exception through the error service and notify the user."""
        user_error = handle_error(
            error=error,
            operation=operation,
            component=self.SCREEN_NAME,
            context=context,
        )
        if user_error.severity == ErrorSeverity.WARNING:
            self.notify_warning(user_error.message)
        else:
            self.notify_error(user_error.message)
        return user_error


class ModalPanel(Vertical):
    """Content panel of a modal; clicks inside it never reach the backdrop."""

    def on_click(self, event: events.Click) -> None:
        event.stop()


class BaseModal(ModalScreen[None]):
    """Overlay screen closed by its close button, escape, or a backdrop click.

    A modal is open while it is on the screen stack; closing dismisses it.
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "close", "Close", show=True),
    ]

    SCREEN_TITLE: ClassVar[str] = "Modal"
    SCREEN_NAME: ClassVar[str] = "modal"

    DEFAULT_CSS: ClassVar[str] = """
    BaseModal {
        align: center middle;
        background: $background 80%;
    }

    BaseModal ModalPanel {
        width: 50;
        height: auto;
        max-height: 90%;
        background: $surface;
        border: solid $panel-lighten-2;
    }

    BaseModal .modal-header {
        height: 3;
        background: $panel;
    }

    BaseModal .modal-title {
        width: 1fr;
        content-align: center middle;
        text-style: bold;
    }

    BaseModal .modal-close {
        min-width: 5;
        width: 5;
        border: none;
    }

    BaseModal .no-data {
        height: 7;
        content-align: center middle;
        color: $text-muted;
    }
    """

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name=name or self.SCREEN_NAME)

    @property
    def portal_app(self) -> "PortalApp":
        return _portal_app(self)

    async def on_mount(self) -> None:
        log.info("Modal opened", modal=self.SCREEN_NAME)

    def on_click(self, event: events.Click) -> None:
        # Only clicks outside the panel get here
        _ = event
        self.action_close()

    @on(Button.Pressed, ".modal-close")
    def close_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.action_close()

    def action_close(self) -> None:
        log.info("Modal closed", modal=self.SCREEN_NAME)
        _ = self.dismiss(None)
