"""Category tab bar driven by CategoryProvider."""

from typing import ClassVar

from typing_extensions import override

from textual.app import ComposeResult
from textual.containers import HorizontalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Static

import structlog

from src.models.catalog import Category
from src.models.theme import ThemeConfig
from src.services.catalog import CategoryProvider, LoadState
from src.services.portal_api import PortalApiService

log = structlog.stdlib.get_logger()


class CategoryButton(Button):
    """A tab button remembering which category it selects."""

    def __init__(self, category: Category, icon_url: str) -> None:
        super().__init__(category.name, classes="category-tab")
        self.category_id: str = category.id
        self.tooltip = icon_url


class CategoryTabs(Widget):
    """Horizontal tab bar listing the portal's game categories.

    Posts `CategoryTabs.Changed` on the initial activation and on every
    selection, including re-selection of the active tab.
    """

    class Changed(Message):
        """The active category was (re)announced."""

        category_id: str

        def __init__(self, category_id: str) -> None:
            super().__init__()
            self.category_id = category_id

    DEFAULT_CSS: ClassVar[str] = """
    CategoryTabs {
        height: auto;
        margin-bottom: 1;
    }

    CategoryTabs #tabs-loading {
        text-align: center;
        color: $text-muted;
        padding: 1;
    }

    CategoryTabs #tabs-row {
        height: auto;
        display: none;
    }

    CategoryTabs.has-tabs #tabs-row {
        display: block;
    }

    CategoryTabs.has-tabs #tabs-loading {
        display: none;
    }

    CategoryTabs .category-tab {
        min-width: 12;
        height: 3;
        border: none;
        margin-right: 1;
    }
    """

    def __init__(
        self,
        api: PortalApiService,
        theme: ThemeConfig,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._api = api
        self._theme = theme
        self._provider = CategoryProvider(
            api,
            on_category_change=self._announce,
            on_change=self._refresh_tabs,
        )
        self._buttons_built = False

    @property
    def provider(self) -> CategoryProvider:
        return self._provider

    @override
    def compose(self) -> ComposeResult:
        yield Static("Loading categories...", id="tabs-loading")
        yield HorizontalScroll(id="tabs-row")

    def on_mount(self) -> None:
        tabs_theme = self._theme.category_tabs
        row = self.query_one("#tabs-row", HorizontalScroll)
        row.styles.background = tabs_theme.bg
        if tabs_theme.border_radius > 0:
            row.styles.border = ("round", tabs_theme.bg)

        _ = self.run_worker(self._provider.load(), name="categories_worker", exclusive=True)

    def select_category(self, category_id: str) -> None:
        """Activate a loaded category, as if its tab was pressed."""
        self._provider.select_category(category_id)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if isinstance(event.button, CategoryButton):
            event.stop()
            self.select_category(event.button.category_id)

    def _announce(self, category_id: str) -> None:
        _ = self.post_message(self.Changed(category_id))

    def _refresh_tabs(self) -> None:
        if not self.is_mounted:
            return

        state = self._provider.state
        loading = self.query_one("#tabs-loading", Static)

        if state == LoadState.EMPTY:
            loading.display = False
            return

        if state != LoadState.READY:
            return

        if not self._buttons_built:
            # The category set is fetched once, so the buttons are built once
            row = self.query_one("#tabs-row", HorizontalScroll)
            row.mount_all(
                CategoryButton(category, self._api.resolve_asset(category.icon))
                for category in self._provider.categories
            )
            self._buttons_built = True
            _ = self.add_class("has-tabs")

        self.call_after_refresh(self._paint_active)

    def _paint_active(self) -> None:
        tabs_theme = self._theme.category_tabs
        active_id = self._provider.active_id
        for button in self.query(CategoryButton):
            is_active = button.category_id == active_id
            button.set_class(is_active, "-active-tab")
            button.styles.background = tabs_theme.active_bg if is_active else tabs_theme.bg
            button.styles.color = tabs_theme.active_text_color if is_active else tabs_theme.text_color
