"""Hero banner carousel shown above the category tabs."""

from typing import ClassVar

from typing_extensions import override

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widget import Widget
from textual.widgets import Button, Static

import structlog

from src.models.catalog import Banner
from src.services.catalog import Carousel, LoadState, PromoFeed
from src.services.i18n import Language, LanguageService
from src.services.portal_api import PortalApiService

log = structlog.stdlib.get_logger()


class HeroBanner(Widget):
    """Rotating slides from /api/banners/active.

    Fetched once on mount and hidden entirely when there are no banners.
    Slides advance on a timer, with the arrow buttons, or by picking an
    indicator; stepping past either end wraps around.
    """

    COMPONENT: ClassVar[str] = "hero_banner"
    AUTO_ADVANCE_SECONDS: ClassVar[float] = 3.0

    DEFAULT_CSS: ClassVar[str] = """
    HeroBanner {
        height: auto;
        margin-bottom: 1;
    }

    HeroBanner .banner-loading {
        height: 5;
        content-align: center middle;
        color: $text-muted;
        background: $boost;
    }

    HeroBanner #banner-body {
        height: 7;
        display: none;
    }

    HeroBanner #banner-dots {
        height: 1;
        align: center middle;
        display: none;
    }

    HeroBanner.-loaded #banner-body {
        display: block;
    }

    HeroBanner.-loaded #banner-dots {
        display: block;
    }

    HeroBanner.-loaded .banner-loading {
        display: none;
    }

    HeroBanner #banner-slide {
        width: 1fr;
        height: 7;
        content-align: center middle;
        text-align: center;
        text-style: bold;
        background: $error-darken-3;
    }

    HeroBanner .banner-nav {
        min-width: 5;
        width: 5;
        height: 7;
        border: none;
    }

    HeroBanner .banner-dot {
        min-width: 3;
        width: 3;
        height: 1;
        border: none;
        margin-right: 1;
        background: $panel;
    }

    HeroBanner .banner-dot.-current {
        background: $text;
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
        self._feed: PromoFeed[Banner] = PromoFeed(api.fetch_banners, self.COMPONENT, on_change=self._on_loaded)
        self._carousel = Carousel()
        self._timer: Timer | None = None

    @property
    def feed(self) -> PromoFeed[Banner]:
        return self._feed

    @property
    def carousel(self) -> Carousel:
        return self._carousel

    @property
    def current_banner(self) -> Banner | None:
        banners = self._feed.items
        if not banners:
            return None
        return banners[self._carousel.index]

    @override
    def compose(self) -> ComposeResult:
        yield Static("Loading...", classes="banner-loading")
        with Horizontal(id="banner-body"):
            yield Button("‹", id="banner-prev", classes="banner-nav")
            yield Static("", id="banner-slide")
            yield Button("›", id="banner-next", classes="banner-nav")
        yield Horizontal(id="banner-dots")

    def on_mount(self) -> None:
        self._language.subscribe(self._on_language_changed)
        _ = self.run_worker(self._feed.load(), name=f"{self.COMPONENT}_worker", exclusive=True)

    def on_unmount(self) -> None:
        self._language.unsubscribe(self._on_language_changed)

    def next_slide(self) -> None:
        _ = self._carousel.next()
        self._show_current()

    def previous_slide(self) -> None:
        _ = self._carousel.previous()
        self._show_current()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "banner-next":
            self.next_slide()
        elif button_id == "banner-prev":
            self.previous_slide()
        elif button_id.startswith("banner-dot-"):
            _ = self._carousel.go_to(int(button_id.removeprefix("banner-dot-")))
            self._show_current()
        else:
            return
        event.stop()

    def _on_loaded(self) -> None:
        if not self.is_mounted:
            return

        if not self._feed.visible:
            self.display = False
            return

        if self._feed.state == LoadState.LOADING:
            return

        count = len(self._feed.items)
        self._carousel.reset(count)
        dots = self.query_one("#banner-dots", Horizontal)
        _ = dots.mount_all(
            Button("", id=f"banner-dot-{index}", classes="banner-dot") for index in range(count)
        )
        _ = self.add_class("-loaded")
        if self._timer is None:
            self._timer = self.set_interval(self.AUTO_ADVANCE_SECONDS, self.next_slide)
        self.call_after_refresh(self._show_current)

    def _caption(self, banner: Banner) -> str:
        if self._language.language == Language.BANGLA:
            return banner.text_bangla
        return banner.text_english

    def _show_current(self) -> None:
        banner = self.current_banner
        if banner is None:
            return

        caption = self._caption(banner)
        slide = self.query_one("#banner-slide", Static)
        slide.update(f"{banner.title}\n{caption}" if caption else banner.title)
        slide.tooltip = self._api.resolve_asset(banner.image_url)

        current = f"banner-dot-{self._carousel.index}"
        for dot in self.query(".banner-dot").results(Button):
            dot.set_class(dot.id == current, "-current")
        log.debug("Banner shown", banner_id=banner.id, index=self._carousel.index)

    def _on_language_changed(self, language: Language) -> None:
        _ = language
        self._show_current()
