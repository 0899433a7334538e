"""Portal REST API service: endpoint calls and payload parsing."""

from typing import Any

import structlog
from textual.color import Color, ColorParseError

from ..models.catalog import (
    Banner,
    Category,
    CategorySummary,
    Favourite,
    FavouriteAction,
    Game,
    PopularGame,
)
from ..models.theme import DEFAULT_THEME, CategoryTabsTheme, ThemeConfig
from .errors import ApiResponseError
from .http_client import HttpClientService

log = structlog.stdlib.get_logger()


CATEGORIES_PATH = "/api/game-categories"
GAMES_PATH = "/api/games"
FAVOURITES_PATH = "/api/favourites"
POPULAR_GAMES_PATH = "/api/popular-games"
THEME_CONFIG_PATH = "/api/theme-config"
BANNERS_PATH = "/api/banners/active"


def parse_flag(data: dict[str, Any], key: str, default: bool = True) -> bool:
    """Read a boolean field; anything but a JSON boolean is a malformed payload."""
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean, got {value!r}")
    return value


def parse_colour(value: Any, default: str) -> str:
    """Keep a theme colour only if the terminal can render it.

    The admin theme accepts any CSS value, gradients included; those fall
    back to the built-in colour.
    """
    if value is None:
        return default
    text = str(value)
    try:
        _ = Color.parse(text)
    except ColorParseError:
        log.warning("Unusable theme colour, using default", value=text, default=default)
        return default
    return text


def parse_category(data: dict[str, Any]) -> Category:
    """Build a Category from a backend document."""
    return Category(
        id=str(data["_id"]),
        name=str(data["name"]),
        icon=str(data["icon"]),
    )


def parse_game(data: dict[str, Any]) -> Game:
    """Build a Game, including its embedded category summary."""
    category = data["category"]
    return Game(
        id=str(data["_id"]),
        title=str(data["title"]),
        image=str(data["image"]),
        url=str(data["url"]),
        category=CategorySummary(
            id=str(category["_id"]),
            name=str(category["name"]),
            icon=str(category["icon"]),
        ),
    )


def parse_favourite(data: dict[str, Any]) -> Favourite:
    """Build a Favourite; unknown action types raise ValueError."""
    url = data.get("url")
    modal_options = data.get("modalOptions")
    return Favourite(
        id=str(data["_id"]),
        image=str(data["image"]),
        title=str(data["title"]),
        action_type=FavouriteAction(data["actionType"]),
        url=str(url) if url is not None else None,
        modal_options=str(modal_options) if modal_options is not None else None,
        is_active=parse_flag(data, "isActive"),
        order=int(data.get("order", 0)),
    )


def parse_popular_game(data: dict[str, Any]) -> PopularGame:
    """Build a PopularGame from a backend document."""
    return PopularGame(
        id=str(data["_id"]),
        image=str(data["image"]),
        title=str(data["title"]),
        redirect_url=str(data.get("redirectUrl", "")),
        is_active=parse_flag(data, "isActive"),
        order=int(data.get("order", 0)),
    )


def parse_theme_config(data: dict[str, Any]) -> ThemeConfig:
    """Build a ThemeConfig, keeping defaults for any missing field."""
    tabs = data.get("category_tabs") or {}
    brand = data.get("brand") or {}
    colors = data.get("colors") or {}
    default_tabs = DEFAULT_THEME.category_tabs
    return ThemeConfig(
        site_name=str(brand.get("site_name", DEFAULT_THEME.site_name)),
        accent=parse_colour(colors.get("accent"), DEFAULT_THEME.accent),
        category_tabs=CategoryTabsTheme(
            bg=parse_colour(tabs.get("bg"), default_tabs.bg),
            active_bg=parse_colour(tabs.get("active_bg"), default_tabs.active_bg),
            text_color=parse_colour(tabs.get("text_color"), default_tabs.text_color),
            active_text_color=parse_colour(tabs.get("active_text_color"), default_tabs.active_text_color),
            border_radius=int(tabs.get("border_radius", default_tabs.border_radius)),
        ),
    )


def parse_banner(data: dict[str, Any]) -> Banner:
    """Build a Banner; the public endpoint only lists active ones."""
    return Banner(
        id=str(data["id"]),
        title=str(data["title"]),
        image_url=str(data["imageUrl"]),
        text_english=str(data.get("textEnglish") or ""),
        text_bangla=str(data.get("textBangla") or ""),
        order=int(data.get("order", 0)),
    )


class PortalApiService:
    """Client for the portal backend's public endpoints.

    Every fetch method returns freshly parsed, immutable entities. Any
    failure (transport, HTTP status, `success: false`, malformed payload)
    is raised to the caller; the UI components decide how to settle.
    """

    def __init__(self, http_client: HttpClientService, base_url: str) -> None:
        self.http_client = http_client
        self.base_url = base_url

    def resolve_asset(self, path: str) -> str:
        """Resolve a backend-relative asset path by plain concatenation."""
        return f"{self.base_url}{path}"

    async def fetch_categories(self) -> list[Category]:
        """Fetch the full category list."""
        items = await self._fetch_list(CATEGORIES_PATH, "categories")
        categories = [parse_category(item) for item in items]
        log.info("Categories fetched", count=len(categories))
        return categories

    async def fetch_games(self, category_id: str) -> list[Game]:
        """Fetch the games belonging to one category."""
        items = await self._fetch_list(GAMES_PATH, "games", params={"category": category_id})
        games = [parse_game(item) for item in items]
        log.info("Games fetched", category_id=category_id, count=len(games))
        return games

    async def fetch_favourites(self) -> list[Favourite]:
        """Fetch the favourites shown on the home screen."""
        items = await self._fetch_list(FAVOURITES_PATH, "favourites")
        favourites = [parse_favourite(item) for item in items]
        log.info("Favourites fetched", count=len(favourites))
        return favourites

    async def fetch_popular_games(self) -> list[PopularGame]:
        """Fetch the promoted popular games."""
        items = await self._fetch_list(POPULAR_GAMES_PATH, "games")
        games = [parse_popular_game(item) for item in items]
        log.info("Popular games fetched", count=len(games))
        return games

    async def fetch_banners(self) -> list[Banner]:
        """Fetch the active hero banners, in display order."""
        items = await self._fetch_list(BANNERS_PATH, "banners")
        banners = [parse_banner(item) for item in items]
        log.info("Banners fetched", count=len(banners))
        return banners

    async def fetch_theme_config(self) -> ThemeConfig:
        """Fetch the theme configuration document."""
        payload = await self._fetch_payload(THEME_CONFIG_PATH)
        theme = payload.get("themeConfig")
        if not isinstance(theme, dict):
            raise ApiResponseError(
                "Theme config response has no themeConfig object",
                endpoint=THEME_CONFIG_PATH,
                payload=payload,
            )
        return parse_theme_config(theme)

    async def _fetch_payload(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        payload = await self.http_client.get_json(path, params=params)
        if not isinstance(payload, dict):
            raise ApiResponseError("Response body is not a JSON object", endpoint=path, payload=payload)
        if not payload.get("success"):
            raise ApiResponseError("Backend reported failure", endpoint=path, payload=payload)
        return payload

    async def _fetch_list(
        self,
        path: str,
        key: str,
        params: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        payload = await self._fetch_payload(path, params=params)
        items = payload.get(key)
        if not isinstance(items, list):
            raise ApiResponseError(f"Response has no '{key}' list", endpoint=path, payload=payload)
        return items
