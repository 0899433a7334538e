"""Theme configuration models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CategoryTabsTheme:
    """Colours used by the category tab bar."""
    bg: str = "#1c1c1c"
    active_bg: str = "#dc2626"
    text_color: str = "#cccccc"
    active_text_color: str = "#ffffff"
    border_radius: int = 8


@dataclass(frozen=True)
class ThemeConfig:
    """Process-wide theme settings, loaded once at startup."""
    site_name: str = "KhelaGhor"
    accent: str = "#db110f"
    category_tabs: CategoryTabsTheme = field(default_factory=CategoryTabsTheme)


DEFAULT_THEME = ThemeConfig()
