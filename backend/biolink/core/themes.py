from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Theme:
    """Colour set of a public profile page"""
    id: str
    name: str
    background_color: str
    text_color: str
    button_color: str
    button_text_color: str


THEMES = [
    Theme("default", "Default", "#ffffff", "#000000", "#000000", "#ffffff"),
    Theme("dark", "Dark", "#1a1a1a", "#ffffff", "#ffffff", "#000000"),
    Theme("purple", "Purple", "#f3f4f6", "#1f2937", "#8b5cf6", "#ffffff"),
    Theme("blue", "Blue", "#eff6ff", "#1e40af", "#3b82f6", "#ffffff"),
    Theme("green", "Green", "#f0fdf4", "#166534", "#22c55e", "#ffffff"),
    Theme("pink", "Pink", "#fdf2f8", "#be185d", "#ec4899", "#ffffff"),
]

THEMES_BY_ID = {theme.id: theme for theme in THEMES}

DEFAULT_THEME = THEMES[0]


def get_theme(theme_id: Optional[str]) -> Theme:
    """Look up a theme, unknown ids fall back to the default theme"""
    return THEMES_BY_ID.get(theme_id or "", DEFAULT_THEME)
