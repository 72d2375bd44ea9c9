"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (list, footer, overlay chrome). Highlighting
of fetched help text uses a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    title: str
    list_item: str
    list_selected: str
    footer_text: str
    footer_key: str
    status_error: str
    overlay_border: str
    overlay_title: str
    filter_query: str
    confirm_text: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    title="\033[1m",
    list_item="\033[38;5;252m",
    list_selected="\033[1;48;5;237m",
    footer_text="\033[38;5;250m",
    footer_key="\033[1;34m",
    status_error="\033[1;38;5;203m",
    overlay_border="\033[38;5;45m",
    overlay_title="\033[1;38;5;45m",
    filter_query="\033[1;38;5;81m",
    confirm_text="\033[38;5;229m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    list_item="\033[38;5;153m",
    list_selected="\033[1;48;5;24m",
    footer_text="\033[2;38;5;110m",
    footer_key="\033[1;38;5;39m",
    status_error="\033[1;38;5;215m",
    overlay_border="\033[38;5;39m",
    overlay_title="\033[1;38;5;39m",
    filter_query="\033[1;38;5;45m",
    confirm_text="\033[38;5;153m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    title="",
    list_item="",
    list_selected="\033[7m",
    footer_text="",
    footer_key="",
    status_error="",
    overlay_border="",
    overlay_title="",
    filter_query="",
    confirm_text="",
    help_heading="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
