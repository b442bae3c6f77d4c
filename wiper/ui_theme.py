"""UI theme definitions and selection helpers.

Themes are ANSI palettes for box chrome, the entry list, text fields, and
the help panel.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    border: str
    title: str
    info_text: str
    field_focused: str
    field_unfocused: str
    list_marker: str
    list_size: str
    list_selected: str
    list_empty: str
    help_key: str
    help_label: str
    status_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    border="\033[38;5;250m",
    title="\033[1;38;5;255m",
    info_text="\033[38;5;117m",
    field_focused="\033[38;5;120m",
    field_unfocused="\033[38;5;242m",
    list_marker="\033[1;38;5;44m",
    list_size="\033[38;5;109m",
    list_selected="\033[38;2;255;165;0m",
    list_empty="\033[2;38;5;250m",
    help_key="\033[38;5;117m",
    help_label="\033[38;5;250m",
    status_error="\033[1;38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    border="\033[2;38;5;31m",
    title="\033[1;38;5;45m",
    info_text="\033[38;5;153m",
    field_focused="\033[38;5;45m",
    field_unfocused="\033[2;38;5;110m",
    list_marker="\033[1;38;5;39m",
    list_size="\033[38;5;73m",
    list_selected="\033[38;5;215m",
    list_empty="\033[2;38;5;110m",
    help_key="\033[38;5;153m",
    help_label="\033[2;38;5;110m",
    status_error="\033[1;38;5;209m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="\033[7m",
    reset="\033[0m",
    border="",
    title="",
    info_text="",
    field_focused="",
    field_unfocused="",
    list_marker="",
    list_size="",
    list_selected="",
    list_empty="",
    help_key="",
    help_label="",
    status_error="",
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
