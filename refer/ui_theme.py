"""UI theme definitions and selection helpers.

Themes are ANSI palettes for panel chrome, the file list, and the entry
prompt. ``mono`` carries no escape codes at all.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the frame renderer."""

    name: str
    divider: str
    reverse: str
    reset: str
    panel_title: str
    file_name: str
    file_latest: str
    view_heading: str
    entry_prompt: str
    entry_cursor: str
    hint_key: str
    hint_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    panel_title="\033[1;38;5;81m",
    file_name="\033[38;5;252m",
    file_latest="\033[1;38;5;229m",
    view_heading="\033[1;38;5;45m",
    entry_prompt="\033[1;38;5;81m",
    entry_cursor="\033[7m",
    hint_key="\033[38;5;229m",
    hint_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    panel_title="\033[1;38;5;45m",
    file_name="\033[38;5;153m",
    file_latest="\033[1;38;5;117m",
    view_heading="\033[1;38;5;39m",
    entry_prompt="\033[1;38;5;45m",
    entry_cursor="\033[7m",
    hint_key="\033[38;5;153m",
    hint_dim="\033[2;38;5;110m",
)

MONO_THEME = UITheme(
    name="mono",
    divider="",
    reverse="",
    reset="",
    panel_title="",
    file_name="",
    file_latest="",
    view_heading="",
    entry_prompt="",
    entry_cursor="",
    hint_key="",
    hint_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    MONO_THEME.name: MONO_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None) -> UITheme:
    """Return the theme for ``name``, falling back to the default palette."""
    if not name:
        return DEFAULT_THEME
    candidate = str(name).strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "MONO_THEME",
    "available_theme_names",
    "resolve_theme",
]
