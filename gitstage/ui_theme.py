"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (list rows, title, status line). Syntax
highlighting style for viewed files remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass

from .changes import CHANGE_MODIFIED, CHANGE_NEW


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    reverse: str
    title: str
    dim: str
    change_new: str
    change_modified: str
    status_error: str
    status_info: str

    def change_style(self, kind: str) -> str:
        if kind == CHANGE_NEW:
            return self.change_new
        if kind == CHANGE_MODIFIED:
            return self.change_modified
        return ""


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    title="\033[1;38;5;81m",
    dim="\033[2m",
    change_new="\033[32m",
    change_modified="\033[31m",
    status_error="\033[1;38;5;203m",
    status_info="\033[38;5;229m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    title="\033[1;38;5;45m",
    dim="\033[2;38;5;110m",
    change_new="\033[38;5;84m",
    change_modified="\033[38;5;215m",
    status_error="\033[1;38;5;210m",
    status_info="\033[38;5;153m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    title="",
    dim="",
    change_new="",
    change_modified="",
    status_error="",
    status_info="",
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
