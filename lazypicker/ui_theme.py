"""UI theme definitions and selection helpers.

Themes are 256-color palettes for the picker chrome. A color value of
``None`` means the terminal's default foreground/background.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic color slots used by the renderer."""

    name: str
    marker: int | None
    marker_background: int | None
    matched: int | None
    selected: int | None
    status: int | None
    prompt: int | None


DEFAULT_THEME = UITheme(
    name="default",
    marker=1,
    marker_background=237,
    matched=70,
    selected=1,
    status=244,
    prompt=110,
)

OCEAN_THEME = UITheme(
    name="ocean",
    marker=45,
    marker_background=24,
    matched=117,
    selected=214,
    status=110,
    prompt=39,
)

PLAIN_THEME = UITheme(
    name="plain",
    marker=None,
    marker_background=None,
    matched=None,
    selected=None,
    status=None,
    prompt=None,
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
