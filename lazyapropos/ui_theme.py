"""UI theme definitions and selection helpers.

Themes are ANSI palettes for picker chrome and symbol-kind styling. Pygments
style used for doc arglists remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    header: str
    query: str
    source_header: str
    marked: str
    message: str
    preview_border: str
    doc_text: str
    action_menu: str
    namespace: str
    symbol_function: str
    symbol_macro: str
    symbol_variable: str
    symbol_special_form: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    header="\033[1;38;5;81m",
    query="\033[1;38;5;229m",
    source_header="\033[1;34m",
    marked="\033[38;5;214m",
    message="\033[2;38;5;250m",
    preview_border="\033[2m",
    doc_text="\033[38;5;250m",
    action_menu="\033[38;5;229m",
    namespace="\033[38;5;110m",
    symbol_function="\033[38;5;81m",
    symbol_macro="\033[38;5;213m",
    symbol_variable="\033[38;5;42m",
    symbol_special_form="\033[1;38;5;214m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    header="\033[1;38;5;45m",
    query="\033[1;38;5;153m",
    source_header="\033[1;38;5;45m",
    marked="\033[38;5;215m",
    message="\033[2;38;5;110m",
    preview_border="\033[2;38;5;31m",
    doc_text="\033[38;5;153m",
    action_menu="\033[38;5;153m",
    namespace="\033[38;5;117m",
    symbol_function="\033[38;5;39m",
    symbol_macro="\033[38;5;177m",
    symbol_variable="\033[38;5;84m",
    symbol_special_form="\033[1;38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    header="",
    query="",
    source_header="",
    marked="",
    message="",
    preview_border="",
    doc_text="",
    action_menu="",
    namespace="",
    symbol_function="",
    symbol_macro="",
    symbol_variable="",
    symbol_special_form="",
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
