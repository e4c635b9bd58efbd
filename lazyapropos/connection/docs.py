"""Render ``info`` responses as terminal documentation.

Arglists are highlighted with Pygments' Clojure lexer; everything else is
plain text wrapped to the terminal width.
"""

from __future__ import annotations

from collections.abc import Mapping

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import ClojureLexer
from pygments.util import ClassNotFound

from ..candidates import default_doc_width, wrap_doc
from ..symbols import stylize
from ..ui_theme import DEFAULT_THEME, UITheme

DEFAULT_PYGMENTS_STYLE = "monokai"
_FORMATTERS: dict[str, Terminal256Formatter] = {}


def _formatter_for_style(style: str) -> Terminal256Formatter:
    """Return cached Pygments formatter, falling back to the default style."""
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        formatter = Terminal256Formatter(style=style)
    except ClassNotFound:
        formatter = Terminal256Formatter(style=DEFAULT_PYGMENTS_STYLE)
    _FORMATTERS[style] = formatter
    return formatter


def highlight_clojure(source: str, style: str = DEFAULT_PYGMENTS_STYLE) -> str:
    """Colorize a Clojure snippet without a trailing newline."""
    return highlight(source, ClojureLexer(), _formatter_for_style(style)).rstrip("\n")


def _arglists(info: Mapping[str, object]) -> list[str]:
    raw = info.get("arglists-str")
    if not isinstance(raw, str) or not raw.strip():
        return []
    text = raw.strip()
    if text.startswith("(") and text.endswith(")"):
        text = text[1:-1]
    return [line.strip() for line in text.splitlines() if line.strip()]


def render_doc(
    info: Mapping[str, object],
    *,
    theme: UITheme = DEFAULT_THEME,
    style: str = DEFAULT_PYGMENTS_STYLE,
    no_color: bool = False,
    width: int | None = None,
) -> str:
    """Format one ``info`` response as a doc block."""
    ns = info.get("ns")
    name = info.get("name")
    if isinstance(ns, str) and isinstance(name, str) and name:
        title = f"{ns}/{name}"
    elif isinstance(ns, str):
        title = ns
    else:
        title = str(name or "")

    lines = [stylize(title, theme.header, theme)]
    for arglist in _arglists(info):
        lines.append(f"  {arglist if no_color else highlight_clojure(arglist, style)}")
    if info.get("macro"):
        lines.append(stylize("  Macro", theme.symbol_macro, theme))
    if info.get("special-form"):
        lines.append(stylize("  Special Form", theme.symbol_special_form, theme))

    doc = info.get("doc")
    wrapped = wrap_doc(doc if isinstance(doc, str) else None, width or default_doc_width())
    if wrapped:
        lines.append(wrapped)
    location = _location(info)
    if location:
        lines.append(stylize(f"  {location}", theme.message, theme))
    return "\n".join(lines)


def _location(info: Mapping[str, object]) -> str:
    file_ref = info.get("file")
    if not isinstance(file_ref, str) or not file_ref:
        return ""
    line = info.get("line")
    if isinstance(line, int) and not isinstance(line, bool):
        return f"{file_ref}:{line}"
    return file_ref


__all__ = ["highlight_clojure", "render_doc"]
