"""Symbol records returned by apropos searches.

Qualified names are split on their first ``/``: ``clojure.core//`` names the
``/`` var in ``clojure.core``. Kind strings from the server are open-ended and
collapse to ``SymbolKind.OTHER`` when unknown.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .errors import MalformedSymbolName
from .ui_theme import DEFAULT_THEME, UITheme

SEPARATOR = "/"


class SymbolKind(Enum):
    FUNCTION = "function"
    MACRO = "macro"
    VARIABLE = "variable"
    SPECIAL_FORM = "special-form"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: object) -> SymbolKind:
        """Map a server ``type`` string onto the closed kind set."""
        if not isinstance(value, str):
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


def _split(qualified: str) -> tuple[str, str]:
    ns, sep, name = qualified.partition(SEPARATOR)
    if not sep:
        raise MalformedSymbolName(qualified)
    return ns, name


def symbol_name(qualified: str) -> str:
    """Return the bare symbol name after the first separator."""
    return _split(qualified)[1]


def symbol_namespace(qualified: str) -> str:
    """Return the namespace portion before the first separator."""
    return _split(qualified)[0]


def style_for(kind: SymbolKind | None, theme: UITheme = DEFAULT_THEME) -> str:
    """Return the ANSI style for ``kind``; unstyled (``""``) when unknown."""
    if kind is SymbolKind.FUNCTION:
        return theme.symbol_function
    if kind is SymbolKind.MACRO:
        return theme.symbol_macro
    if kind is SymbolKind.VARIABLE:
        return theme.symbol_variable
    if kind is SymbolKind.SPECIAL_FORM:
        return theme.symbol_special_form
    return ""


def stylize(text: str, style: str, theme: UITheme = DEFAULT_THEME) -> str:
    """Wrap ``text`` in ``style`` and the theme reset when a style is set."""
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


@dataclass(frozen=True)
class SymbolRecord:
    """One apropos hit from the REPL connection."""

    qualified_name: str
    kind: SymbolKind = SymbolKind.OTHER
    doc: str | None = None

    @property
    def namespace(self) -> str:
        return symbol_namespace(self.qualified_name)

    @property
    def name(self) -> str:
        return symbol_name(self.qualified_name)

    @classmethod
    def from_response(cls, entry: Mapping[str, object]) -> SymbolRecord:
        """Build a record from one ``apropos-matches`` entry.

        Missing or non-string names become ``""`` so the malformed value is
        reported by the parser when the record is grouped.
        """
        name = entry.get("name")
        doc = entry.get("doc")
        return cls(
            qualified_name=name if isinstance(name, str) else "",
            kind=SymbolKind.from_wire(entry.get("type")),
            doc=doc if isinstance(doc, str) else None,
        )


__all__ = [
    "SEPARATOR",
    "SymbolKind",
    "SymbolRecord",
    "style_for",
    "stylize",
    "symbol_name",
    "symbol_namespace",
]
