"""Display candidates built from symbol records and namespace names."""

from __future__ import annotations

import shutil
import textwrap
from dataclasses import dataclass

from .symbols import SymbolRecord, style_for, stylize
from .ui_theme import DEFAULT_THEME, UITheme

DOC_INDENT = "  "


@dataclass(frozen=True)
class CandidateEntry:
    """Picker row payload: styled ``label`` shown, ``value`` handed to actions."""

    label: str
    value: str


def default_doc_width() -> int:
    """Resolve doc wrap width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def wrap_doc(doc: str | None, width: int) -> str:
    """Word-wrap doc text into an indented block; ``None`` yields ``""``."""
    if not doc:
        return ""
    body_width = max(1, width - len(DOC_INDENT))
    out: list[str] = []
    for paragraph in doc.strip().splitlines():
        paragraph = paragraph.strip()
        if not paragraph:
            out.append("")
            continue
        out.extend(f"{DOC_INDENT}{line}" for line in textwrap.wrap(paragraph, body_width))
    return "\n".join(out)


def build_candidate(
    record: SymbolRecord,
    include_doc: bool,
    *,
    width: int | None = None,
    theme: UITheme = DEFAULT_THEME,
) -> CandidateEntry:
    """Turn one record into a candidate.

    Plain mode labels with the styled bare name. Doc mode labels with the
    styled qualified name followed by the wrapped docstring on later lines.
    """
    style = style_for(record.kind, theme)
    if not include_doc:
        return CandidateEntry(label=stylize(record.name, style, theme), value=record.qualified_name)

    wrap_width = width if width is not None else default_doc_width()
    doc_block = wrap_doc(record.doc, wrap_width)
    if doc_block and theme.doc_text:
        doc_block = "\n".join(stylize(line, theme.doc_text, theme) for line in doc_block.split("\n"))
    label = f"{stylize(record.qualified_name, style, theme)}\n{doc_block}"
    return CandidateEntry(label=label, value=record.qualified_name)


def build_namespace_candidate(ns: str, theme: UITheme = DEFAULT_THEME) -> CandidateEntry:
    """Candidate for the namespace picker: styled name, raw name as value."""
    return CandidateEntry(label=stylize(ns, theme.namespace, theme), value=ns)


__all__ = [
    "CandidateEntry",
    "build_candidate",
    "build_namespace_candidate",
    "default_doc_width",
    "wrap_doc",
]
