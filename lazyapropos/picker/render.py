"""Frame rendering for picker sessions.

Builds full-screen rows from ``PickerSession`` state: a header with buffer
name and query, source headers, candidate blocks (multiline sources expand to
several rows), an optional preview pane or action menu, and a status row.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import clip_ansi_line, pad_ansi_line
from ..ui_theme import DEFAULT_THEME, UITheme
from .session import PickerSession

PREVIEW_MAX_FRACTION = 3


@dataclass(frozen=True)
class ListRow:
    """One list-area row; ``entry_index`` is ``None`` for source headers."""

    text: str
    entry_index: int | None
    first_line: bool = True


def build_list_rows(session: PickerSession, theme: UITheme = DEFAULT_THEME) -> list[ListRow]:
    """Flatten sources and their visible candidates into display rows."""
    rows: list[ListRow] = []
    last_source: int | None = None
    for index, entry in enumerate(session.entries):
        if entry.source_index != last_source:
            source = session.sources[entry.source_index]
            rows.append(ListRow(f"{theme.source_header}{source.name}{theme.reset}", None))
            last_source = entry.source_index
        source = session.sources[entry.source_index]
        lines = entry.candidate.label.split("\n") if source.multiline else [entry.candidate.label.split("\n", 1)[0]]
        mark = f"{theme.marked}*{theme.reset}" if session.is_marked(entry) else " "
        for line_no, line in enumerate(lines):
            prefix = f"{mark} " if line_no == 0 else "  "
            rows.append(ListRow(f"{prefix}{line}", index, first_line=line_no == 0))
    return rows


def _scroll_to_selection(session: PickerSession, rows: list[ListRow], visible: int) -> None:
    """Adjust ``session.list_start`` so the selected candidate block is visible.

    The source header above the block is kept in view when there is room.
    """
    block = [idx for idx, row in enumerate(rows) if row.entry_index == session.selected]
    if not block:
        session.list_start = 0
        return
    first, last = block[0], block[-1]
    top = first
    if first > 0 and rows[first - 1].entry_index is None and last - first + 1 < visible:
        top = first - 1
    if last - first + 1 > visible:
        session.list_start = first
    elif top < session.list_start:
        session.list_start = top
    elif last >= session.list_start + visible:
        session.list_start = last - visible + 1
    session.list_start = max(0, min(session.list_start, len(rows) - visible))


def _action_menu_rows(session: PickerSession, width: int, height: int, theme: UITheme) -> list[str]:
    """Menu rows sized to leave the header, one list row and the status visible."""
    source = session.current_source()
    actions = source.actions if source is not None else ()
    budget = max(1, height - 3)
    out = [f"{theme.preview_border}{'-' * width}{theme.reset}"] if budget > 1 else []
    shown = budget - len(out)
    start = max(0, min(session.action_menu_selected - shown + 1, len(actions) - shown))
    for idx in range(start, min(len(actions), start + shown)):
        marker = ">" if idx == session.action_menu_selected else " "
        label = f"{marker} {theme.action_menu}{actions[idx].label}{theme.reset}"
        if idx == session.action_menu_selected:
            label = f"{theme.reverse}{label}"
        out.append(label)
    return out


def _bottom_pane(session: PickerSession, width: int, height: int, theme: UITheme) -> list[str]:
    if session.action_menu_open:
        return _action_menu_rows(session, width, height, theme)
    if not session.preview_lines:
        return []
    budget = max(1, height // PREVIEW_MAX_FRACTION)
    return [f"{theme.preview_border}{'-' * width}{theme.reset}", *session.preview_lines[: budget - 1]]


def render_frame(
    session: PickerSession,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Render exactly ``height`` rows of at most ``width`` columns."""
    width = max(1, width)
    height = max(3, height)
    header = (
        f"{theme.header}{session.options.buffer_name}{theme.reset} "
        f"{theme.query}> {session.query}{theme.reset}"
    )
    bottom = _bottom_pane(session, width, height, theme)
    status = f"{theme.message}{session.message or f' {len(session.entries)} candidates'}{theme.reset}"
    visible = max(1, height - 2 - len(bottom))

    rows = build_list_rows(session, theme)
    _scroll_to_selection(session, rows, visible)
    out = [clip_ansi_line(header, width) + theme.reset]
    for row in rows[session.list_start : session.list_start + visible]:
        text = pad_ansi_line(row.text, width)
        if row.entry_index is not None and row.entry_index == session.selected:
            if theme.reset:
                text = text.replace(theme.reset, theme.reset + theme.reverse)
            out.append(f"{theme.reverse}{text}{theme.reset}")
        else:
            out.append(text + theme.reset)
    while len(out) < 1 + visible:
        out.append("")
    out.extend(clip_ansi_line(line, width) + theme.reset for line in bottom)
    out.append(clip_ansi_line(status, width) + theme.reset)
    return out[:height]


__all__ = ["ListRow", "build_list_rows", "render_frame"]
