"""Picker session state and key handling.

``PickerSession`` is the terminal-free half of the picker: query editing,
per-source filtering, selection movement across sources, marking, the action
menu and persistent-action previews. The runtime feeds it key tokens and
renders it; tests drive it directly.
"""

from __future__ import annotations

import contextlib
import io
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..ansi import strip_ansi
from ..candidates import CandidateEntry
from ..errors import AproposError
from ..fuzzy import matches_query
from ..log import get_logger
from ..sources import SourceAction, SourceDescriptor
from .keys import KeyComboBinding, KeyComboRegistry

log = get_logger(__name__)

PAGE_SIZE = 10


@dataclass(frozen=True)
class PresentOptions:
    """Per-invocation picker options.

    ``candidate_limit`` caps visible candidates per source; ``None`` means
    unbounded. ``preselect`` is matched against candidate values.
    """

    buffer_name: str
    keymap: tuple[KeyComboBinding, ...] = ()
    preselect: re.Pattern[str] | str | None = None
    candidate_limit: int | None = None


@dataclass(frozen=True)
class Selection:
    """Outcome of a committed picker session."""

    source: SourceDescriptor
    values: tuple[str, ...]
    action: SourceAction | None


@dataclass(frozen=True)
class PickerEntry:
    """One selectable candidate in display order."""

    source_index: int
    candidate: CandidateEntry


def _match_text(candidate: CandidateEntry) -> str:
    """Text the query is matched against: first label line without styling."""
    return strip_ansi(candidate.label.split("\n", 1)[0])


class PickerSession:
    """Stateful picker model over a list of sources."""

    def __init__(self, sources: Sequence[SourceDescriptor], options: PresentOptions) -> None:
        self.sources = list(sources)
        self.options = options
        self.registry = KeyComboRegistry().register_bindings(options.keymap)
        self.query = ""
        self.entries: list[PickerEntry] = []
        self.selected = 0
        self.list_start = 0
        self.marked: set[tuple[int, str]] = set()
        self.message = ""
        self.preview_lines: list[str] = []
        self.action_menu_open = False
        self.action_menu_selected = 0
        self.done = False
        self.result: Selection | None = None
        self.after_exit: Callable[[], object] | None = None
        self.dirty = True
        self._static_candidates: dict[int, list[CandidateEntry]] = {}
        self.refresh_matches(reset_selection=True)

    def _source_candidates(self, source_index: int) -> list[CandidateEntry]:
        """Resolve candidates, re-querying volatile sources on every refresh."""
        source = self.sources[source_index]
        if source.volatile:
            return source.resolve_candidates()
        cached = self._static_candidates.get(source_index)
        if cached is None:
            cached = source.resolve_candidates()
            self._static_candidates[source_index] = cached
        return cached

    def refresh_matches(self, reset_selection: bool = False) -> None:
        """Recompute visible entries from the current query."""
        previous = self.current_entry()
        limit = self.options.candidate_limit
        entries: list[PickerEntry] = []
        for source_index, source in enumerate(self.sources):
            matched = [
                candidate
                for candidate in self._source_candidates(source_index)
                if matches_query(self.query, _match_text(candidate))
            ]
            matched.sort(key=source.sort_key)
            if limit is not None:
                matched = matched[: max(0, limit)]
            entries.extend(PickerEntry(source_index, candidate) for candidate in matched)
        self.entries = entries

        if reset_selection or previous is None or previous not in entries:
            self.selected = 0
            self.list_start = 0
        else:
            self.selected = entries.index(previous)
        self.message = "" if entries else " no matches"
        self.dirty = True

    def current_entry(self) -> PickerEntry | None:
        if not self.entries:
            return None
        return self.entries[max(0, min(self.selected, len(self.entries) - 1))]

    def current_source(self) -> SourceDescriptor | None:
        entry = self.current_entry()
        return None if entry is None else self.sources[entry.source_index]

    def current_value(self) -> str | None:
        entry = self.current_entry()
        return None if entry is None else entry.candidate.value

    def _selection_changed(self) -> None:
        self.dirty = True
        self.preview_lines = []
        source = self.current_source()
        if source is not None and source.follow:
            self.run_persistent_action()

    def move_selection(self, delta: int) -> None:
        """Move selection by ``delta`` entries, clamped to list bounds."""
        if self.action_menu_open:
            source = self.current_source()
            count = len(source.actions) if source is not None else 0
            if count:
                self.action_menu_selected = max(0, min(count - 1, self.action_menu_selected + delta))
                self.dirty = True
            return
        if not self.entries:
            return
        previous = self.selected
        self.selected = max(0, min(len(self.entries) - 1, self.selected + delta))
        if self.selected != previous:
            self._selection_changed()

    def select_index(self, index: int) -> None:
        if 0 <= index < len(self.entries) and index != self.selected:
            self.selected = index
            self._selection_changed()

    def select_first_in_source(self, name: str) -> bool:
        """Move the cursor to the first visible candidate of source ``name``."""
        for index, entry in enumerate(self.entries):
            if self.sources[entry.source_index].name == name:
                self.select_index(index)
                return True
        return False

    def apply_preselect(self, pattern: re.Pattern[str] | str) -> bool:
        """Select the first candidate whose value matches ``pattern``."""
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        for index, entry in enumerate(self.entries):
            if compiled.search(entry.candidate.value):
                self.select_index(index)
                return True
        return False

    def set_query(self, query: str) -> None:
        if query == self.query:
            return
        self.query = query
        self.refresh_matches(reset_selection=True)
        self._selection_changed()

    def toggle_mark(self) -> None:
        """Toggle the mark on the current candidate when its source allows it."""
        entry = self.current_entry()
        if entry is None:
            return
        if not self.sources[entry.source_index].allow_marking:
            self.message = " marking disabled for this source"
            self.dirty = True
            return
        key = (entry.source_index, entry.candidate.value)
        if key in self.marked:
            self.marked.remove(key)
        else:
            self.marked.add(key)
        self.dirty = True
        self.move_selection(1)

    def is_marked(self, entry: PickerEntry) -> bool:
        return (entry.source_index, entry.candidate.value) in self.marked

    def _chosen_values(self, entry: PickerEntry) -> tuple[str, ...]:
        marked = sorted(value for source_index, value in self.marked if source_index == entry.source_index)
        if marked:
            return tuple(marked)
        return (entry.candidate.value,)

    def commit(self, action: SourceAction | None = None) -> None:
        """Finish the session with ``action`` (default: the source's first)."""
        entry = self.current_entry()
        if entry is None:
            self.message = " nothing selected"
            self.dirty = True
            return
        source = self.sources[entry.source_index]
        chosen = action if action is not None else source.default_action
        self.result = Selection(source=source, values=self._chosen_values(entry), action=chosen)
        self.done = True

    def abort(self) -> None:
        """Close the session without invoking anything."""
        self.result = None
        self.done = True

    def run_after_exit(self, callback: Callable[[], object]) -> None:
        """Close the session and run ``callback`` once the terminal is restored."""
        self.after_exit = callback
        self.result = None
        self.done = True

    def toggle_action_menu(self) -> None:
        source = self.current_source()
        if source is None or not source.actions:
            return
        self.action_menu_open = not self.action_menu_open
        self.action_menu_selected = 0
        self.dirty = True

    def run_persistent_action(self) -> None:
        """Run the source's persistent action without closing the session.

        Whatever the handler prints becomes the preview pane content.
        """
        entry = self.current_entry()
        if entry is None:
            return
        source = self.sources[entry.source_index]
        action = source.action_by_id(source.persistent_action)
        if action is None:
            self.message = " no persistent action"
            self.dirty = True
            return
        captured = io.StringIO()
        try:
            with contextlib.redirect_stdout(captured):
                action.handler(entry.candidate.value)
        except AproposError as exc:
            log.warning("persistent action %s failed: %s", action.action_id, exc)
            self.message = f" {exc}"
        self.preview_lines = captured.getvalue().rstrip("\n").splitlines()
        self.dirty = True

    def handle_key(self, key: str) -> None:
        """Apply one key token; keymap bindings take precedence."""
        if not key:
            return
        if self.registry.dispatch(key, self):
            self.dirty = True
            return

        if key in {"ESC", "CTRL_C", "CTRL_G"}:
            if self.action_menu_open:
                self.action_menu_open = False
                self.dirty = True
                return
            self.abort()
            return
        if key in {"UP", "CTRL_P"}:
            self.move_selection(-1)
            return
        if key in {"DOWN", "CTRL_N"}:
            self.move_selection(1)
            return
        if key == "PAGE_UP":
            self.move_selection(-PAGE_SIZE)
            return
        if key == "PAGE_DOWN":
            self.move_selection(PAGE_SIZE)
            return
        if key == "ENTER":
            if self.action_menu_open:
                source = self.current_source()
                if source is not None and source.actions:
                    self.commit(source.actions[self.action_menu_selected])
                return
            self.commit()
            return
        if key == "TAB":
            self.toggle_action_menu()
            return
        if key == "CTRL_Z":
            self.run_persistent_action()
            return
        if key == "CTRL_SPACE":
            self.toggle_mark()
            return
        if key == "BACKSPACE":
            self.set_query(self.query[:-1])
            return
        if key == "CTRL_U":
            self.set_query("")
            return
        if len(key) == 1 and key.isprintable():
            self.set_query(self.query + key)


__all__ = [
    "PAGE_SIZE",
    "PickerEntry",
    "PickerSession",
    "PresentOptions",
    "Selection",
]
