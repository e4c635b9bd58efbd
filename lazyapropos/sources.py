"""Picker source assembly for symbol and namespace browsing.

A source is one titled group of candidates with its own actions and display
flags. Symbol mode yields one source per namespace; namespace mode yields a
single source listing every namespace.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .candidates import CandidateEntry, build_candidate, build_namespace_candidate
from .grouping import fetch_groups
from .log import get_logger
from .namespaces import filter_namespaces
from .ui_theme import DEFAULT_THEME, UITheme

if TYPE_CHECKING:
    from .connection import ReplConnection

log = get_logger(__name__)

SHOW_DOC_ACTION = "show-doc"

DEFAULT_SYMBOL_ACTIONS: tuple[tuple[str, str], ...] = (
    ("Find definition", "find-definition"),
    ("Show doc", SHOW_DOC_ACTION),
    ("Look up on ClojureDocs", "lookup-external-doc"),
    ("Set namespace", "set-ns"),
)

DEFAULT_NAMESPACE_ACTIONS: tuple[tuple[str, str], ...] = (
    ("Browse namespace", "browse-ns"),
    ("Find definition", "find-definition"),
    ("Set REPL namespace", "set-ns"),
)


@dataclass(frozen=True)
class SourceAction:
    """One labeled action; ``handler`` receives the chosen candidate value."""

    action_id: str
    label: str
    handler: Callable[[str], object]


def candidate_value(candidate: CandidateEntry) -> str:
    """Sort key ordering candidates by value, independent of label styling."""
    return candidate.value


@dataclass
class SourceDescriptor:
    """Self-contained picker source consumed by :mod:`lazyapropos.picker`."""

    name: str
    candidates: list[CandidateEntry] | Callable[[], list[CandidateEntry]]
    actions: tuple[SourceAction, ...] = ()
    sort_key: Callable[[CandidateEntry], str] = candidate_value
    follow: bool = False
    multiline: bool = False
    allow_marking: bool = False
    persistent_action: str | None = None
    volatile: bool = False

    def resolve_candidates(self) -> list[CandidateEntry]:
        """Return candidate list, invoking the producer for callable sources."""
        if callable(self.candidates):
            return list(self.candidates())
        return list(self.candidates)

    def action_by_id(self, action_id: str | None) -> SourceAction | None:
        if action_id is None:
            return None
        for action in self.actions:
            if action.action_id == action_id:
                return action
        return None

    @property
    def default_action(self) -> SourceAction | None:
        return self.actions[0] if self.actions else None


def sorted_candidates(source: SourceDescriptor) -> list[CandidateEntry]:
    """Resolve a source's candidates and order them with its sort key."""
    return sorted(source.resolve_candidates(), key=source.sort_key)


def resolve_actions(
    table: Sequence[tuple[str, str]],
    handlers: Mapping[str, Callable[[str], object]],
) -> tuple[SourceAction, ...]:
    """Bind a configured ``(label, action_id)`` table to handler callables.

    Entries naming an action with no handler are skipped with a warning.
    """
    actions: list[SourceAction] = []
    for label, action_id in table:
        handler = handlers.get(action_id)
        if handler is None:
            log.warning("no handler for action %r (%s); skipping", action_id, label)
            continue
        actions.append(SourceAction(action_id=action_id, label=label, handler=handler))
    return tuple(actions)


def build_symbol_sources(
    connection: ReplConnection,
    excluded_rules: Sequence[str],
    include_doc: bool,
    follow: bool,
    *,
    actions: Sequence[SourceAction] = (),
    descending: bool = False,
    theme: UITheme = DEFAULT_THEME,
    width: int | None = None,
) -> list[SourceDescriptor]:
    """Build one source per namespace group, ordered by namespace name."""
    groups = fetch_groups(connection, excluded_rules, include_doc)
    sources: list[SourceDescriptor] = []
    for ns in sorted(groups, reverse=descending):
        candidates = [
            build_candidate(record, include_doc, width=width, theme=theme)
            for record in groups[ns]
        ]
        sources.append(
            SourceDescriptor(
                name=ns,
                candidates=candidates,
                actions=tuple(actions),
                sort_key=candidate_value,
                follow=follow,
                multiline=include_doc,
                allow_marking=False,
                persistent_action=SHOW_DOC_ACTION,
                volatile=True,
            )
        )
    return sources


def build_namespace_source(
    connection: ReplConnection,
    excluded_rules: Sequence[str],
    *,
    actions: Sequence[SourceAction] = (),
    theme: UITheme = DEFAULT_THEME,
) -> SourceDescriptor:
    """Build the single source listing every non-excluded namespace."""
    names = sorted(filter_namespaces(connection.list_namespaces(), excluded_rules))
    log.debug("namespace source with %d namespaces", len(names))
    return SourceDescriptor(
        name="Namespaces",
        candidates=[build_namespace_candidate(ns, theme) for ns in names],
        actions=tuple(actions),
        sort_key=candidate_value,
        allow_marking=False,
        volatile=True,
    )


__all__ = [
    "DEFAULT_NAMESPACE_ACTIONS",
    "DEFAULT_SYMBOL_ACTIONS",
    "SHOW_DOC_ACTION",
    "SourceAction",
    "SourceDescriptor",
    "build_namespace_source",
    "build_symbol_sources",
    "candidate_value",
    "resolve_actions",
    "sorted_candidates",
]
