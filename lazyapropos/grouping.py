"""Bucket apropos results per namespace.

Exclusion runs before bucketing so excluded namespaces never produce a group.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from .log import get_logger
from .namespaces import is_excluded
from .symbols import SymbolRecord

if TYPE_CHECKING:
    from .connection import ReplConnection

log = get_logger(__name__)

NamespaceGroups = dict[str, list[SymbolRecord]]


def group_records(records: Iterable[SymbolRecord], excluded_rules: Sequence[str]) -> NamespaceGroups:
    """Group records by namespace, dropping records in excluded namespaces."""
    groups: NamespaceGroups = {}
    for record in records:
        ns = record.namespace
        if is_excluded(ns, excluded_rules):
            continue
        groups.setdefault(ns, []).append(record)
    return groups


def fetch_groups(
    connection: ReplConnection,
    excluded_rules: Sequence[str],
    include_doc: bool,
) -> NamespaceGroups:
    """Run one unfiltered apropos search and group its results.

    Connection errors propagate; there is no partial grouping.
    """
    records = connection.search_symbols("", include_doc=include_doc)
    groups = group_records(records, excluded_rules)
    log.debug(
        "grouped %d apropos records into %d namespaces (docs=%s)",
        len(records),
        len(groups),
        include_doc,
    )
    return groups


__all__ = ["NamespaceGroups", "fetch_groups", "group_records"]
