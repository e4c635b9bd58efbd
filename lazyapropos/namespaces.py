"""Namespace exclusion rules.

A rule is either an exact namespace name or a ``prefix*`` glob with a single
trailing star. Rules are configuration and never change during a session.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

DEFAULT_EXCLUDED_NAMESPACES: tuple[str, ...] = (
    "cider.*",
    "refactor-nrepl.*",
    "nrepl.*",
)


def rule_matches(ns: str, rule: str) -> bool:
    """Return whether one exclusion rule covers ``ns``."""
    if rule == ns:
        return True
    return rule.endswith("*") and ns.startswith(rule[:-1])


def is_excluded(ns: str, rules: Iterable[str]) -> bool:
    """Return ``True`` on the first rule that matches ``ns``."""
    return any(rule_matches(ns, rule) for rule in rules)


def filter_namespaces(names: Iterable[str], rules: Sequence[str]) -> list[str]:
    """Drop excluded namespace names, keeping input order."""
    return [name for name in names if not is_excluded(name, rules)]


__all__ = [
    "DEFAULT_EXCLUDED_NAMESPACES",
    "filter_namespaces",
    "is_excluded",
    "rule_matches",
]
