"""Fuzzy query matching for picker candidates.

Substring hits always match; otherwise query characters must appear in order.
Scores favor contiguous runs and matches at word boundaries.
"""

from __future__ import annotations

WORD_BOUNDARIES = "/_-. "


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``candidate`` against ``query``; ``None`` when it does not match."""
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in WORD_BOUNDARIES:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def substring_index(query: str, candidate: str) -> int | None:
    """Case-insensitive substring position, ``0`` for an empty query."""
    if not query:
        return 0
    idx = candidate.casefold().find(query.casefold())
    if idx < 0:
        return None
    return idx


def matches_query(query: str, candidate: str) -> bool:
    """Return whether every whitespace-separated query term matches.

    Terms are matched independently, so ``"core red"`` finds
    ``clojure.core/reduce``.
    """
    for term in query.split():
        if substring_index(term, candidate) is not None:
            continue
        if fuzzy_score(term, candidate) is None:
            return False
    return True


__all__ = ["fuzzy_score", "matches_query", "substring_index"]
