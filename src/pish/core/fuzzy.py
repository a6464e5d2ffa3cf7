"""Subsequence fuzzy matching used by executable search."""

from __future__ import annotations

from collections.abc import Iterable

WORD_BOUNDARY_CHARS = frozenset("-_.+")


def match_score(query: str, target: str) -> int | None:
    """Score a fuzzy match (lower is better, None means no match).

    All characters of the query must appear in the target in order,
    case-insensitively.

    Scoring priorities:
    - Exact prefix match: best score
    - Matches at word boundaries (after -, _, ., +): bonus
    - Consecutive character matches: bonus
    - Gaps between matched characters: penalty
    - Shorter names preferred over longer ones

    Examples:
        >>> match_score("gst", "git-status") is not None
        True
        >>> match_score("xyz", "ls") is None
        True
    """
    query_lower = query.lower()
    target_lower = target.lower()

    if target_lower.startswith(query_lower):
        return -1000 + len(target)

    target_idx = 0
    score = 0
    prev_match_idx = -1

    for char in query_lower:
        idx = target_lower.find(char, target_idx)
        if idx == -1:
            return None

        if idx == 0 or target_lower[idx - 1] in WORD_BOUNDARY_CHARS:
            score -= 10

        if idx == prev_match_idx + 1:
            score -= 5

        score += idx - target_idx

        prev_match_idx = idx
        target_idx = idx + 1

    score += len(target) // 10

    return score


def fuzzy_filter(query: str, candidates: Iterable[str]) -> list[str]:
    """Return the candidates matching query, best match first.

    Ties are broken alphabetically.
    """
    scored: list[tuple[int, str]] = []
    for candidate in candidates:
        score = match_score(query, candidate)
        if score is not None:
            scored.append((score, candidate))

    scored.sort(key=lambda x: (x[0], x[1]))
    return [candidate for _score, candidate in scored]
