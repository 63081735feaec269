"""
reference/fuzzy.py — tolerant matching of short labels and dictionary names.

match_closest(candidate, targets, max_distance) -> target | None

Comparison is case-insensitive on whitespace-trimmed strings, using the
Levenshtein edit distance. Tolerance escalates in tiers (0, then 1, then 2, never
more than MAX_DISTANCE): an exact match always wins over a fuzzy one. Within a
tier the target whose length is closest to the candidate's wins; remaining ties
go to the target listed first.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from rapidfuzz.distance import Levenshtein

MAX_DISTANCE = 2


class MatchClosest(Protocol):
    """Any matcher honouring the contract above (tests may inject a stub)."""

    def __call__(
        self, candidate: str, targets: Sequence[str], max_distance: int
    ) -> str | None: ...


def match_distance(
    candidate: str,
    targets: Sequence[str],
    max_distance: int,
) -> tuple[str, int] | None:
    """Like match_closest, but also returns the tier the match was found at."""
    needle = candidate.strip().lower()
    if not needle:
        return None
    limit = min(max(max_distance, 0), MAX_DISTANCE)

    scored: list[tuple[int, int, int, str]] = []
    for index, target in enumerate(targets):
        hay = target.strip().lower()
        # score_cutoff makes rapidfuzz return limit + 1 for anything further away
        distance = Levenshtein.distance(needle, hay, score_cutoff=limit)
        if distance <= limit:
            scored.append((distance, abs(len(hay) - len(needle)), index, target))

    if not scored:
        return None
    distance, _, _, target = min(scored)
    return target, distance


def match_closest(
    candidate: str,
    targets: Sequence[str],
    max_distance: int,
) -> str | None:
    found = match_distance(candidate, targets, max_distance)
    return found[0] if found else None
