"""Deterministic specificity policy.

This module contains *no* storage.  Given a stored pattern (noun segments
plus state tags) and a concrete query it decides whether the pattern is a
candidate and how specific it is.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass

from pystyletree._constants import BASE_STATES, NOUN_WEIGHT, WILDCARD


@dataclass(frozen=True, slots=True)
class MatchScore:
    """Specificity of a candidate pattern."""

    matching_nouns: int
    matching_states: int

    @property
    def score(self) -> int:
        return self.matching_nouns * NOUN_WEIGHT + self.matching_states


def normalize_states(states: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate and lexically sort state tags."""
    return tuple(sorted(set(states)))


def is_base_states(states: Sequence[str]) -> bool:
    """Return ``True`` for the base wildcard state set ``("*",)``."""
    return tuple(states) == BASE_STATES


def explicit_states(states: Iterable[str]) -> frozenset[str]:
    """Return the state tags that constrain matching (everything but ``*``)."""
    return frozenset(tag for tag in states if tag != WILDCARD)


def match_nouns(pattern_nouns: Sequence[str], target_nouns: Sequence[str]) -> int | None:
    """Count literal pattern segments, or ``None`` when the paths are incompatible.

    Paths of different lengths never match.  A ``*`` pattern segment
    accepts any single target segment but does not count.
    """
    if len(pattern_nouns) != len(target_nouns):
        return None
    literal = 0
    for pattern, target in zip(pattern_nouns, target_nouns, strict=True):
        if pattern == WILDCARD:
            continue
        if pattern != target:
            return None
        literal += 1
    return literal


def match_states(pattern_states: Sequence[str], target_states: Collection[str]) -> int | None:
    """Count explicit pattern tags, or ``None`` when the pattern needs a missing state.

    A pattern may require fewer states than the query has active but never
    one the query lacks.  The empty set and the base wildcard both match
    unconditionally and count zero.
    """
    if is_base_states(pattern_states):
        return 0
    required = explicit_states(pattern_states)
    for tag in required:
        if tag not in target_states:
            return None
    return len(required)


def calculate_match_score(
    pattern_nouns: Sequence[str],
    pattern_states: Sequence[str],
    target_nouns: Sequence[str],
    target_states: Collection[str],
) -> MatchScore | None:
    """Score *pattern* against a query; ``None`` means it is not a candidate."""
    nouns = match_nouns(pattern_nouns, target_nouns)
    if nouns is None:
        return None
    states = match_states(pattern_states, target_states)
    if states is None:
        return None
    return MatchScore(matching_nouns=nouns, matching_states=states)
