"""Deterministic in-memory style rule store.

Rules live in a two-level ordered mapping::

    "nav.button.bgColor" -> {
        ()                       -> "black",  # no states
        ("*",)                   -> "red",    # base wildcard state
        ("hover",)               -> "blue",
        ("disabled", "selected") -> "gray",
    }

Insertion order of noun paths, then of state variants within a noun path,
is the tie-break for candidates of equal specificity.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from pystyletree._constants import NOUN_SEPARATOR
from pystyletree.config import StyleTreeOptions, coerce_options
from pystyletree.exceptions import InvalidKeyError, InvalidQueryError
from pystyletree.models.key import StyleKey, format_style_key
from pystyletree.models.query import StyleMatch, StyleQuery
from pystyletree.tree.scoring import calculate_match_score, normalize_states

_logger = logging.getLogger(__name__)

V = TypeVar("V")

NounPath = str | Sequence[str]
QueryLike = StyleQuery | Mapping[str, Any]
OverwriteCallback = Callable[[str, Any, Any], None]


@dataclass(slots=True)
class _NounBranch:
    """All state variants stored under one noun path."""

    segments: tuple[str, ...]
    variants: dict[tuple[str, ...], Any] = field(default_factory=dict)


def _noun_key(nouns: NounPath) -> str:
    if isinstance(nouns, str):
        return nouns
    return NOUN_SEPARATOR.join(nouns)


def _coerce_query(query: QueryLike) -> StyleQuery:
    if isinstance(query, StyleQuery):
        return query
    if not isinstance(query, Mapping):
        raise InvalidQueryError(f"Query must be a StyleQuery or a mapping, got {type(query).__name__}")
    try:
        return StyleQuery.model_validate(dict(query))
    except ValidationError as exc:
        raise InvalidQueryError(f"Invalid style query: {exc}") from exc


class StyleTree(Generic[V]):
    """Rule store with ranked wildcard/state matching.

    Usage::

        tree = StyleTree()
        tree.set("nav.button.bgColor", ["*"], "red")
        tree.set("nav.button.bgColor", ["hover"], "blue")
        tree.match({"nouns": ["nav", "button", "bgColor"], "states": ["hover"]})  # "blue"

    The store is plain data: every call completes synchronously.  Callers
    sharing a tree between threads must serialize writers themselves;
    concurrent readers are safe while no writer is active.
    """

    def __init__(
        self,
        options: StyleTreeOptions | Mapping[str, Any] | None = None,
        *,
        on_overwrite: OverwriteCallback | None = None,
    ) -> None:
        self._options = coerce_options(options)
        self._on_overwrite = on_overwrite
        self._styles: dict[str, _NounBranch] = {}

    @property
    def options(self) -> StyleTreeOptions:
        return self._options

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def _state_key(self, states: Iterable[str]) -> tuple[str, ...]:
        if isinstance(states, str):
            raise TypeError("states must be a sequence of tags, not a string")
        if self._options.auto_sort_states:
            return normalize_states(states)
        return tuple(states)

    def _build_keys(self, nouns: NounPath, states: Iterable[str]) -> tuple[str, tuple[str, ...]]:
        return _noun_key(nouns), self._state_key(states)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def set(self, nouns: NounPath, states: Iterable[str], value: V) -> None:
        """Store *value* for a noun path and state set.

        Setting an existing key replaces its value; the overwrite is
        logged and reported to ``on_overwrite`` because repeated keys
        usually point at a configuration mistake.

        Parameters
        ----------
        nouns
            Dotted noun path (``"navigation.button.icon"``) or its segments.
            ``*`` segments match any single query segment.
        states
            ``[]`` for no state constraint, ``["*"]`` for the base wildcard
            state, otherwise the tags the rule requires.
        value
            Opaque payload.

        Raises
        ------
        InvalidKeyError
            Key validation is enabled and the key violates the grammar.
        """
        noun_key, state_key = self._build_keys(nouns, states)

        if self._options.validate_keys:
            try:
                StyleKey(nouns=noun_key, states=state_key)
            except ValidationError as exc:
                reason = "; ".join(str(error["msg"]) for error in exc.errors())
                raise InvalidKeyError(
                    f"Invalid style key {format_style_key(noun_key, state_key)!r}: {reason}",
                    nouns=noun_key,
                    states=state_key,
                    reason=reason,
                ) from exc

        branch = self._styles.get(noun_key)
        if branch is None:
            branch = _NounBranch(segments=tuple(noun_key.split(NOUN_SEPARATOR)))
            self._styles[noun_key] = branch

        if state_key in branch.variants:
            full_key = format_style_key(noun_key, state_key)
            _logger.warning("Overwriting existing style key %r", full_key)
            if self._on_overwrite is not None:
                self._on_overwrite(full_key, branch.variants[state_key], value)

        branch.variants[state_key] = value

    def get(self, nouns: NounPath, states: Iterable[str] = ()) -> V | None:
        """Return the value stored under exactly this key, or ``None``.

        No wildcard expansion and no scoring: a ``*`` segment or tag only
        finds a rule stored with that literal ``*``.
        """
        noun_key, state_key = self._build_keys(nouns, states)
        branch = self._styles.get(noun_key)
        if branch is None:
            return None
        return branch.variants.get(state_key)

    def has(self, nouns: NounPath, states: Iterable[str] = ()) -> bool:
        """Return ``True`` if a value is stored under exactly this key."""
        noun_key, state_key = self._build_keys(nouns, states)
        branch = self._styles.get(noun_key)
        return branch is not None and state_key in branch.variants

    def delete(self, nouns: NounPath, states: Iterable[str] = ()) -> bool:
        """Remove the rule stored under exactly this key.

        Returns ``True`` if a rule was removed.  A noun path whose last
        state variant is removed disappears from iteration order; setting
        it again appends it at the end.
        """
        noun_key, state_key = self._build_keys(nouns, states)
        branch = self._styles.get(noun_key)
        if branch is None or state_key not in branch.variants:
            return False
        del branch.variants[state_key]
        if not branch.variants:
            del self._styles[noun_key]
        _logger.debug("Deleted style key %r", format_style_key(noun_key, state_key))
        return True

    def clear(self) -> None:
        """Remove every rule."""
        self._styles.clear()

    @property
    def size(self) -> int:
        """Total number of state variants across all noun paths."""
        return sum(len(branch.variants) for branch in self._styles.values())

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, options={self._options!r})"

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def keys(self) -> Iterator[str]:
        """Serialized keys in ``noun.path:tag-tag`` form, in insertion order."""
        for noun_key, branch in self._styles.items():
            for state_key in branch.variants:
                yield format_style_key(noun_key, state_key)

    def values(self) -> Iterator[V]:
        for branch in self._styles.values():
            yield from branch.variants.values()

    def entries(self) -> Iterator[tuple[str, V]]:
        """``(serialized key, value)`` pairs, in insertion order."""
        for noun_key, branch in self._styles.items():
            for state_key, value in branch.variants.items():
                yield format_style_key(noun_key, state_key), value

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def find_all_matches(self, query: QueryLike) -> list[StyleMatch[V]]:
        """Every candidate rule for *query*, most specific first.

        Score is ``literal noun segments * 100 + explicit state tags``.
        Ties keep insertion order (the sort is stable).
        """
        resolved = _coerce_query(query)
        target_nouns = resolved.nouns
        target_states = frozenset(resolved.states)

        matches: list[StyleMatch[V]] = []
        for noun_key, branch in self._styles.items():
            if len(branch.segments) != len(target_nouns):
                continue
            for state_key, value in branch.variants.items():
                result = calculate_match_score(branch.segments, state_key, target_nouns, target_states)
                if result is None:
                    continue
                matches.append(
                    StyleMatch(
                        key=format_style_key(noun_key, state_key),
                        value=value,
                        score=result.score,
                        matching_nouns=result.matching_nouns,
                        matching_states=result.matching_states,
                    )
                )

        matches.sort(key=lambda match: match.score, reverse=True)
        return matches

    def find_best_match(self, query: QueryLike) -> StyleMatch[V] | None:
        """The highest-ranked candidate for *query*, or ``None``."""
        matches = self.find_all_matches(query)
        return matches[0] if matches else None

    def match(self, query: QueryLike) -> V | None:
        """Value of the best candidate for *query*, or ``None``."""
        best = self.find_best_match(query)
        return best.value if best is not None else None

    def resolve_hierarchy(self, query: QueryLike) -> tuple[StyleQuery, list[StyleMatch[V]]]:
        """Ranked candidates for *query*, falling back to the leaf noun alone.

        ``["button", "icon"]`` with no applicable rule is retried as
        ``["icon"]`` with the same states.  Only the leaf is tried, not
        every suffix.  Returns the query that produced the ranking with
        the ranking itself.
        """
        resolved = _coerce_query(query)
        matches = self.find_all_matches(resolved)
        if matches or len(resolved.nouns) <= 1:
            return resolved, matches
        leaf = resolved.nouns[-1]
        if not leaf:
            return resolved, matches

        _logger.debug("No hierarchical style for %r, trying leaf %r", resolved.nouns, leaf)
        fallback = StyleQuery(nouns=(leaf,), states=resolved.states)
        return fallback, self.find_all_matches(fallback)

    def find_hierarchy_match(self, query: QueryLike) -> StyleMatch[V] | None:
        """Best candidate of :meth:`resolve_hierarchy`, or ``None``."""
        _, matches = self.resolve_hierarchy(query)
        return matches[0] if matches else None

    def match_hierarchy(self, query: QueryLike) -> V | None:
        """Value of :meth:`find_hierarchy_match`, or ``None``."""
        best = self.find_hierarchy_match(query)
        return best.value if best is not None else None
