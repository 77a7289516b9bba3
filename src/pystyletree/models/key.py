"""Style key grammar.

A storage key is a dotted noun path plus a (possibly empty) list of state
tags.  Each noun segment and each tag is a token of alphanumerics,
underscore, hyphen and the ``*`` wildcard.  The ``.`` character is only
valid as the separator between noun segments.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from pydantic import field_validator

from pystyletree._constants import KEY_SEPARATOR, NOUN_SEPARATOR, STATE_SEPARATOR
from pystyletree.models._base import StyleBaseModel

_TOKEN_RE = re.compile(r"[A-Za-z0-9_\-*]+")


def is_valid_token(token: str) -> bool:
    """Return ``True`` when *token* is a legal noun segment or state tag."""
    return _TOKEN_RE.fullmatch(token) is not None


def format_style_key(nouns: str, states: Sequence[str]) -> str:
    """Serialize a noun path and state tags as ``noun.path:tag-tag``.

    The state part is omitted entirely for the empty state set.
    """
    if not states:
        return nouns
    return f"{nouns}{KEY_SEPARATOR}{STATE_SEPARATOR.join(states)}"


class StyleKey(StyleBaseModel):
    """A validated ``(noun path, state tags)`` storage key."""

    nouns: str
    states: tuple[str, ...] = ()

    @field_validator("nouns")
    @classmethod
    def _check_nouns(cls, value: str) -> str:
        if not value:
            raise ValueError("noun path must be non-empty")
        for segment in value.split(NOUN_SEPARATOR):
            if not segment:
                raise ValueError(f"noun path {value!r} contains an empty segment")
            if not is_valid_token(segment):
                raise ValueError(f"invalid noun segment {segment!r}")
        return value

    @field_validator("states")
    @classmethod
    def _check_states(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for tag in value:
            if not is_valid_token(tag):
                raise ValueError(f"invalid state tag {tag!r}")
        return value

    @property
    def full_key(self) -> str:
        return format_style_key(self.nouns, self.states)
