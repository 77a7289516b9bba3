"""Query and match records."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import Field, field_validator

from pystyletree._constants import NOUN_SEPARATOR
from pystyletree.models._base import StyleBaseModel

V = TypeVar("V")


class StyleQuery(StyleBaseModel):
    """A concrete lookup: noun path segments plus the active states.

    ``nouns`` may also be given as a dotted string.  A ``*`` in a query is
    an ordinary literal segment; only stored patterns expand wildcards.
    """

    nouns: tuple[str, ...]
    states: tuple[str, ...] = ()

    @field_validator("nouns", mode="before")
    @classmethod
    def _split_dotted(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(value.split(NOUN_SEPARATOR)) if value else ()
        return value

    @field_validator("states", mode="before")
    @classmethod
    def _reject_bare_string(cls, value: Any) -> Any:
        # A bare string would otherwise be iterated character by character.
        if isinstance(value, str):
            raise ValueError("states must be a sequence of tags, not a string")
        if value is None:
            return ()
        return value


class StyleMatch(StyleBaseModel, Generic[V]):
    """A candidate rule with its specificity details.

    Parameters
    ----------
    key : str
        Serialized storage key (``noun.path`` or ``noun.path:tag-tag``).
    value
        The stored payload.
    score : int
        ``matching_nouns * 100 + matching_states``.
    matching_nouns : int
        Literal (non-wildcard) noun segments in the pattern.
    matching_states : int
        Explicit (non-wildcard) state tags in the pattern.
    """

    key: str
    value: V
    score: int = Field(ge=0)
    matching_nouns: int = Field(ge=0)
    matching_states: int = Field(ge=0)
