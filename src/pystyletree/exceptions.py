"""Custom exception hierarchy for pystyletree."""

from __future__ import annotations

from collections.abc import Sequence


class StyleTreeError(Exception):
    """Base exception for all pystyletree errors."""


class StyleTreeConfigError(StyleTreeError):
    """Invalid or unrecognised tree options."""


class InvalidKeyError(StyleTreeError):
    """A noun path or state tag does not satisfy the key grammar.

    Raised by :meth:`pystyletree.StyleTree.set` when key validation is
    enabled.  The rule is never stored; the caller has to correct the
    rule definition.
    """

    def __init__(
        self,
        message: str,
        *,
        nouns: str = "",
        states: Sequence[str] = (),
        reason: str = "",
    ) -> None:
        self.nouns = nouns
        self.states = tuple(states)
        self.reason = reason
        super().__init__(message)


class InvalidQueryError(StyleTreeError):
    """A match query could not be coerced into a :class:`StyleQuery`."""


class StyleDocumentError(StyleTreeError):
    """A nested style document is malformed."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)
