"""Flat rule triple emitted by the document importer."""

from __future__ import annotations

from typing import Any

from pystyletree.models._base import StyleBaseModel
from pystyletree.models.key import format_style_key


class StyleRule(StyleBaseModel):
    """One ``(noun path, states, value)`` triple ready for ``StyleTree.set``."""

    nouns: str
    states: tuple[str, ...] = ()
    value: Any = None

    @property
    def key(self) -> str:
        return format_style_key(self.nouns, self.states)
