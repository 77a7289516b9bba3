"""Data models for style keys, queries and matches."""

from pystyletree.models._base import StyleBaseModel
from pystyletree.models.key import StyleKey, format_style_key, is_valid_token
from pystyletree.models.query import StyleMatch, StyleQuery
from pystyletree.models.rule import StyleRule

__all__ = [
    "StyleBaseModel",
    "StyleKey",
    "StyleMatch",
    "StyleQuery",
    "StyleRule",
    "format_style_key",
    "is_valid_token",
]
