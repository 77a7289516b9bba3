"""Base model for pystyletree records.

Every record the library hands out (keys, queries, matches, imported
rules) inherits from :class:`StyleBaseModel`, which makes instances
immutable and rejects unknown fields.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StyleBaseModel(BaseModel):
    """Frozen, strict-shape base for pystyletree records."""

    model_config = ConfigDict(frozen=True, extra="forbid")
