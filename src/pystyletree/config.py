"""Tree configuration for pystyletree."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pystyletree.exceptions import StyleTreeConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


# Document-style (camelCase) option names accepted next to the field names.
_OPTION_ALIASES: dict[str, str] = {
    "validateKeys": "validate_keys",
    "autoSortStates": "auto_sort_states",
}


@dataclasses.dataclass(frozen=True)
class StyleTreeOptions:
    """Style tree options.

    Parameters
    ----------
    validate_keys : bool
        Reject noun paths and state tags outside the key grammar
        (alphanumerics, ``_``, ``-`` and the ``*`` wildcard; ``.`` only
        between noun segments).  Disable for trusted callers that need
        arbitrary tokens.
    auto_sort_states : bool
        Normalize state tags (deduplicate and sort) before they become part
        of a storage key, so ``["selected", "disabled"]`` and
        ``["disabled", "selected"]`` address the same rule.  When disabled
        the caller is responsible for consistent tag order.
    """

    validate_keys: bool = True
    auto_sort_states: bool = True

    @classmethod
    def from_env(cls, **overrides: Any) -> StyleTreeOptions:
        """Create options from environment variables.

        Reads ``PYSTYLETREE_VALIDATE_KEYS`` and
        ``PYSTYLETREE_AUTO_SORT_STATES``.  Explicit keyword arguments
        override environment values.
        """
        env = os.environ
        defaults = cls()

        options_kwargs: dict[str, Any] = {
            "validate_keys": _env_bool(env.get("PYSTYLETREE_VALIDATE_KEYS"), defaults.validate_keys),
            "auto_sort_states": _env_bool(env.get("PYSTYLETREE_AUTO_SORT_STATES"), defaults.auto_sort_states),
        }
        options_kwargs.update(overrides)

        return cls(**options_kwargs)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> StyleTreeOptions:
        """Create options from a plain mapping.

        Both the field names and their camelCase spellings
        (``validateKeys``, ``autoSortStates``) are recognised.

        Raises
        ------
        StyleTreeConfigError
            On unknown option names or non-boolean values.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, bool] = {}
        for raw_key, value in mapping.items():
            key = _OPTION_ALIASES.get(raw_key, raw_key)
            if key not in known:
                raise StyleTreeConfigError(f"Unknown style tree option: {raw_key!r}")
            if not isinstance(value, bool):
                raise StyleTreeConfigError(f"Option {raw_key!r} must be a bool, got {type(value).__name__}")
            kwargs[key] = value
        return cls(**kwargs)


def coerce_options(options: StyleTreeOptions | Mapping[str, Any] | None) -> StyleTreeOptions:
    """Return *options* as a :class:`StyleTreeOptions` instance."""
    if options is None:
        return StyleTreeOptions()
    if isinstance(options, StyleTreeOptions):
        return options
    if isinstance(options, Mapping):
        return StyleTreeOptions.from_mapping(options)
    raise StyleTreeConfigError(f"Unsupported options type: {type(options).__name__}")
