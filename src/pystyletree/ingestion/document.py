"""Style document import.

Converts a nested declarative document into flat rules::

    {
        "button": {
            "padding": {"$*": {"x": 4, "y": 4}},
            "icon": {
                "$*": {"size": 40},
                "$hover": {"size": 80},
                "$disabled,hover": {"size": 32},
            },
        },
    }

Ordinary keys build up the noun path by nesting.  Keys carrying the state
prefix (``$`` by default) hold the value for one state variant at that
depth: ``$*`` is the base wildcard state, ``$a,b`` the state set
``{a, b}``.  A mapping under a state key is flattened: its keys extend the
noun path and every scalar leaf becomes one rule carrying that state, so
the document above yields ``button.padding.x:*`` and
``button.icon.size:hover``.  An ordinary key whose value is not a mapping
is a stateless rule at the extended path.

The tree itself knows nothing about this format; the importer only drives
:meth:`StyleTree.set`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from pystyletree._constants import NOUN_SEPARATOR, STATE_LIST_DELIMITER, STATE_PREFIX, WILDCARD
from pystyletree.config import StyleTreeOptions
from pystyletree.exceptions import StyleDocumentError
from pystyletree.models.rule import StyleRule
from pystyletree.tree.store import StyleTree

_logger = logging.getLogger(__name__)


def parse_state_key(
    key: str,
    *,
    state_prefix: str = STATE_PREFIX,
    delimiter: str = STATE_LIST_DELIMITER,
    path: str = "",
) -> tuple[str, ...]:
    """Turn a ``$tag,tag`` document key into state tags.

    ``$*`` yields the base wildcard ``("*",)``.
    """
    body = key[len(state_prefix) :].strip()
    if body == WILDCARD:
        return (WILDCARD,)
    tags = tuple(tag.strip() for tag in body.split(delimiter))
    if not body or any(not tag for tag in tags):
        raise StyleDocumentError(f"Empty state tag in {key!r} at {path or '<root>'}", path=path)
    return tags


def _walk_state_block(
    value: Any,
    nouns: tuple[str, ...],
    states: tuple[str, ...],
    *,
    state_prefix: str,
) -> Iterator[StyleRule]:
    """Flatten the payload of a ``$state`` key into one rule per scalar leaf."""
    path = NOUN_SEPARATOR.join(nouns)
    if not isinstance(value, Mapping):
        yield StyleRule(nouns=path, states=states, value=value)
        return
    for raw_key, child in value.items():
        key = str(raw_key)
        if key.startswith(state_prefix):
            raise StyleDocumentError(f"State key {key!r} nested inside a state block", path=path)
        yield from _walk_state_block(child, (*nouns, key), states, state_prefix=state_prefix)


def _walk(
    node: Mapping[str, Any],
    nouns: tuple[str, ...],
    *,
    state_prefix: str,
    delimiter: str,
) -> Iterator[StyleRule]:
    path = NOUN_SEPARATOR.join(nouns)
    for raw_key, value in node.items():
        key = str(raw_key)
        if key.startswith(state_prefix):
            if not nouns:
                raise StyleDocumentError(f"State key {key!r} has no noun path above it", path=path)
            states = parse_state_key(key, state_prefix=state_prefix, delimiter=delimiter, path=path)
            yield from _walk_state_block(value, nouns, states, state_prefix=state_prefix)
            continue

        child = (*nouns, key)
        if isinstance(value, Mapping):
            yield from _walk(value, child, state_prefix=state_prefix, delimiter=delimiter)
        else:
            yield StyleRule(nouns=NOUN_SEPARATOR.join(child), states=(), value=value)


def iter_document_rules(
    document: Mapping[str, Any],
    *,
    state_prefix: str = STATE_PREFIX,
    delimiter: str = STATE_LIST_DELIMITER,
) -> Iterator[StyleRule]:
    """Yield one :class:`StyleRule` per leaf/state variant, depth-first in document order.

    Raises
    ------
    StyleDocumentError
        The document is not a mapping, a state key sits at the root, or a
        state key has an empty tag.
    """
    if not isinstance(document, Mapping):
        raise StyleDocumentError(f"Style document must be a mapping, got {type(document).__name__}")
    if not state_prefix:
        raise StyleDocumentError("state_prefix must be non-empty")
    yield from _walk(document, (), state_prefix=state_prefix, delimiter=delimiter)


def from_json(
    document: Mapping[str, Any],
    *,
    options: StyleTreeOptions | Mapping[str, Any] | None = None,
    tree: StyleTree[Any] | None = None,
    state_prefix: str = STATE_PREFIX,
    delimiter: str = STATE_LIST_DELIMITER,
) -> StyleTree[Any]:
    """Build (or extend) a :class:`StyleTree` from a nested style document.

    Each rule is set independently; an :class:`~pystyletree.exceptions.InvalidKeyError`
    for one rule leaves the rules already set in place.
    """
    target: StyleTree[Any] = tree if tree is not None else StyleTree(options)
    count = 0
    for rule in iter_document_rules(document, state_prefix=state_prefix, delimiter=delimiter):
        target.set(rule.nouns, rule.states, rule.value)
        count += 1
    _logger.debug("Imported %d style rules", count)
    return target


def load_style_file(
    path: str | Path,
    *,
    options: StyleTreeOptions | Mapping[str, Any] | None = None,
    tree: StyleTree[Any] | None = None,
    state_prefix: str = STATE_PREFIX,
    delimiter: str = STATE_LIST_DELIMITER,
) -> StyleTree[Any]:
    """Read a UTF-8 JSON style document and import it with :func:`from_json`."""
    file_path = Path(path)
    try:
        document = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise StyleDocumentError(f"Cannot read style file {file_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise StyleDocumentError(f"Style file {file_path} is not valid JSON: {exc}") from exc
    return from_json(
        document,
        options=options,
        tree=tree,
        state_prefix=state_prefix,
        delimiter=delimiter,
    )
