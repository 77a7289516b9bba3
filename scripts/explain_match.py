#!/usr/bin/env python3
"""Show how a style document resolves a query.

Lists every candidate rule with its score, best first.

Usage
-----
    python scripts/explain_match.py styles.json button.icon
    python scripts/explain_match.py styles.json toolbar.button.icon --state hover --state disabled
    python scripts/explain_match.py --hierarchy styles.json toolbar.button.icon
    python scripts/explain_match.py --no-validate styles.json button.icon
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from pystyletree import StyleQuery, StyleTreeError, StyleTreeOptions, load_style_file

MAX_VAL_WIDTH = 60


def _truncate(val: Any, width: int = MAX_VAL_WIDTH) -> str:
    s = json.dumps(val, default=str)
    if len(s) <= width:
        return s
    return s[: width - 3] + "..."


def main() -> int:
    parser = argparse.ArgumentParser(description="Explain style rule matching for a query.")
    parser.add_argument("document", help="JSON style document")
    parser.add_argument("nouns", help="Dotted noun path to query, e.g. toolbar.button.icon")
    parser.add_argument("--state", action="append", default=[], help="Active state (repeatable)")
    parser.add_argument("--hierarchy", action="store_true", help="Fall back to the leaf noun when nothing matches")
    parser.add_argument("--no-validate", action="store_true", help="Accept keys outside the token grammar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        tree = load_style_file(args.document, options=StyleTreeOptions(validate_keys=not args.no_validate))
    except StyleTreeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    query = StyleQuery(nouns=args.nouns, states=args.state)
    print(f"Rules loaded: {tree.size}")
    print(f"Query: nouns={list(query.nouns)} states={list(query.states)}")
    print()

    if args.hierarchy:
        effective, matches = tree.resolve_hierarchy(query)
        if effective != query:
            print(f"No hierarchical match, falling back to leaf {effective.nouns[0]!r}")
    else:
        matches = tree.find_all_matches(query)

    if not matches:
        print("No matching rule.")
        return 0

    key_w = max(max(len(m.key) for m in matches), 3)
    header = f"{'#':>3}  {'Key':<{key_w}}  {'Score':>5}  {'N':>2}  {'S':>2}  Value"
    print(header)
    print("─" * len(header))
    for rank, match in enumerate(matches, start=1):
        print(
            f"{rank:>3}  {match.key:<{key_w}}  {match.score:>5}  {match.matching_nouns:>2}  "
            f"{match.matching_states:>2}  {_truncate(match.value)}"
        )

    print(f"\nBest: {matches[0].key}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
