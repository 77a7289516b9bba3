"""Ingestion layer.

Converters that turn declarative style documents into flat rules and feed
them into a :class:`pystyletree.StyleTree`.
"""

from pystyletree.ingestion.document import from_json, iter_document_rules, load_style_file, parse_state_key

__all__ = ["from_json", "iter_document_rules", "load_style_file", "parse_state_key"]
