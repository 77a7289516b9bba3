"""pystyletree - Specificity-ranked style rule matching for noun paths and states."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pystyletree")
except PackageNotFoundError:
    __version__ = "0+local"
from pystyletree.config import StyleTreeOptions
from pystyletree.exceptions import (
    InvalidKeyError,
    InvalidQueryError,
    StyleDocumentError,
    StyleTreeConfigError,
    StyleTreeError,
)
from pystyletree.ingestion import from_json, iter_document_rules, load_style_file
from pystyletree.models import StyleKey, StyleMatch, StyleQuery, StyleRule
from pystyletree.tree import MatchScore, StyleTree, calculate_match_score, normalize_states

__all__ = [
    "__version__",
    "InvalidKeyError",
    "InvalidQueryError",
    "MatchScore",
    "StyleDocumentError",
    "StyleKey",
    "StyleMatch",
    "StyleQuery",
    "StyleRule",
    "StyleTree",
    "StyleTreeConfigError",
    "StyleTreeError",
    "StyleTreeOptions",
    "calculate_match_score",
    "from_json",
    "iter_document_rules",
    "load_style_file",
    "normalize_states",
]
