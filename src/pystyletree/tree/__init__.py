"""Rule store and specificity policy.

:class:`StyleTree` is the only stateful object in the library; the
scoring helpers are pure functions over stored patterns and queries.
"""

from pystyletree.tree.scoring import MatchScore, calculate_match_score, normalize_states
from pystyletree.tree.store import StyleTree

__all__ = ["MatchScore", "StyleTree", "calculate_match_score", "normalize_states"]
