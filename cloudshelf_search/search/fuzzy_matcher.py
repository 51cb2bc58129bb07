"""
Fuzzy matching engine for catalog search.

Provides typo-tolerant matching between query words and catalog text
using Levenshtein (edit) distance. All comparisons are case-insensitive.
"""

from typing import Tuple

from rapidfuzz.distance import Levenshtein


def distance(a: str, b: str) -> int:
    """
    Classic edit distance between two strings.

    Counts the minimum single-character insertions, deletions and
    substitutions (each costing 1) needed to turn ``a`` into ``b``.
    Code points are the edit unit; no grapheme clustering is done.

    Examples:
        distance("kitten", "sitting") -> 3
        distance("", "abc") -> 3
    """
    return Levenshtein.distance(a or "", b or "")


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity between two strings, case-insensitive.

    Returns:
        1 - distance / max(len) over the lowercased strings, in [0, 1].
        Two empty strings are identical (1.0).
    """
    s1 = (a or "").lower()
    s2 = (b or "").lower()
    max_length = max(len(s1), len(s2))
    if max_length == 0:
        return 1.0
    return 1.0 - distance(s1, s2) / max_length


def is_match(a: str, b: str, threshold: float) -> bool:
    """Check if two strings are similar enough based on threshold."""
    return similarity(a, b) >= threshold


class FuzzyMatcher:
    """
    Fuzzy word matcher with a configurable acceptance threshold.

    Examples:
        "dun" vs "dune"        -> 0.75
        "pragmtic" vs "pragmatic" -> ~0.89
        "zxc" vs "dune"        -> 0.0
    """

    DEFAULT_THRESHOLD = 0.6  # 60% similarity to count as a fuzzy hit

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        """
        Initialize fuzzy matcher.

        Args:
            threshold: Minimum similarity for a word match (0-1)
        """
        self.threshold = threshold

    def similarity(self, query: str, target: str) -> float:
        return similarity(query, target)

    def match(self, query: str, target: str) -> Tuple[bool, float]:
        """
        Check if query matches target with fuzzy matching.

        Args:
            query: Query word (e.g., "atomc")
            target: Target word (e.g., "atomic")

        Returns:
            Tuple of (matches: bool, similarity_score: float)
        """
        score = similarity(query, target)
        return (score >= self.threshold, score)

    def get_stats(self) -> dict:
        """
        Get matcher configuration.

        Returns:
            Dictionary with matcher settings
        """
        return {
            "threshold": self.threshold,
            "algorithm": "levenshtein",
            "backend": "rapidfuzz",
        }
