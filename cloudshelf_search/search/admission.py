"""
Strict admission filter for scored catalog items.

Decides which scored items are relevant enough to appear in results.
There is intentionally no substring fallback: if nothing is admitted,
the result is empty, so a query like "zxczxc" never returns the
"closest" random items.
"""

import logging
from typing import List

from ..domain.entities import CatalogItem, ScoredItem

logger = logging.getLogger(__name__)


class AdmissionFilter:
    """
    Dual-threshold relevance gate.

    An item is retained only if BOTH hold:
    - max_similarity >= min_match_quality (some word matched well enough)
    - score >= min_score (the match is not a lone weak signal)
    """

    DEFAULT_MIN_MATCH_QUALITY = 0.4  # 40% allows reasonable typos
    DEFAULT_MIN_SCORE = 15.0

    def __init__(
        self,
        min_match_quality: float = DEFAULT_MIN_MATCH_QUALITY,
        min_score: float = DEFAULT_MIN_SCORE,
    ):
        """
        Initialize admission filter.

        Args:
            min_match_quality: Minimum best-similarity required (0-1)
            min_score: Minimum accumulated relevance score
        """
        self.min_match_quality = min_match_quality
        self.min_score = min_score

    def passes(self, scored: ScoredItem) -> bool:
        meets_quality = scored.max_similarity >= self.min_match_quality
        meets_score = scored.score >= self.min_score
        return meets_quality and meets_score

    def admit(self, scored_items: List[ScoredItem]) -> List[CatalogItem]:
        """
        Discard non-matching items and rank the rest.

        Args:
            scored_items: Items in catalog order with their scores

        Returns:
            Admitted items sorted by score descending; ties keep
            catalog order
        """
        admitted = []
        for scored in scored_items:
            passed = self.passes(scored)
            logger.debug(
                "Admission '%s' - score: %.1f, max similarity: %.0f%%, pass: %s",
                scored.item.title,
                scored.score,
                scored.max_similarity * 100,
                passed,
            )
            if passed:
                admitted.append(scored)

        admitted.sort(key=lambda s: s.score, reverse=True)
        return [scored.item for scored in admitted]

    def get_stats(self) -> dict:
        return {
            "min_match_quality": self.min_match_quality,
            "min_score": self.min_score,
        }
