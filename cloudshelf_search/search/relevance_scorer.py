"""
Relevance scoring system for catalog search.

Scores catalog items against a free-text query based on direct substring
containment, prefix matches, word-level fuzzy matches and popularity.
"""

import math
from typing import Iterable, List, Optional

from ..domain.entities import CatalogItem, ScoredItem
from .fuzzy_matcher import FuzzyMatcher


class RelevanceScorer:
    """
    Calculate relevance scores for catalog items.

    Scoring phases (additive):
    1. Direct substring containment - title > author > description
    2. Prefix bonus - title or author starts with the query
    3. Word-level fuzzy matching - query words vs title/author words,
       tags and category, weighted by similarity
    4. Popularity - rating and review count, only when something matched

    Alongside the score, the best similarity observed anywhere is tracked
    so that admission can reject items that only accumulate weak signals.
    """

    # Phase 1: substring containment
    TITLE_CONTAINS_SCORE = 100
    AUTHOR_CONTAINS_SCORE = 80
    DESCRIPTION_CONTAINS_SCORE = 30
    DESCRIPTION_MATCH_QUALITY = 0.8

    # Phase 2: prefix bonus
    TITLE_PREFIX_SCORE = 50
    AUTHOR_PREFIX_SCORE = 40

    # Phase 3: fuzzy word weights (multiplied by similarity)
    TITLE_WORD_WEIGHT = 40
    AUTHOR_WORD_WEIGHT = 30
    TAG_WEIGHT = 20
    CATEGORY_WEIGHT = 15

    # Phase 4: popularity
    RATING_WEIGHT = 2
    REVIEW_COUNT_WEIGHT = 1

    # Query words this short are noise for fuzzy matching
    MIN_QUERY_WORD_LENGTH = 2

    def __init__(self, matcher: Optional[FuzzyMatcher] = None):
        """
        Initialize relevance scorer.

        Args:
            matcher: Fuzzy matcher deciding word-level hits
                     (defaults to a 0.6 threshold)
        """
        self.matcher = matcher or FuzzyMatcher()

    @property
    def fuzzy_threshold(self) -> float:
        return self.matcher.threshold

    def score(self, item: CatalogItem, query: str) -> ScoredItem:
        """
        Calculate the relevance of one item for a query.

        Args:
            item: Catalog item to score
            query: Raw free-text query

        Returns:
            ScoredItem with accumulated score and best match quality
        """
        result = ScoredItem(item=item)

        lower_query = (query or "").lower().strip()
        if not lower_query:
            return result

        title = (item.title or "").lower()
        author = (item.author or "").lower()
        description = (item.description or "").lower()

        # Phase 1: direct substring matches
        if lower_query in title:
            result.score += self.TITLE_CONTAINS_SCORE
            result.max_similarity = 1.0
            result.has_direct_match = True
        if lower_query in author:
            result.score += self.AUTHOR_CONTAINS_SCORE
            result.max_similarity = 1.0
            result.has_direct_match = True
        if lower_query in description:
            result.score += self.DESCRIPTION_CONTAINS_SCORE
            result.max_similarity = max(result.max_similarity, self.DESCRIPTION_MATCH_QUALITY)
            result.has_direct_match = True

        # Phase 2: matches at the beginning of title/author
        if title.startswith(lower_query):
            result.score += self.TITLE_PREFIX_SCORE
            result.max_similarity = 1.0
            result.has_direct_match = True
        if author.startswith(lower_query):
            result.score += self.AUTHOR_PREFIX_SCORE
            result.max_similarity = 1.0
            result.has_direct_match = True

        # Phase 3: word-by-word fuzzy matching
        title_words = title.split()
        author_words = author.split()
        tags = [tag.lower() for tag in (item.tags or ()) if tag and tag.strip()]
        category = (item.category or "").lower()

        for query_word in self._query_words(lower_query):
            self._accumulate(result, query_word, title_words, self.TITLE_WORD_WEIGHT)
            self._accumulate(result, query_word, author_words, self.AUTHOR_WORD_WEIGHT)
            self._accumulate(result, query_word, tags, self.TAG_WEIGHT)
            if category.strip():
                self._accumulate(result, query_word, [category], self.CATEGORY_WEIGHT)

        # Phase 4: small bonus for popular/highly-rated items, only on a match
        if result.score > 0:
            result.score += self._popularity_bonus(item)

        return result

    def score_batch(self, items: Iterable[CatalogItem], query: str) -> List[ScoredItem]:
        """
        Score multiple items, preserving catalog order.

        Args:
            items: Catalog items to score
            query: Raw free-text query

        Returns:
            List of ScoredItem in the same order as ``items``
        """
        return [self.score(item, query) for item in items]

    def _query_words(self, lower_query: str) -> List[str]:
        return [word for word in lower_query.split() if len(word) >= self.MIN_QUERY_WORD_LENGTH]

    def _accumulate(
        self, result: ScoredItem, query_word: str, targets: List[str], weight: float
    ) -> None:
        """Compare a query word against each target, adding weighted hits."""
        for target in targets:
            matches, similarity = self.matcher.match(query_word, target)
            result.max_similarity = max(result.max_similarity, similarity)
            if matches:
                result.score += similarity * weight

    def _popularity_bonus(self, item: CatalogItem) -> float:
        rating = item.rating or 0.0
        review_count = max(0, item.review_count or 0)
        return rating * self.RATING_WEIGHT + math.log(review_count + 1) * self.REVIEW_COUNT_WEIGHT

    def get_stats(self) -> dict:
        """
        Get scorer configuration.

        Returns:
            Dictionary with scorer weights and threshold
        """
        return {
            "fuzzy_threshold": self.fuzzy_threshold,
            "weights": {
                "title_contains": self.TITLE_CONTAINS_SCORE,
                "author_contains": self.AUTHOR_CONTAINS_SCORE,
                "description_contains": self.DESCRIPTION_CONTAINS_SCORE,
                "title_prefix": self.TITLE_PREFIX_SCORE,
                "author_prefix": self.AUTHOR_PREFIX_SCORE,
                "title_word": self.TITLE_WORD_WEIGHT,
                "author_word": self.AUTHOR_WORD_WEIGHT,
                "tag": self.TAG_WEIGHT,
                "category": self.CATEGORY_WEIGHT,
            },
        }
