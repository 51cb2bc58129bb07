"""
Search module for catalog search.

Provides fuzzy matching, relevance scoring, admission and filter/sort stages.
"""
from .admission import AdmissionFilter
from .filters import apply, apply_filters, apply_sorting
from .fuzzy_matcher import FuzzyMatcher, distance, is_match, similarity
from .relevance_scorer import RelevanceScorer

__all__ = [
    "AdmissionFilter",
    "FuzzyMatcher",
    "RelevanceScorer",
    "apply",
    "apply_filters",
    "apply_sorting",
    "distance",
    "is_match",
    "similarity",
]
