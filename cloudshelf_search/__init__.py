"""
Client-side fuzzy search and relevance ranking for the storefront catalog.
"""
from .config import SearchConfig
from .domain.entities import (
    CatalogItem,
    CatalogPage,
    CatalogRequest,
    FilterSet,
    ScoredItem,
    SearchPhase,
    SearchResult,
    SearchSnapshot,
    SortMode,
)
from .domain.exceptions import (
    CatalogFetchException,
    SearchServiceException,
)
from .infrastructure.catalog_source import ICatalogSource, InMemoryCatalogSource
from .search import AdmissionFilter, FuzzyMatcher, RelevanceScorer
from .services.search_controller import SearchController

__version__ = "1.0.0"

__all__ = [
    "AdmissionFilter",
    "CatalogFetchException",
    "CatalogItem",
    "CatalogPage",
    "CatalogRequest",
    "FilterSet",
    "FuzzyMatcher",
    "ICatalogSource",
    "InMemoryCatalogSource",
    "RelevanceScorer",
    "ScoredItem",
    "SearchConfig",
    "SearchController",
    "SearchPhase",
    "SearchResult",
    "SearchServiceException",
    "SearchSnapshot",
    "SortMode",
]
