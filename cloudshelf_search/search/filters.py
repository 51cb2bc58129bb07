"""
Structured filtering and sorting of admitted search results.

Filters are independent and composable; sorting either keeps the
incoming relevance order or overrides it with a deterministic key.
"""

from datetime import date
from typing import List, Optional, Sequence

from ..domain.entities import CatalogItem, FilterSet, SortMode


def apply_filters(items: Sequence[CatalogItem], filters: FilterSet) -> List[CatalogItem]:
    """
    Apply category, price, rating and stock filters.

    Args:
        items: Candidate items (already admitted)
        filters: Caller filter set

    Returns:
        Items satisfying every set filter, order preserved
    """
    filtered = list(items)

    if filters.category:
        category = filters.category.lower()
        filtered = [item for item in filtered if (item.category or "").lower() == category]

    if filters.price_range is not None:
        low, high = filters.price_range
        filtered = [item for item in filtered if low <= item.price <= high]

    if filters.min_rating is not None:
        filtered = [item for item in filtered if item.rating >= filters.min_rating]

    if filters.in_stock_only:
        filtered = [item for item in filtered if item.in_stock]

    return filtered


def apply_sorting(
    items: Sequence[CatalogItem], sort_by: Optional[SortMode] = None
) -> List[CatalogItem]:
    """
    Order items by the requested sort mode.

    RELEVANCE (or unset) keeps incoming order. All sorts are stable.
    Items without a publish date sort as the earliest under NEWEST.
    """
    if not sort_by or sort_by == SortMode.RELEVANCE:
        return list(items)

    if sort_by == SortMode.PRICE:
        return sorted(items, key=lambda item: item.price)
    if sort_by == SortMode.RATING:
        return sorted(items, key=lambda item: item.rating, reverse=True)
    if sort_by == SortMode.NEWEST:
        return sorted(items, key=lambda item: item.published_date or date.min, reverse=True)

    return list(items)


def apply(items: Sequence[CatalogItem], filters: FilterSet) -> List[CatalogItem]:
    """Filter then sort, as one stage after admission."""
    return apply_sorting(apply_filters(items, filters), filters.sort_by)
