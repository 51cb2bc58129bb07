"""
Domain entities for catalog search.

Core business objects representing catalog items, filter state, and
search results. These entities are framework-agnostic and contain only
business logic.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Tuple


class SortMode(str, Enum):
    """Result orderings selectable by the caller."""

    RELEVANCE = "relevance"
    PRICE = "price"  # Ascending
    RATING = "rating"  # Descending
    NEWEST = "newest"  # Descending by publish date


class SearchPhase(str, Enum):
    """Lifecycle states of a search controller."""

    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"
    SCORING = "scoring"
    DONE = "done"
    ERROR = "error"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return default
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _parse_date(value: Any) -> Optional[date]:
    """
    Parse a publish date from a catalog record.

    Accepts date/datetime objects and ISO 8601 strings ("1965-06-01",
    "2020-08-13T00:00:00Z"). Anything unparseable yields None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class CatalogItem:
    """
    A single catalog entry (a book in the storefront catalog).

    Immutable once fetched. Owned by the catalog collaborator and
    read-only to the search pipeline.
    """

    id: str
    title: str
    author: str = ""
    description: str = ""
    category: str = ""
    price: float = 0.0
    rating: float = 0.0
    review_count: int = 0
    in_stock: bool = True
    stock_count: int = 0
    tags: Tuple[str, ...] = ()
    published_date: Optional[date] = None
    isbn: Optional[str] = None
    publisher: Optional[str] = None

    @classmethod
    def from_dict(cls, record: dict) -> "CatalogItem":
        """
        Build an item from a raw catalog record.

        Accepts the storefront's camelCase keys (``_id``, ``reviewCount``,
        ``inStock``, ``stockCount``, ``publishedDate``) as well as
        snake_case. Missing text becomes "", missing numbers become 0.

        Args:
            record: Raw mapping returned by a catalog source

        Returns:
            CatalogItem with defensive defaults applied
        """

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in record and record[key] is not None:
                    return record[key]
            return default

        tags = pick("tags", default=()) or ()
        if isinstance(tags, str):
            tags = (tags,)

        return cls(
            id=_text(pick("id", "_id")),
            title=_text(pick("title", "name")),
            author=_text(pick("author")),
            description=_text(pick("description")),
            category=_text(pick("category")),
            price=_number(pick("price")),
            rating=_number(pick("rating")),
            review_count=max(0, int(_number(pick("review_count", "reviewCount")))),
            in_stock=_flag(pick("in_stock", "inStock"), default=True),
            stock_count=max(0, int(_number(pick("stock_count", "stockCount")))),
            tags=tuple(_text(tag) for tag in tags),
            published_date=_parse_date(pick("published_date", "publishedDate")),
            isbn=pick("isbn"),
            publisher=pick("publisher"),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "rating": self.rating,
            "review_count": self.review_count,
            "in_stock": self.in_stock,
            "stock_count": self.stock_count,
            "tags": list(self.tags),
            "published_date": (
                self.published_date.isoformat() if self.published_date else None
            ),
            "isbn": self.isbn,
            "publisher": self.publisher,
        }


@dataclass(frozen=True)
class FilterSet:
    """
    Structured filters applied after relevance admission.

    All fields are optional; an unset field does not filter.
    """

    category: Optional[str] = None
    price_range: Optional[Tuple[float, float]] = None
    min_rating: Optional[float] = None
    in_stock_only: bool = False
    sort_by: Optional[SortMode] = None

    def __post_init__(self):
        """Validate filter values."""
        if self.price_range is not None:
            low, high = self.price_range
            if low > high:
                raise ValueError(f"Invalid price range: {low} > {high}")
        if self.min_rating is not None and not 0 <= self.min_rating <= 5:
            raise ValueError("Rating floor must be between 0 and 5")
        if self.sort_by is not None and not isinstance(self.sort_by, SortMode):
            object.__setattr__(self, "sort_by", SortMode(self.sort_by))


@dataclass
class ScoredItem:
    """
    Transient pairing of an item with its relevance signals.

    Attributes:
        item: The scored catalog item
        score: Accumulated relevance score (unbounded, >= 0)
        max_similarity: Best match quality observed (0-1)
        has_direct_match: Whether a substring or prefix signal fired
    """

    item: CatalogItem
    score: float = 0.0
    max_similarity: float = 0.0
    has_direct_match: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for debugging output."""
        result = self.item.to_dict()
        result["_relevance"] = {
            "score": round(self.score, 2),
            "max_similarity": round(self.max_similarity, 3),
            "direct_match": self.has_direct_match,
        }
        return result


@dataclass(frozen=True)
class SearchResult:
    """Ranked, filtered result of one search invocation."""

    items: Tuple[CatalogItem, ...] = ()
    total: int = 0
    has_more: bool = False
    error: Optional[str] = None

    @classmethod
    def empty(cls, error: Optional[str] = None) -> "SearchResult":
        return cls(items=(), total=0, has_more=False, error=error)

    @property
    def count(self) -> int:
        return self.total


@dataclass(frozen=True)
class CatalogRequest:
    """
    Opaque request handed to the catalog collaborator.

    In strict client-side mode the query is always empty and the page is
    oversized, so that relevance filtering happens over the whole catalog.
    """

    query: str = ""
    filters: FilterSet = field(default_factory=FilterSet)
    page: int = 1
    limit: int = 1000


@dataclass(frozen=True)
class CatalogPage:
    """One page of catalog items as reported by the collaborator."""

    items: Tuple[CatalogItem, ...] = ()
    total: int = 0
    page: int = 1
    limit: int = 0
    has_more: bool = False


@dataclass(frozen=True)
class SearchSnapshot:
    """Caller-facing view of a controller's observable state."""

    query: str
    filters: FilterSet
    phase: SearchPhase
    results: Tuple[CatalogItem, ...]
    is_loading: bool
    error: Optional[str]
    total_results: int
    has_more: bool
