"""
Prometheus metrics for catalog search.

Tracks search request outcomes, pipeline latency and result sizes.
"""

from prometheus_client import Counter, Histogram

search_requests_total = Counter(
    "catalog_search_requests_total",
    "Total search requests by lifecycle outcome",
    ["outcome"],
)

search_duration_seconds = Histogram(
    "catalog_search_duration_seconds",
    "Catalog fetch plus scoring duration in seconds",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

search_results_per_query = Histogram(
    "catalog_search_results_per_query",
    "Number of results returned per query",
    buckets=(0, 1, 5, 10, 25, 50, 100, 250),
)

search_items_scored_total = Counter(
    "catalog_search_items_scored_total",
    "Total catalog items run through relevance scoring",
)

OUTCOME_DONE = "done"
OUTCOME_ERROR = "error"
OUTCOME_EMPTY_QUERY = "empty_query"
OUTCOME_CANCELLED = "cancelled"


def track_search(outcome: str, duration: float = 0.0, result_count: int = 0):
    """Track one search request lifecycle."""
    search_requests_total.labels(outcome=outcome).inc()
    if outcome in (OUTCOME_DONE, OUTCOME_ERROR):
        search_duration_seconds.observe(duration)
    if outcome == OUTCOME_DONE:
        search_results_per_query.observe(result_count)


def track_items_scored(count: int):
    """Track how many items were scored."""
    search_items_scored_total.inc(count)
