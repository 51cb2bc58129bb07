"""
Search controller for the storefront catalog.

Orchestrates debounced free-text search: waits for typing to pause,
fetches the catalog, then scores, admits, filters and sorts the items.
Only the most recently started request may change observable state;
superseded requests are cancelled and their completions ignored.

Must be driven from a running asyncio event loop.
"""

import asyncio
import time
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

import structlog

from ..config import SearchConfig
from ..domain.entities import (
    CatalogItem,
    CatalogRequest,
    FilterSet,
    SearchPhase,
    SearchResult,
    SearchSnapshot,
)
from ..metrics import (
    OUTCOME_CANCELLED,
    OUTCOME_DONE,
    OUTCOME_EMPTY_QUERY,
    OUTCOME_ERROR,
    track_items_scored,
    track_search,
)
from ..search import filters as filter_stage
from ..search.admission import AdmissionFilter
from ..search.fuzzy_matcher import FuzzyMatcher
from ..search.relevance_scorer import RelevanceScorer

logger = structlog.get_logger(__name__)

SearchListener = Callable[[SearchSnapshot], None]


class SearchController:
    """
    Debounced catalog search state machine.

    States: IDLE -> DEBOUNCING -> FETCHING -> SCORING -> DONE, with ERROR
    reachable from FETCHING or SCORING. An empty query at debounce
    elapse yields an empty result and returns to IDLE without fetching.

    Caller API: set_query(), set_filters(), search(), clear().
    Observable state: results, is_loading, error, total_results, has_more
    (or a SearchSnapshot via snapshot()/subscribe()).
    """

    def __init__(
        self,
        catalog,
        config: Optional[SearchConfig] = None,
        scorer: Optional[RelevanceScorer] = None,
        admission: Optional[AdmissionFilter] = None,
        query: str = "",
        filters: Optional[FilterSet] = None,
    ):
        """
        Initialize search controller.

        Args:
            catalog: Catalog collaborator with an awaitable fetch(request)
            config: Thresholds and timings (defaults to SearchConfig())
            scorer: Relevance scorer (built from config if omitted)
            admission: Admission filter (built from config if omitted)
            query: Initial query (not searched until triggered)
            filters: Initial filter set
        """
        self.catalog = catalog
        self.config = config or SearchConfig()
        self.scorer = scorer or RelevanceScorer(FuzzyMatcher(self.config.fuzzy_threshold))
        self.admission = admission or AdmissionFilter(
            min_match_quality=self.config.min_match_quality,
            min_score=self.config.min_score,
        )

        self._query = query
        self._filters = filters or FilterSet()
        self._committed_query = ""

        self._phase = SearchPhase.IDLE
        self._result = SearchResult.empty()
        self._is_loading = False

        self._generation = 0
        self._timer: Optional[asyncio.Task] = None
        self._inflight: Optional[asyncio.Task] = None
        self._listeners: List[SearchListener] = []

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def query(self) -> str:
        return self._query

    @property
    def filters(self) -> FilterSet:
        return self._filters

    @property
    def phase(self) -> SearchPhase:
        return self._phase

    @property
    def result(self) -> SearchResult:
        return self._result

    @property
    def results(self) -> Sequence[CatalogItem]:
        return self._result.items

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> Optional[str]:
        return self._result.error

    @property
    def total_results(self) -> int:
        return self._result.total

    @property
    def has_more(self) -> bool:
        return self._result.has_more

    def snapshot(self) -> SearchSnapshot:
        return SearchSnapshot(
            query=self._query,
            filters=self._filters,
            phase=self._phase,
            results=self._result.items,
            is_loading=self._is_loading,
            error=self._result.error,
            total_results=self._result.total,
            has_more=self._result.has_more,
        )

    def subscribe(self, listener: SearchListener) -> Callable[[], None]:
        """
        Register a listener for state transitions.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Caller actions
    # ------------------------------------------------------------------

    def set_query(self, query: str) -> None:
        """
        Update the query and (re)start the debounce timer.

        Only the value present when the timer elapses is searched.
        """
        self._query = query
        self._cancel_timer()
        self._phase = SearchPhase.DEBOUNCING
        self._timer = asyncio.get_running_loop().create_task(self._debounce())

    def set_filters(self, filters: FilterSet) -> None:
        """
        Replace the filter set.

        If a debounced query is already committed, the pipeline re-runs
        immediately with it and the new filters.
        """
        self._filters = filters
        if self._committed_query.strip():
            self._start(self._committed_query, filters)

    async def search(self) -> SearchResult:
        """
        Search now with the current query and filters, bypassing debounce.

        Returns:
            The current result once this request settles; if a newer
            request superseded it, whatever state that request has reached
        """
        self._cancel_timer()
        task = self._start(self._query, self._filters)
        if task is not None:
            await asyncio.wait({task})
        return self._result

    def clear(self, filters: Optional[FilterSet] = None) -> None:
        """
        Reset the query and results and return to IDLE.

        Args:
            filters: Replacement filter set; current filters kept if None
        """
        self._generation += 1
        self._cancel_timer()
        self._cancel_inflight()

        self._query = ""
        self._committed_query = ""
        if filters is not None:
            self._filters = filters

        self._result = SearchResult.empty()
        self._is_loading = False
        self._phase = SearchPhase.IDLE
        self._emit()

    async def wait(self) -> None:
        """Wait until no debounce timer or request is pending."""
        while True:
            pending = {
                task
                for task in (self._timer, self._inflight)
                if task is not None and not task.done()
            }
            if not pending:
                return
            await asyncio.wait(pending)

    def close(self) -> None:
        """Cancel pending work; observable state is left as is."""
        self._generation += 1
        self._cancel_timer()
        self._cancel_inflight()
        self._is_loading = False

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def rank(
        self, query: str, items: Sequence[CatalogItem], filters: Optional[FilterSet] = None
    ) -> List[CatalogItem]:
        """
        Score, admit, filter and sort items for a query.

        Pure and synchronous; an empty query ranks nothing.
        """
        if not query.strip():
            return []

        scored = self.scorer.score_batch(items, query)
        admitted = self.admission.admit(scored)
        return filter_stage.apply(admitted, filters or FilterSet())

    async def _debounce(self) -> None:
        await asyncio.sleep(self.config.debounce_seconds)
        self._timer = None
        self._start(self._query, self._filters)

    def _start(self, query: str, filters: FilterSet) -> Optional[asyncio.Task]:
        """Supersede any in-flight request and begin a new one."""
        self._committed_query = query
        self._generation += 1
        self._cancel_inflight()

        if not query.strip():
            self._result = SearchResult.empty()
            self._is_loading = False
            self._phase = SearchPhase.IDLE
            track_search(OUTCOME_EMPTY_QUERY)
            self._emit()
            return None

        self._phase = SearchPhase.FETCHING
        self._is_loading = True
        self._result = replace(self._result, error=None)
        self._emit()

        self._inflight = asyncio.get_running_loop().create_task(
            self._execute(self._generation, query, filters)
        )
        return self._inflight

    async def _execute(self, generation: int, query: str, filters: FilterSet) -> None:
        start_time = time.perf_counter()
        # Relevance filtering is client-side over one oversized page
        request = CatalogRequest(query="", filters=filters, page=1, limit=self.config.fetch_limit)

        try:
            page = await self.catalog.fetch(request)
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Search superseded", query=query)
                raise
            # Cancelled by the catalog source or the caller, not by a newer request
            logger.warning("Catalog fetch cancelled", query=query)
            self._finish(SearchResult.empty(), SearchPhase.IDLE)
            track_search(OUTCOME_CANCELLED)
            raise
        except Exception as e:
            if generation != self._generation:
                return
            message = getattr(e, "message", None) or str(e) or "Search failed"
            logger.error("Catalog fetch failed", query=query, error=message)
            self._finish(SearchResult.empty(error=message), SearchPhase.ERROR)
            track_search(OUTCOME_ERROR, time.perf_counter() - start_time)
            return

        if generation != self._generation:
            logger.debug("Dropping stale catalog page", query=query)
            return

        self._phase = SearchPhase.SCORING
        track_items_scored(len(page.items))
        try:
            items = self.rank(query, page.items, filters)
        except Exception as e:
            logger.exception("Scoring failed", query=query)
            self._finish(SearchResult.empty(error=str(e) or "Search failed"), SearchPhase.ERROR)
            track_search(OUTCOME_ERROR, time.perf_counter() - start_time)
            return

        duration = time.perf_counter() - start_time
        self._finish(
            SearchResult(items=tuple(items), total=len(items), has_more=page.has_more),
            SearchPhase.DONE,
        )
        track_search(OUTCOME_DONE, duration, len(items))
        logger.info(
            "Search completed",
            query=query,
            fetched=len(page.items),
            results=len(items),
            latency_ms=round(duration * 1000, 2),
        )

    def _finish(self, result: SearchResult, phase: SearchPhase) -> None:
        self._result = result
        self._is_loading = False
        self._phase = phase
        self._inflight = None
        self._emit()

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    def _cancel_inflight(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
            track_search(OUTCOME_CANCELLED)
        self._inflight = None

    def _emit(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Search listener failed")
