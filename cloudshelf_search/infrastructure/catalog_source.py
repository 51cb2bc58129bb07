"""
Catalog source interface and an in-memory implementation.

Defines the contract for catalog providers (GraphQL book service,
sample data, etc.) consumed by the search controller.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ..domain.entities import CatalogItem, CatalogPage, CatalogRequest
from ..domain.exceptions import CatalogFetchException

logger = logging.getLogger(__name__)


class ICatalogSource(ABC):
    """
    Abstract interface for catalog providers.

    Implementations return one page of items per request. Failures are
    raised as CatalogFetchException; cancellation of the awaiting task
    must propagate as asyncio.CancelledError.
    """

    @abstractmethod
    async def fetch(self, request: CatalogRequest) -> CatalogPage:
        """
        Fetch one page of the catalog.

        Args:
            request: Page, limit and pass-through query/filters

        Returns:
            CatalogPage with items and has-more flag

        Raises:
            CatalogFetchException: If the provider fails
        """
        pass

    @abstractmethod
    def get_health_status(self) -> dict:
        """
        Get source health status.

        Returns:
            Dictionary with health metrics
        """
        pass


class InMemoryCatalogSource(ICatalogSource):
    """
    Catalog source serving a fixed list of items.

    Supports 1-based pagination, simulated latency and a failing mode,
    which makes it suitable for sample catalogs and for exercising the
    controller's error and cancellation paths.
    """

    def __init__(
        self,
        items: Iterable[CatalogItem],
        latency: float = 0.0,
        name: str = "memory",
    ):
        """
        Initialize in-memory source.

        Args:
            items: Catalog contents, in catalog order
            latency: Seconds to wait before answering each fetch
            name: Source name used in errors and health output
        """
        self.items = tuple(items)
        self.latency = latency
        self.name = name
        self.fetch_count = 0
        self._failure: Optional[str] = None

    def fail_with(self, reason: Optional[str]) -> None:
        """Make subsequent fetches fail with ``reason`` (None to recover)."""
        self._failure = reason

    async def fetch(self, request: CatalogRequest) -> CatalogPage:
        self.fetch_count += 1

        if self.latency > 0:
            await asyncio.sleep(self.latency)

        if self._failure is not None:
            logger.warning(f"Catalog source '{self.name}' failing: {self._failure}")
            raise CatalogFetchException(self.name, self._failure)

        page = max(1, request.page)
        limit = max(1, request.limit)
        start = (page - 1) * limit
        end = start + limit

        return CatalogPage(
            items=self.items[start:end],
            total=len(self.items),
            page=page,
            limit=limit,
            has_more=end < len(self.items),
        )

    def get_health_status(self) -> dict:
        return {
            "source": self.name,
            "available": self._failure is None,
            "items": len(self.items),
            "fetch_count": self.fetch_count,
        }
