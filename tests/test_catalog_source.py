"""
Tests for the in-memory catalog source.
"""

import asyncio

import pytest

from cloudshelf_search.domain.entities import CatalogRequest
from cloudshelf_search.domain.exceptions import CatalogFetchException
from cloudshelf_search.infrastructure.catalog_source import ICatalogSource, InMemoryCatalogSource


@pytest.fixture
def source(sample_catalog):
    return InMemoryCatalogSource(sample_catalog, name="sample")


class TestPagination:
    """Test page slicing."""

    @pytest.mark.asyncio
    async def test_oversized_page_returns_everything(self, source):
        page = await source.fetch(CatalogRequest(limit=1000))

        assert len(page.items) == 12
        assert page.total == 12
        assert page.has_more is False

    @pytest.mark.asyncio
    async def test_first_page(self, source):
        page = await source.fetch(CatalogRequest(page=1, limit=5))

        assert [item.id for item in page.items] == ["1", "2", "3", "4", "5"]
        assert page.has_more is True

    @pytest.mark.asyncio
    async def test_last_page(self, source):
        page = await source.fetch(CatalogRequest(page=3, limit=5))

        assert [item.id for item in page.items] == ["11", "12"]
        assert page.has_more is False


class TestFailures:
    """Test failing mode and cancellation."""

    @pytest.mark.asyncio
    async def test_fail_with(self, source):
        source.fail_with("connection refused")

        with pytest.raises(CatalogFetchException) as exc_info:
            await source.fetch(CatalogRequest())

        assert exc_info.value.details == {"source": "sample", "reason": "connection refused"}
        assert source.get_health_status()["available"] is False

    @pytest.mark.asyncio
    async def test_latency_is_cancellable(self, sample_catalog):
        source = InMemoryCatalogSource(sample_catalog, latency=10)
        task = asyncio.create_task(source.fetch(CatalogRequest()))
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestHealth:
    """Test health reporting."""

    def test_is_catalog_source(self, source):
        assert isinstance(source, ICatalogSource)

    @pytest.mark.asyncio
    async def test_counts_fetches(self, source):
        await source.fetch(CatalogRequest())
        await source.fetch(CatalogRequest())

        status = source.get_health_status()
        assert status == {"source": "sample", "available": True, "items": 12, "fetch_count": 2}
