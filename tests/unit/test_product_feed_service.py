"""ProductFeedService 테스트 (검색 + 트렌딩 조립)"""
import asyncio

import pytest

from product_feed.core.exceptions import BrowserInitException
from product_feed.crawlers.result import ExtractionResult
from product_feed.engine.budget import BudgetConfig
from product_feed.engine.orchestrator import SearchOrchestrator
from product_feed.services.cache_service import ResultCache
from product_feed.services.product_feed_service import ProductFeedService


class StubTrending:
    def __init__(self, listings=None, error=None, block=False):
        self.listings = listings or []
        self.error = error
        self.block = block
        self.calls = []
        self.cancelled = False

    async def fetch(self, count):
        self.calls.append(count)
        if self.block:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        return list(self.listings)


@pytest.fixture
def build_service(fake_clock, executor_factory):
    def _build(fast_step, slow_step, trending, fast_delay=0.0):
        orchestrator = SearchOrchestrator(
            cache=ResultCache(ttl_seconds=600, clock=fake_clock),
            fastpath_executor=executor_factory(fast_step, delay=fast_delay),
            slowpath_executor=executor_factory(slow_step),
            budget_config=BudgetConfig(total_budget=5.0, fastpath_timeout=1.0, slowpath_timeout=2.0),
        )
        return ProductFeedService(orchestrator, trending)

    return _build


class TestProductFeedService:
    @pytest.mark.asyncio
    async def test_assembles_products_and_trending(self, build_service, listings_factory):
        trending = StubTrending(listings_factory(5, start=50))
        service = build_service(
            ExtractionResult.from_listings(listings_factory(6), "fastpath"),
            ExtractionResult.empty("slowpath"),
            trending,
        )

        response = await service.get_products("electronics", 6)

        assert response.success is True
        assert response.count == 6
        assert response.query == "electronics"
        assert response.cached is False
        assert response.source == "fastpath"
        assert response.status == "fastpath_success"
        assert len(response.trending) == 5
        assert response.top_trending == response.trending[0]
        assert trending.calls == [6]

    @pytest.mark.asyncio
    async def test_trending_failure_is_isolated(self, build_service, listings_factory):
        service = build_service(
            ExtractionResult.from_listings(listings_factory(6), "fastpath"),
            ExtractionResult.empty("slowpath"),
            StubTrending(error=RuntimeError("boom")),
        )

        response = await service.get_products("electronics", 6)

        assert response.count == 6
        assert response.trending == []
        assert response.top_trending is None

    @pytest.mark.asyncio
    async def test_trending_disabled(self, build_service, listings_factory):
        trending = StubTrending(listings_factory(5))
        service = build_service(
            ExtractionResult.from_listings(listings_factory(6), "fastpath"),
            ExtractionResult.empty("slowpath"),
            trending,
        )

        response = await service.get_products("electronics", 6, include_trending=False)

        assert response.trending == []
        assert trending.calls == []

    @pytest.mark.asyncio
    async def test_search_failure_cancels_trending(self, build_service):
        trending = StubTrending(block=True)
        service = build_service(
            ExtractionResult.empty("fastpath"),
            BrowserInitException("chromium missing"),
            trending,
            fast_delay=0.01,
        )

        with pytest.raises(BrowserInitException):
            await service.get_products("electronics", 6)

        for _ in range(3):
            await asyncio.sleep(0)
        assert trending.cancelled is True

    @pytest.mark.asyncio
    async def test_serialized_with_camel_case_alias(self, build_service, listings_factory):
        service = build_service(
            ExtractionResult.from_listings(listings_factory(3), "fastpath"),
            ExtractionResult.empty("slowpath"),
            StubTrending(listings_factory(5)),
        )

        response = await service.get_products("electronics", 3)
        body = response.model_dump(by_alias=True)

        assert "topTrending" in body
        assert "top_trending" not in body
