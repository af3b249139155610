"""상품 피드 서비스 - 검색 결과와 트렌딩 목록을 하나의 응답으로 조립"""
import asyncio
from datetime import datetime, timezone
from typing import List, Optional

from product_feed.core.logging import logger, sanitize_for_log
from product_feed.crawlers.trending import TrendingFetcher
from product_feed.engine.orchestrator import SearchOrchestrator
from product_feed.schemas.product_schema import ProductListing, ProductsResponse


class ProductFeedService:
    """
    상품 피드 서비스 - 조립만 담당

    - 검색(캐시/FastPath/SlowPath)은 SearchOrchestrator
    - 트렌딩은 TrendingFetcher (실패해도 빈 목록)
    """

    def __init__(self, orchestrator: SearchOrchestrator, trending_fetcher: TrendingFetcher):
        self.orchestrator = orchestrator
        self.trending_fetcher = trending_fetcher

    async def get_products(
        self,
        category: str,
        count: int,
        include_trending: bool = True,
        timeout_s: Optional[float] = None,
    ) -> ProductsResponse:
        """
        상품 목록 + 트렌딩 조회

        트렌딩은 검색과 동시에 별도 task로 실행되며, 검색이 실패하면 취소됩니다.

        Args:
            category: 검색어 (카테고리)
            count: 요청 개수
            include_trending: 트렌딩 포함 여부
            timeout_s: 검색 상한

        Returns:
            ProductsResponse

        Raises:
            BrowserInitException / NavigationException: 검색 단계의 치명적 실패
        """
        trending_task: Optional[asyncio.Task] = None
        if include_trending:
            trending_task = asyncio.create_task(self._fetch_trending(count))

        try:
            result = await self.orchestrator.search(category, count, timeout_s=timeout_s)
        except BaseException:
            if trending_task is not None:
                trending_task.cancel()
            raise

        trending: List[ProductListing] = []
        if trending_task is not None:
            trending = await trending_task

        logger.info(
            f"[API] Products assembled: query='{sanitize_for_log(category)}', products={len(result.listings)}, "
            f"trending={len(trending)}, status={result.status.value}"
        )
        if result.is_degraded:
            logger.warning(
                f"[API] Degraded empty result: query='{sanitize_for_log(category)}', status={result.status.value}"
            )

        return ProductsResponse(
            success=True,
            products=result.listings,
            trending=trending,
            top_trending=trending[0] if trending else None,
            count=len(result.listings),
            query=category,
            cached=result.cached,
            timestamp=datetime.now(timezone.utc),
            source=result.source,
            status=result.status.value,
        )

    async def _fetch_trending(self, count: int) -> List[ProductListing]:
        try:
            return await self.trending_fetcher.fetch(count)
        except Exception as e:
            logger.warning(f"[Trending] Unexpected failure: {type(e).__name__}: {e}")
            return []
