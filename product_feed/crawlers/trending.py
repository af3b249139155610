"""트렌딩(베스트셀러) 목록 수집

상품 검색과 독립적으로 캐시/수집되며, 실패해도 예외를 던지지 않고 빈 목록을 돌려줍니다.
"""

from __future__ import annotations

from typing import List, Optional

from product_feed.core.config import settings
from product_feed.core.logging import logger
from product_feed.schemas.product_schema import ProductListing
from product_feed.services.cache_service import ResultCache

from .http_client import HttpClient
from .parsing import get_blocked_keyword, parse_best_sellers


TRENDING_CACHE_KEY = "__trending__"


class TrendingFetcher:
    def __init__(
        self,
        http_client: HttpClient,
        cache: ResultCache,
        *,
        url: Optional[str] = None,
        min_count: Optional[int] = None,
        max_count: Optional[int] = None,
    ):
        self.http_client = http_client
        self.cache = cache
        self.url = url or settings.best_sellers_url
        self.min_count = min_count or settings.trending_min_count
        self.max_count = max(self.min_count, max_count or settings.products_max_count)

    async def fetch(self, count: int) -> List[ProductListing]:
        """
        트렌딩 목록 조회

        Args:
            count: 요청된 상품 개수 (최소 min_count개 반환)

        Returns:
            표시 가능한 베스트셀러 목록. 실패 시 [].
        """
        limit = max(self.min_count, count)

        cached = self.cache.get(TRENDING_CACHE_KEY)
        if cached is not None:
            return cached[:limit]

        try:
            listings = await self._fetch_best_sellers()
        except Exception as e:
            logger.warning(f"[Trending] Fetch failed: {type(e).__name__}: {e}")
            return []

        if listings:
            self.cache.put(TRENDING_CACHE_KEY, listings)
        return listings[:limit]

    async def _fetch_best_sellers(self) -> List[ProductListing]:
        html = await self.http_client.fetch_html(self.url)

        keyword = get_blocked_keyword(html)
        if keyword:
            logger.warning(f"[Trending] Blocked page detected: keyword='{keyword}'")
            return []

        listings = [item for item in parse_best_sellers(html, self.max_count) if item.is_displayable()]
        logger.info(f"[Trending] Collected {len(listings)} best sellers")
        return listings
