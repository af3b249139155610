"""비즈니스 로직 서비스 - export only.

ProductFeedService는 crawlers/engine에 의존하므로 여기서 re-export하지 않습니다.
(product_feed.services.product_feed_service에서 직접 import)
"""

from .cache_service import CacheEntry, ResultCache
from .rate_limiter import SlidingWindowRateLimiter

__all__ = ["CacheEntry", "ResultCache", "SlidingWindowRateLimiter"]
