"""API 엔드포인트 패키지 - export only."""

from .routes import health_router, product_router, get_cache, get_product_feed_service, get_rate_limiter

__all__ = ["health_router", "product_router", "get_cache", "get_product_feed_service", "get_rate_limiter"]
