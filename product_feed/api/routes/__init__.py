"""API routes package."""

from .health_routes import router as health_router
from .product_routes import router as product_router, get_cache, get_product_feed_service, get_rate_limiter

__all__ = ["health_router", "product_router", "get_cache", "get_product_feed_service", "get_rate_limiter"]
