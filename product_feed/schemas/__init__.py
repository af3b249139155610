"""API/도메인 스키마 - export only."""

from .product_schema import (
    DEFAULT_RATING,
    MISSING_URL,
    PLACEHOLDER_IMAGE,
    PLACEHOLDER_PRICE,
    PLACEHOLDER_TITLE,
    ErrorResponse,
    HealthResponse,
    ProductListing,
    ProductsResponse,
    ServiceHealthResponse,
)

__all__ = [
    "DEFAULT_RATING",
    "MISSING_URL",
    "PLACEHOLDER_IMAGE",
    "PLACEHOLDER_PRICE",
    "PLACEHOLDER_TITLE",
    "ErrorResponse",
    "HealthResponse",
    "ProductListing",
    "ProductsResponse",
    "ServiceHealthResponse",
]
