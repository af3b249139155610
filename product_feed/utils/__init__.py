"""Utilities package - Flat structure"""

from .text_utils import (
    build_cache_key,
    collapse_whitespace,
    normalize_price_text,
    parse_rating_text,
    truncate_title,
)
from .url_utils import build_search_url, normalize_href

__all__ = [
    "build_cache_key",
    "collapse_whitespace",
    "normalize_price_text",
    "parse_rating_text",
    "truncate_title",
    "build_search_url",
    "normalize_href",
]
