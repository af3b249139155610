"""HTML 테스트 자산 모음 (검색 결과, 캡차, Best Sellers)"""

from .html_pages import (
    BEST_SELLERS_ANCHOR_HTML,
    BEST_SELLERS_HTML,
    CAPTCHA_HTML,
    EMPTY_SEARCH_HTML,
    SEARCH_RESULTS_HTML,
)

__all__ = [
    "BEST_SELLERS_ANCHOR_HTML",
    "BEST_SELLERS_HTML",
    "CAPTCHA_HTML",
    "EMPTY_SEARCH_HTML",
    "SEARCH_RESULTS_HTML",
]
