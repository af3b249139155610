"""텍스트 처리 유틸리티 - 표시용 문자열 정규화"""

from __future__ import annotations

import re
from typing import Optional

from product_feed.schemas.product_schema import DEFAULT_RATING, PLACEHOLDER_PRICE


_RATING_PATTERN = re.compile(r"\d+(?:\.\d+)?")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def collapse_whitespace(text: Optional[str]) -> str:
    """연속 공백/줄바꿈을 한 칸으로 합치고 양끝 공백 제거"""
    if not text:
        return ""
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def truncate_title(title: str, max_length: int = 100) -> str:
    """표시 길이를 넘는 상품명을 절단

    예시 (max_length=10):
    - "Short" -> "Short"
    - "Wireless Earbuds Pro" -> "Wireless E..."
    """
    if len(title) > max_length:
        return title[:max_length] + "..."
    return title


def normalize_price_text(price_text: Optional[str]) -> str:
    """가격 문자열에 통화 기호가 빠져 있으면 '$'를 붙임

    - "19.99" -> "$19.99"
    - "$19.99" -> "$19.99"
    - "" / None -> "Price not available"
    """
    price = collapse_whitespace(price_text)
    if not price:
        return PLACEHOLDER_PRICE
    if "$" not in price and "Price" not in price:
        price = f"${price}"
    return price


def parse_rating_text(rating_text: Optional[str]) -> str:
    """평점 문구에서 첫 번째 숫자(소수 포함)를 추출

    - "4.5 out of 5 stars" -> "4.5"
    - "" / 숫자 없음 -> "4.0"
    """
    if not rating_text:
        return DEFAULT_RATING
    match = _RATING_PATTERN.search(rating_text)
    return match.group(0) if match else DEFAULT_RATING


def build_cache_key(query: str, count: int) -> str:
    """검색 결과 캐시 키: lower(trim(query)) + "_" + count"""
    return f"{query.strip().lower()}_{count}"
