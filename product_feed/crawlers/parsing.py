"""검색/베스트셀러 HTML 파싱 유틸.

이 모듈은 네트워크(fetch)와 분리된 순수 파싱/정규화 로직을 담습니다.
Playwright 경로도 in-page 스크립트가 돌려준 raw 레코드를 여기서 정규화합니다.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from selectolax.parser import HTMLParser

from product_feed.core.config import settings
from product_feed.core.logging import logger
from product_feed.schemas.product_schema import (
    MISSING_URL,
    PLACEHOLDER_IMAGE,
    PLACEHOLDER_TITLE,
    ProductListing,
)
from product_feed.utils.text_utils import (
    normalize_price_text,
    parse_rating_text,
    truncate_title,
)
from product_feed.utils.url_utils import normalize_href

from .extraction_rules import (
    BEST_SELLER_ANCHOR_RULES,
    BEST_SELLER_CARD_RULES,
    SEARCH_RESULT_RULES,
    CardRules,
)


RawRecord = Dict[str, Optional[str]]


_BLOCK_KEYWORDS = (
    # 캡차/로봇 확인 페이지에서만 등장하는 문구만 보관합니다.
    "enter the characters you see below",
    "type the characters you see in this image",
    "/errors/validatecaptcha",
    "api-services-support@amazon.com",
    "robot check",
)

# 검색 결과 카드가 가리키면 안 되는 경로 (도움말/광고 안내 링크)
_EXCLUDED_URL_PARTS = ("/gp/help/",)


def get_blocked_keyword(html: str) -> Optional[str]:
    if not html:
        return None
    lowered = html.lower()
    for k in _BLOCK_KEYWORDS:
        if k in lowered:
            return k
    return None


def build_listing(raw: RawRecord, base_url: Optional[str] = None) -> ProductListing:
    """raw 필드 문자열을 표시용 ProductListing으로 정규화"""
    base = base_url or settings.target_base_url

    title = (raw.get("title") or "").strip() or PLACEHOLDER_TITLE
    image = normalize_href(raw.get("image") or "", base) or PLACEHOLDER_IMAGE
    url = normalize_href(raw.get("url") or "", base) or MISSING_URL

    return ProductListing(
        title=truncate_title(title, settings.listing_title_max_length),
        price=normalize_price_text(raw.get("price")),
        image=image,
        rating=parse_rating_text(raw.get("rating")),
        url=url,
    )


def collect_listings(
    records: Iterable[RawRecord],
    count: int,
    base_url: Optional[str] = None,
) -> List[ProductListing]:
    """raw 레코드를 문서 순서대로 정규화하며 count개가 모이면 중단

    - title/url/image 중 하나라도 없거나 http(s) URL로 정규화되지 않는 카드는 건너뜀 (개수에 포함하지 않음)
    - 도움말 링크 카드, 중복 URL은 건너뜀
    """
    results: List[ProductListing] = []
    if count <= 0:
        return results

    seen_urls: set[str] = set()
    for raw in records:
        if not raw.get("title") or not raw.get("url") or not raw.get("image"):
            continue

        listing = build_listing(raw, base_url)
        if listing.image == PLACEHOLDER_IMAGE or listing.url == MISSING_URL:
            continue
        if any(part in listing.url for part in _EXCLUDED_URL_PARTS):
            continue
        if listing.url in seen_urls:
            continue

        seen_urls.add(listing.url)
        results.append(listing)
        if len(results) >= count:
            break

    return results


def iter_raw_cards(parser: HTMLParser, rules: CardRules) -> Iterator[RawRecord]:
    for node in parser.css(rules.card_selector):
        yield rules.extract_raw(node)


def parse_search_results(html: str, count: int, base_url: Optional[str] = None) -> List[ProductListing]:
    """검색 결과 HTML에서 상품 카드를 문서 순서대로 추출"""
    if not html:
        return []
    parser = HTMLParser(html)
    return collect_listings(iter_raw_cards(parser, SEARCH_RESULT_RULES), count, base_url)


def parse_best_sellers(html: str, count: int, base_url: Optional[str] = None) -> List[ProductListing]:
    """베스트셀러 HTML 파싱

    1차로 faceout 카드 패턴을 시도하고, 하나도 얻지 못한 경우에만
    일반 앵커 목록 패턴으로 폴백합니다.
    """
    if not html:
        return []
    parser = HTMLParser(html)

    listings = collect_listings(iter_raw_cards(parser, BEST_SELLER_CARD_RULES), count, base_url)
    if listings:
        return listings

    logger.debug("[Trending] Card pattern matched nothing, falling back to anchor pattern")
    return collect_listings(iter_raw_cards(parser, BEST_SELLER_ANCHOR_RULES), count, base_url)
