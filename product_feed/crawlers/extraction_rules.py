"""검색 결과 카드 추출 규칙 (selector 드리프트 대응).

카드마다 마크업이 조금씩 달라서 필드별로 '순서 있는 후보 규칙'을 두고
첫 번째로 값을 돌려주는 규칙을 채택합니다(first-match-wins).

같은 규칙 집합을 두 경로에서 공유합니다.
- Lightweight: selectolax Node에 직접 적용 (first_match)
- Playwright: to_payload()로 직렬화해 in-page 스크립트에 전달
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from selectolax.parser import Node

from product_feed.utils.text_utils import collapse_whitespace


@dataclass(frozen=True)
class FieldRule:
    """필드 값 하나를 꺼내는 규칙

    Attributes:
        selector: 카드 기준 CSS selector (None이면 카드 노드 자신)
        attribute: 읽을 속성명 (None이면 텍스트)
        first_token: 공백 기준 첫 토큰만 사용 (srcset 등)
        pattern: 값이 이 정규식을 포함해야 채택
    """

    selector: Optional[str]
    attribute: Optional[str] = None
    first_token: bool = False
    pattern: Optional[str] = None

    def extract(self, node: Node) -> Optional[str]:
        target = node if self.selector is None else node.css_first(self.selector)
        if target is None:
            return None

        if self.attribute:
            raw = target.attributes.get(self.attribute) or ""
        else:
            raw = target.text() or ""

        value = collapse_whitespace(raw)
        if self.first_token and value:
            value = value.split(" ")[0]
        if not value:
            return None
        if self.pattern and not re.search(self.pattern, value):
            return None
        return value

    def to_payload(self) -> Dict[str, Any]:
        return {
            "selector": self.selector,
            "attribute": self.attribute,
            "firstToken": self.first_token,
            "pattern": self.pattern,
        }


def first_match(node: Node, rules: Sequence[FieldRule]) -> Optional[str]:
    """규칙을 순서대로 적용해 처음 얻은 값을 반환"""
    for rule in rules:
        value = rule.extract(node)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class CardRules:
    """카드 selector + 필드별 후보 규칙"""

    card_selector: str
    title: Sequence[FieldRule]
    url: Sequence[FieldRule]
    image: Sequence[FieldRule]
    price: Sequence[FieldRule] = ()
    rating: Sequence[FieldRule] = ()

    def fields(self) -> Dict[str, Sequence[FieldRule]]:
        return {
            "title": self.title,
            "url": self.url,
            "image": self.image,
            "price": self.price,
            "rating": self.rating,
        }

    def extract_raw(self, node: Node) -> Dict[str, Optional[str]]:
        return {name: first_match(node, rules) for name, rules in self.fields().items()}

    def to_payload(self) -> Dict[str, Any]:
        return {
            "cardSelector": self.card_selector,
            "fields": {name: [r.to_payload() for r in rules] for name, rules in self.fields().items()},
        }


_HAS_NUMBER = r"\d"


SEARCH_RESULT_RULES = CardRules(
    card_selector='[data-component-type="s-search-result"]',
    title=(
        FieldRule("h2 a span"),
        FieldRule(".s-size-mini span"),
        FieldRule('[data-cy="title-recipe-title"]'),
        FieldRule("h2 span"),
    ),
    url=(
        FieldRule("h2 a", attribute="href"),
        FieldRule('a.a-link-normal[href*="/dp/"]', attribute="href"),
        FieldRule('a[href*="/dp/"]', attribute="href"),
    ),
    image=(
        FieldRule("img.s-image", attribute="src"),
        FieldRule("img", attribute="src"),
        FieldRule("img", attribute="data-src"),
        FieldRule("img", attribute="srcset", first_token=True),
    ),
    price=(
        FieldRule(".a-price .a-offscreen"),
        FieldRule(".a-price-whole"),
        FieldRule(".a-price-range"),
        FieldRule(".a-price"),
    ),
    rating=(
        FieldRule(".a-icon-alt", pattern=_HAS_NUMBER),
        FieldRule(".a-star-mini .a-icon-alt", pattern=_HAS_NUMBER),
        FieldRule('[aria-label*="stars"]', attribute="aria-label", pattern=_HAS_NUMBER),
    ),
)


# 베스트셀러 1차 패턴: faceout 카드
BEST_SELLER_CARD_RULES = CardRules(
    card_selector=".p13n-sc-uncoverable-faceout, .zg-grid-general-faceout, .zg-carousel-general-faceout",
    title=(
        FieldRule("img", attribute="alt"),
        FieldRule("a.a-link-normal", attribute="title"),
    ),
    url=(FieldRule("a.a-link-normal", attribute="href"),),
    image=(FieldRule("img", attribute="src"),),
    price=(FieldRule(".a-price .a-offscreen"),),
    rating=(FieldRule(".a-icon-alt", pattern=_HAS_NUMBER),),
)


# 베스트셀러 2차 패턴: 상품 상세로 가는 일반 앵커 목록
BEST_SELLER_ANCHOR_RULES = CardRules(
    card_selector='a.a-link-normal[href*="/dp/"]',
    title=(
        FieldRule(None, attribute="title"),
        FieldRule("img", attribute="alt"),
    ),
    url=(FieldRule(None, attribute="href"),),
    image=(FieldRule("img", attribute="src"),),
)
