"""Extraction Result Standard Format

추출 단계(Lightweight/Playwright)의 표준 결과 형식을 정의합니다.
"결과 없음"과 "판단 불가(타임아웃/차단)"를 구분하기 위해 outcome을 함께 반환합니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from product_feed.schemas.product_schema import ProductListing


class ExtractionOutcome(str, Enum):
    """추출 결과 상태"""

    OK = "ok"  # 1건 이상 추출
    EMPTY = "empty"  # 페이지는 정상이나 결과 카드 없음
    TIMEOUT = "timeout"  # 결과 selector가 제한 시간 내에 나타나지 않음
    BLOCKED = "blocked"  # 봇 차단/캡차 페이지 감지


@dataclass
class ExtractionResult:
    """추출 결과 표준 포맷

    Attributes:
        listings: 추출된 상품 목록 (문서 순서)
        outcome: 추출 상태
        source: 결과 출처 ("fastpath" | "slowpath")
    """

    listings: List[ProductListing] = field(default_factory=list)
    outcome: ExtractionOutcome = ExtractionOutcome.EMPTY
    source: str = "fastpath"

    @property
    def count(self) -> int:
        return len(self.listings)

    @classmethod
    def from_listings(cls, listings: List[ProductListing], source: str) -> "ExtractionResult":
        """목록 유무에 따라 OK / EMPTY 결정"""
        outcome = ExtractionOutcome.OK if listings else ExtractionOutcome.EMPTY
        return cls(listings=list(listings), outcome=outcome, source=source)

    @classmethod
    def empty(cls, source: str) -> "ExtractionResult":
        return cls(outcome=ExtractionOutcome.EMPTY, source=source)

    @classmethod
    def timeout(cls, source: str) -> "ExtractionResult":
        return cls(outcome=ExtractionOutcome.TIMEOUT, source=source)

    @classmethod
    def blocked(cls, source: str) -> "ExtractionResult":
        return cls(outcome=ExtractionOutcome.BLOCKED, source=source)
