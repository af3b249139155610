"""Search Result - Standardized Result Format

Provides a standardized format for search results across all execution paths.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from product_feed.schemas.product_schema import ProductListing


class SearchStatus(str, Enum):
    """검색 상태"""

    CACHE_HIT = "cache_hit"  # 캐시 히트
    FASTPATH_SUCCESS = "fastpath_success"  # FastPath 성공
    SLOWPATH_SUCCESS = "slowpath_success"  # SlowPath 성공
    NO_RESULTS = "no_results"  # 결과 없음
    TIMEOUT = "timeout"  # 결과 selector 미등장 / 단계 타임아웃
    BLOCKED = "blocked"  # 차단 (봇 감지 등)


@dataclass
class SearchResult:
    """검색 결과 표준 포맷

    모든 검색 경로(Cache/FastPath/SlowPath)에서 사용하는 통일된 결과 형식입니다.
    결과가 비어 있어도 정상 결과이며, 빈 이유는 status로 구분합니다.

    Attributes:
        status: 검색 상태
        listings: 표시 가능한 상품 목록 (최대 requested_count개)
        query: 검색어
        requested_count: 요청 개수
        source: 결과 출처 ("cache" | "fastpath" | "slowpath")
        cached: 캐시에서 반환했는지 여부
        elapsed_ms: 소요 시간 (밀리초)
    """

    status: SearchStatus
    listings: List[ProductListing] = field(default_factory=list)
    query: Optional[str] = None
    requested_count: int = 0
    source: Optional[str] = None
    cached: bool = False
    elapsed_ms: Optional[float] = None

    @property
    def is_degraded(self) -> bool:
        """타임아웃/차단으로 결과가 비었는지 여부 (정상적인 0건과 구분)"""
        return self.status in [SearchStatus.TIMEOUT, SearchStatus.BLOCKED]

    @classmethod
    def from_cache(
        cls, listings: List[ProductListing], query: str, requested_count: int, elapsed_ms: float
    ) -> "SearchResult":
        return cls(
            status=SearchStatus.CACHE_HIT,
            listings=list(listings),
            query=query,
            requested_count=requested_count,
            source="cache",
            cached=True,
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def from_tier(
        cls,
        status: SearchStatus,
        listings: List[ProductListing],
        query: str,
        requested_count: int,
        source: str,
        elapsed_ms: float,
    ) -> "SearchResult":
        """FastPath/SlowPath 실행 결과로 생성

        Args:
            status: 최종 상태
            listings: 검증/절단이 끝난 목록
            query: 검색어
            requested_count: 요청 개수
            source: 마지막으로 실행된 경로
            elapsed_ms: 소요 시간 (밀리초)
        """
        return cls(
            status=status,
            listings=list(listings),
            query=query,
            requested_count=requested_count,
            source=source,
            cached=False,
            elapsed_ms=elapsed_ms,
        )
