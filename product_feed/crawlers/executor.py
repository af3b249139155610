"""Executor Protocol - Interface for FastPath/SlowPath executors

Defines the common interface that all executors must implement.
"""

from typing import Protocol

from .result import ExtractionResult


class SearchExecutor(Protocol):
    """검색 실행자 프로토콜

    FastPath/SlowPath Executor가 구현해야 할 인터페이스입니다.

    구현 예시:
        class FastPathExecutor(SearchExecutor):
            async def execute(self, query: str, count: int) -> ExtractionResult:
                # HTTP 기반 검색 로직
                ...
    """

    async def execute(self, query: str, count: int) -> ExtractionResult:
        """검색 실행

        Args:
            query: 검색어
            count: 최대 수집 개수

        Returns:
            ExtractionResult: 추출 결과 (0건 / 타임아웃 / 차단은 outcome으로 표현)

        Raises:
            NetworkException: HTTP 요청 실패 (FastPath)
            BrowserInitException: 브라우저 실행 실패 (SlowPath)
            NavigationException: 페이지 이동 실패 (SlowPath)
        """
        ...
