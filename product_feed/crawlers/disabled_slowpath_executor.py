"""Disabled SlowPath Executor

저메모리/저비용 환경에서 브라우저 기반 SlowPath를 비활성화하기 위한 실행자입니다.

오케스트레이터는 동일한 인터페이스(SearchExecutor)를 기대하므로, 이 구현체를 주입하면
SlowPath 단계가 '결과 없음'으로 자연스럽게 종료됩니다.
"""

from __future__ import annotations

from product_feed.core.logging import logger, sanitize_for_log

from .executor import SearchExecutor
from .result import ExtractionResult


class DisabledSlowPathExecutor(SearchExecutor):
    async def execute(self, query: str, count: int) -> ExtractionResult:
        logger.info(
            f"[SlowPath:disabled] Skipping browser fallback: query='{sanitize_for_log(query)}', count={count}"
        )
        return ExtractionResult.empty("slowpath")

    async def close(self) -> None:
        return None
