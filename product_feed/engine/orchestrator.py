"""Search Orchestrator - Main Engine Entry Point

Coordinates the entire search pipeline:
1. Cache lookup
2. FastPath execution (HTTP)
3. SlowPath escalation (Playwright)
4. Validation, truncation and cache write
"""

import asyncio
from typing import List, Optional

from product_feed.core.logging import logger, sanitize_for_log
from product_feed.crawlers.executor import SearchExecutor
from product_feed.crawlers.result import ExtractionOutcome, ExtractionResult
from product_feed.schemas.product_schema import ProductListing
from product_feed.services.cache_service import ResultCache
from product_feed.utils.text_utils import build_cache_key

from .budget import BudgetConfig, BudgetManager
from .result import SearchResult, SearchStatus
from .strategy import EscalationStrategy


_SUCCESS_STATUS = {
    "fastpath": SearchStatus.FASTPATH_SUCCESS,
    "slowpath": SearchStatus.SLOWPATH_SUCCESS,
}

_EMPTY_STATUS = {
    ExtractionOutcome.TIMEOUT: SearchStatus.TIMEOUT,
    ExtractionOutcome.BLOCKED: SearchStatus.BLOCKED,
}


class SearchOrchestrator:
    """검색 엔진 오케스트레이터

    Cache → FastPath → (부족하면) SlowPath 파이프라인을 관리합니다.

    - FastPath 실패(네트워크 오류/타임아웃/예상치 못한 예외)는 0건으로 취급
    - SlowPath의 BrowserInitException / NavigationException은 호출자에게 전파
    - 빈 결과도 캐시에 저장. 단 TIMEOUT/BLOCKED로 끝난 빈 결과는 저장하지 않음
    """

    def __init__(
        self,
        cache: ResultCache,
        fastpath_executor: SearchExecutor,
        slowpath_executor: SearchExecutor,
        budget_config: Optional[BudgetConfig] = None,
        strategy: Optional[EscalationStrategy] = None,
    ):
        """
        Args:
            cache: 결과 캐시 (get/put)
            fastpath_executor: FastPath 실행자
            slowpath_executor: SlowPath 실행자
            budget_config: 예산 설정 (기본값: settings 기반)
            strategy: 승격 전략 (기본값: threshold=settings.escalation_threshold)
        """
        if cache is None:
            raise ValueError("cache must not be None")
        if fastpath_executor is None:
            raise ValueError("fastpath_executor must not be None")
        if slowpath_executor is None:
            raise ValueError("slowpath_executor must not be None")

        self.cache = cache
        self.fastpath = fastpath_executor
        self.slowpath = slowpath_executor
        self.budget_config = budget_config or BudgetConfig.from_settings()
        self.strategy = strategy or EscalationStrategy()

    async def search(self, query: str, count: int, *, timeout_s: Optional[float] = None) -> SearchResult:
        """통합 검색 실행

        Args:
            query: 검색어
            count: 요청 개수 (1 이상)
            timeout_s: 호출자 상한 (전체 예산보다 작을 때만 적용)

        Returns:
            SearchResult: 최대 count개의 표시 가능한 상품

        Raises:
            ValueError: query가 비어 있거나 count < 1
            BrowserInitException: 브라우저 launch 실패
            NavigationException: 브라우저 페이지 이동 실패
        """
        if not query or not isinstance(query, str) or not query.strip():
            raise ValueError(f"Invalid query: {query!r}")
        if not isinstance(count, int) or count < 1:
            raise ValueError(f"Invalid count: {count!r}")

        budget = BudgetManager(self.budget_config, deadline_s=timeout_s)
        budget.start()
        key = build_cache_key(query, count)
        safe_query = sanitize_for_log(query)

        # 1. Cache 확인
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Search completed from cache: query='{safe_query}', items={len(cached)}")
            return SearchResult.from_cache(cached[:count], query, count, budget.elapsed() * 1000)

        logger.info(f"Search started: query='{safe_query}', count={count}")

        # 2. FastPath
        extraction = await self._try_fastpath(query, count, budget)

        # 3. 부족하면 SlowPath로 승격 (결과는 SlowPath 것으로 교체)
        if self.strategy.should_escalate(extraction.count, count):
            logger.info(
                f"Escalating to slowpath: query='{safe_query}', fastpath_items={extraction.count}, "
                f"required={self.strategy.required_count(count)}"
            )
            extraction = await self._try_slowpath(query, count, budget)

        # 4. 검증 + 절단
        listings = self._finalize(extraction.listings, count)

        # 5. 캐시 저장 (TIMEOUT/BLOCKED로 끝난 빈 결과는 제외)
        if listings or extraction.outcome not in _EMPTY_STATUS:
            self.cache.put(key, listings)
        else:
            logger.info(f"[Cache] Skipping degraded empty result: query='{safe_query}', outcome={extraction.outcome.value}")

        status = self._resolve_status(extraction, listings)
        logger.info(
            f"Search completed: query='{safe_query}', status={status.value}, items={len(listings)}, "
            f"elapsed={budget.elapsed():.2f}s"
        )
        logger.debug(f"Budget report: {budget.get_report()}")
        return SearchResult.from_tier(
            status=status,
            listings=listings,
            query=query,
            requested_count=count,
            source=extraction.source,
            elapsed_ms=budget.elapsed() * 1000,
        )

    async def _try_fastpath(self, query: str, count: int, budget: BudgetManager) -> ExtractionResult:
        timeout = budget.get_timeout_for("fastpath")
        try:
            result = await asyncio.wait_for(self.fastpath.execute(query, count), timeout=timeout)
        except asyncio.TimeoutError:
            budget.checkpoint("fastpath_timeout")
            logger.warning(f"FastPath timeout: query='{sanitize_for_log(query)}', timeout={timeout:.2f}s")
            return ExtractionResult.timeout("fastpath")
        except Exception as e:
            budget.checkpoint("fastpath_failed")
            logger.warning(f"FastPath failed: query='{sanitize_for_log(query)}', error={type(e).__name__}: {e}")
            return ExtractionResult.empty("fastpath")

        budget.checkpoint("fastpath_done")
        return result

    async def _try_slowpath(self, query: str, count: int, budget: BudgetManager) -> ExtractionResult:
        timeout = budget.get_timeout_for("slowpath")
        try:
            result = await asyncio.wait_for(self.slowpath.execute(query, count), timeout=timeout)
        except asyncio.TimeoutError:
            budget.checkpoint("slowpath_timeout")
            logger.warning(f"SlowPath timeout: query='{sanitize_for_log(query)}', timeout={timeout:.2f}s")
            return ExtractionResult.timeout("slowpath")

        budget.checkpoint("slowpath_done")
        return result

    @staticmethod
    def _finalize(listings: List[ProductListing], count: int) -> List[ProductListing]:
        return [item for item in listings if item.is_displayable()][:count]

    @staticmethod
    def _resolve_status(extraction: ExtractionResult, listings: List[ProductListing]) -> SearchStatus:
        if listings:
            return _SUCCESS_STATUS.get(extraction.source, SearchStatus.FASTPATH_SUCCESS)
        return _EMPTY_STATUS.get(extraction.outcome, SearchStatus.NO_RESULTS)
