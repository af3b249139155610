"""SlowPath Executor - 헤드리스 브라우저 렌더링"""

from typing import Optional

from product_feed.core.config import settings
from product_feed.core.logging import logger, sanitize_for_log
from product_feed.utils.url_utils import build_search_url

from .executor import SearchExecutor
from .playwright.browser import BrowserManager
from .result import ExtractionResult


class SlowPathExecutor(SearchExecutor):
    """Playwright 기반 느린 경로 실행자

    특징:
    - 공유 브라우저(BrowserManager)를 lazy-launch 후 재사용
    - JavaScript 렌더링이 필요한 결과 페이지 처리
    - 브라우저 실행/페이지 이동 실패는 예외로 전파

    Usage:
        executor = SlowPathExecutor(BrowserManager())
        result = await executor.execute("wireless earbuds", 6)
    """

    def __init__(self, browser_manager: BrowserManager, base_url: Optional[str] = None):
        self.browser_manager = browser_manager
        self.base_url = base_url or settings.target_base_url

    async def execute(self, query: str, count: int) -> ExtractionResult:
        url = build_search_url(query, self.base_url, ref="sr_pg_1")
        logger.debug(f"[SlowPath] Executing: query='{sanitize_for_log(query)}', count={count}")
        return await self.browser_manager.search(url, count)

    async def close(self) -> None:
        """브라우저 리소스 정리"""
        await self.browser_manager.close()
