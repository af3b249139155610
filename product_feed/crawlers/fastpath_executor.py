"""FastPath Executor - HTTP 요청 + 정적 HTML 파싱"""

from typing import Optional

from product_feed.core.config import settings
from product_feed.core.logging import logger, sanitize_for_log
from product_feed.utils.url_utils import build_search_url

from .executor import SearchExecutor
from .http_client import HttpClient
from .parsing import get_blocked_keyword, parse_search_results
from .result import ExtractionResult


class FastPathExecutor(SearchExecutor):
    """HTTP 기반 빠른 경로 실행자

    특징:
    - 브라우저 없이 검색 결과 HTML을 받아 selectolax로 파싱
    - 차단 페이지는 BLOCKED, 카드 0건은 EMPTY로 구분
    - 연결 실패/non-2xx는 NetworkException으로 전파 (오케스트레이터가 0건으로 취급)
    """

    def __init__(self, http_client: HttpClient, base_url: Optional[str] = None):
        self.http_client = http_client
        self.base_url = base_url or settings.target_base_url

    async def execute(self, query: str, count: int) -> ExtractionResult:
        url = build_search_url(query, self.base_url)
        logger.debug(f"[FastPath] Executing: query='{sanitize_for_log(query)}', count={count}")

        html = await self.http_client.fetch_html(url)

        keyword = get_blocked_keyword(html)
        if keyword:
            logger.warning(f"[FastPath] Blocked page detected: keyword='{keyword}'")
            return ExtractionResult.blocked("fastpath")

        listings = parse_search_results(html, count, self.base_url)
        logger.debug(f"[FastPath] Parsed {len(listings)} listings")
        return ExtractionResult.from_listings(listings, "fastpath")
