"""Playwright 공용 브라우저/페이지 관리.

프로세스 수명 동안 브라우저 하나와 페이지 하나를 재사용합니다.
- 초기화는 single-flight: 동시에 여러 요청이 와도 launch는 한 번만 일어남
- 페이지 사용은 직렬화: 한 번에 하나의 검색만 페이지를 조작
- 연결이 끊겼거나 페이지가 닫혔으면 다음 사용 시 다시 띄움
"""

from __future__ import annotations

import asyncio
import random
from typing import Any, Callable, Optional, Tuple

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from product_feed.core.config import settings
from product_feed.core.exceptions import BrowserInitException, NavigationException
from product_feed.core.logging import logger, sanitize_for_log
from product_feed.crawlers.extraction_rules import SEARCH_RESULT_RULES, CardRules
from product_feed.crawlers.http_client import default_headers
from product_feed.crawlers.parsing import collect_listings, get_blocked_keyword
from product_feed.crawlers.result import ExtractionResult

from .pages import configure_page
from .search import extract_raw_listings


def build_launch_args(width: Optional[int] = None, height: Optional[int] = None) -> list[str]:
    w = width or settings.crawler_viewport_width
    h = height or settings.crawler_viewport_height
    return [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-accelerated-2d-canvas",
        "--no-first-run",
        "--no-zygote",
        "--disable-gpu",
        "--disable-features=VizDisplayCompositor",
        f"--window-size={w},{h}",
    ]


class BrowserManager:
    """공유 헤드리스 브라우저 핸들

    Args:
        launch_retries: launch 시도 횟수 (1 이상)
        settle_delay_s: 결과 selector 등장 후 추출 전 대기 범위 (min, max)
        navigation_timeout_ms: page.goto 타임아웃
        selector_timeout_ms: 결과 카드 selector 대기 타임아웃
        max_cards: in-page 스크립트가 검사할 최대 카드 수
        rules: 카드 추출 규칙
        playwright_factory: async_playwright 대체 (테스트용)
    """

    def __init__(
        self,
        *,
        launch_retries: Optional[int] = None,
        settle_delay_s: Optional[Tuple[float, float]] = None,
        navigation_timeout_ms: Optional[int] = None,
        selector_timeout_ms: Optional[int] = None,
        max_cards: Optional[int] = None,
        rules: CardRules = SEARCH_RESULT_RULES,
        base_url: Optional[str] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        self.launch_retries = max(1, launch_retries or settings.crawler_browser_launch_retries)
        self.settle_delay_s = settle_delay_s or (
            settings.crawler_settle_delay_min_s,
            settings.crawler_settle_delay_max_s,
        )
        self.navigation_timeout_ms = navigation_timeout_ms or settings.crawler_navigation_timeout_ms
        self.selector_timeout_ms = selector_timeout_ms or settings.crawler_selector_timeout_ms
        self.max_cards = max_cards or settings.crawler_browser_max_cards
        self.rules = rules
        self.base_url = base_url or settings.target_base_url
        self._playwright_factory = playwright_factory

        self._init_lock = asyncio.Lock()
        self._page_lock = asyncio.Lock()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def is_ready(self) -> bool:
        try:
            return (
                self._browser is not None
                and self._browser.is_connected()
                and self._page is not None
                and not self._page.is_closed()
            )
        except PlaywrightError:
            return False

    async def ensure_ready(self) -> Page:
        """브라우저/페이지를 준비해서 반환 (이미 살아 있으면 재사용)

        Raises:
            BrowserInitException: 재시도 후에도 launch 실패
        """
        async with self._init_lock:
            if self.is_ready:
                return self._page

            await self._teardown()

            last_err: Optional[Exception] = None
            for attempt in range(1, self.launch_retries + 1):
                try:
                    logger.info(f"[Playwright] Launching browser (attempt {attempt}/{self.launch_retries})...")
                    await self._launch()
                    logger.info("[Playwright] Browser launched successfully (shared)")
                    return self._page
                except asyncio.CancelledError:
                    await self._teardown()
                    raise
                except Exception as e:
                    last_err = e
                    logger.error(
                        f"[Playwright] Failed to launch browser (attempt {attempt}/{self.launch_retries}): "
                        f"{type(e).__name__}: {e}"
                    )
                    await self._teardown()
                    if attempt < self.launch_retries:
                        wait_time = min(2.0 * attempt, 10.0)
                        logger.info(f"[Playwright] Waiting {wait_time:.1f}s before retry...")
                        await asyncio.sleep(wait_time)

            raise BrowserInitException(f"{type(last_err).__name__}: {last_err}")

    async def _launch(self) -> None:
        self._playwright = await self._playwright_factory().start()
        self._browser = await self._playwright.chromium.launch(
            headless=True,
            args=build_launch_args(),
            timeout=self.navigation_timeout_ms,
        )
        self._context = await self._browser.new_context(
            user_agent=settings.crawler_user_agent,
            viewport={
                "width": settings.crawler_viewport_width,
                "height": settings.crawler_viewport_height,
            },
            locale="en-US",
            extra_http_headers={k: v for k, v in default_headers().items() if k != "User-Agent"},
        )
        page = await self._context.new_page()
        self._page = await configure_page(page, default_timeout_ms=self.navigation_timeout_ms)

    async def search(self, url: str, count: int) -> ExtractionResult:
        """결과 페이지로 이동해 카드를 추출

        Args:
            url: 검색 결과 페이지 URL
            count: 최대 수집 개수

        Returns:
            ExtractionResult: OK / EMPTY / TIMEOUT(selector 미등장) / BLOCKED

        Raises:
            BrowserInitException: 브라우저 launch 실패
            NavigationException: 페이지 이동 실패
        """
        async with self._page_lock:
            page = await self.ensure_ready()

            try:
                await page.goto(url, wait_until="domcontentloaded", timeout=self.navigation_timeout_ms)
            except PlaywrightError as e:
                logger.warning(f"[Playwright] Navigation failed: {sanitize_for_log(str(e))}")
                raise NavigationException(url, f"{type(e).__name__}: {e}") from e

            try:
                await page.wait_for_selector(self.rules.card_selector, timeout=self.selector_timeout_ms)
            except PlaywrightTimeoutError:
                return await self._classify_missing_results(page)
            except PlaywrightError as e:
                raise NavigationException(url, f"{type(e).__name__}: {e}") from e

            low, high = self.settle_delay_s
            if high > 0:
                await asyncio.sleep(random.uniform(low, high))

            try:
                records = await extract_raw_listings(page, self.rules, self.max_cards)
            except PlaywrightError as e:
                logger.warning(f"[Playwright] Extraction script failed: {type(e).__name__}: {e}")
                return ExtractionResult.empty("slowpath")

            listings = collect_listings(records, count, self.base_url)
            logger.debug(f"[Playwright] Extracted {len(listings)} listings from {len(records)} cards")
            return ExtractionResult.from_listings(listings, "slowpath")

    async def _classify_missing_results(self, page: Page) -> ExtractionResult:
        try:
            html = await page.content()
        except PlaywrightError:
            html = ""

        keyword = get_blocked_keyword(html)
        if keyword:
            logger.warning(f"[Playwright] Blocked page detected: keyword='{keyword}'")
            return ExtractionResult.blocked("slowpath")

        logger.info("[Playwright] Result selector did not appear in time")
        return ExtractionResult.timeout("slowpath")

    async def warmup(self) -> None:
        await self.ensure_ready()

    async def close(self) -> None:
        """진행 중인 검색이 끝난 뒤 브라우저 정리 (아무것도 없으면 no-op)"""
        async with self._page_lock:
            async with self._init_lock:
                await self._teardown()

    async def _teardown(self) -> None:
        if self._context is not None:
            try:
                await self._context.close()
            except Exception as e:
                logger.warning(f"[Playwright] Failed to close context: {type(e).__name__}: {e}")
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning(f"[Playwright] Failed to close browser: {type(e).__name__}: {e}")
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning(f"[Playwright] Failed to stop playwright: {type(e).__name__}: {e}")

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
