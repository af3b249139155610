"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Dummy/Fake 주입 (실행자, 시계, HTTP 클라이언트, Playwright 객체)

금지:
- 실제 네트워크 I/O
- 실제 브라우저 실행
"""

from __future__ import annotations

import asyncio
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from product_feed.crawlers.result import ExtractionResult  # noqa: E402
from product_feed.schemas.product_schema import ProductListing  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


# ============================================================================
# 공통 Fake
# ============================================================================

class FakeClock:
    """수동으로 진행시키는 시계 (TTL/슬라이딩 윈도우 테스트용)"""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_listing(index: int, **overrides: str) -> ProductListing:
    """표시 가능한 상품 1건 생성"""
    data = {
        "title": f"Test Product Number {index}",
        "price": f"${index}.99",
        "image": f"https://m.media-amazon.com/images/I/{index}.jpg",
        "rating": "4.5",
        "url": f"https://www.amazon.com/dp/B{index:09d}",
    }
    data.update(overrides)
    return ProductListing(**data)


Step = Union[ExtractionResult, BaseException]


@dataclass
class FakeExecutor:
    """SearchExecutor 더미

    - steps: 호출마다 순서대로 반환(또는 raise)할 값. 마지막 값은 반복 사용
    - delay: 반환 전 대기 시간 (타임아웃 테스트용)
    """

    steps: list[Step]
    delay: float = 0.0
    calls: list[tuple[str, int]] = field(default_factory=list)

    async def execute(self, query: str, count: int) -> ExtractionResult:
        self.calls.append((query, count))
        if self.delay:
            await asyncio.sleep(self.delay)
        step = self.steps[min(len(self.calls) - 1, len(self.steps) - 1)]
        if isinstance(step, BaseException):
            raise step
        return step


@dataclass
class FakeResponse:
    status_code: int
    text: str = ""


class FakeHttpClient:
    """HttpClient 더미 (fetch_html만 구현)"""

    def __init__(self, html: Union[str, BaseException] = ""):
        self.html = html
        self.calls: list[str] = []

    async def fetch_html(self, url: str, *, timeout_s: Optional[float] = None, headers=None) -> str:
        self.calls.append(url)
        if isinstance(self.html, BaseException):
            raise self.html
        return self.html

    async def close(self) -> None:
        return None


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def listing_factory() -> Callable[..., ProductListing]:
    return make_listing


@pytest.fixture
def listings_factory() -> Callable[[int], list[ProductListing]]:
    def _build(n: int, start: int = 1) -> list[ProductListing]:
        return [make_listing(i) for i in range(start, start + n)]

    return _build


@pytest.fixture
def executor_factory() -> Callable[..., FakeExecutor]:
    def _build(*steps: Step, delay: float = 0.0) -> FakeExecutor:
        return FakeExecutor(steps=list(steps), delay=delay)

    return _build


@pytest.fixture
def http_client_factory() -> Callable[..., FakeHttpClient]:
    return FakeHttpClient


@pytest.fixture
def response_factory() -> Callable[..., FakeResponse]:
    return FakeResponse


# ============================================================================
# Playwright Fake (브라우저를 띄우지 않음)
# ============================================================================

class FakePage:
    def __init__(self, owner: "FakePlaywrightWorld"):
        self.owner = owner
        self.closed = False
        self.default_timeout: Optional[int] = None
        self.extra_headers: dict[str, str] = {}
        self.routes: list[tuple[str, Any]] = []
        self.visited: list[str] = []

    def set_default_timeout(self, timeout: int) -> None:
        self.default_timeout = timeout

    async def route(self, pattern: str, handler) -> None:
        self.routes.append((pattern, handler))

    async def set_extra_http_headers(self, headers: dict[str, str]) -> None:
        self.extra_headers = dict(headers)

    async def goto(self, url: str, wait_until: str = "load", timeout: Optional[int] = None):
        world = self.owner
        world.active += 1
        world.max_active = max(world.max_active, world.active)
        try:
            self.visited.append(url)
            if world.goto_delay:
                await asyncio.sleep(world.goto_delay)
            if world.goto_error is not None:
                raise world.goto_error
        finally:
            world.active -= 1

    async def wait_for_selector(self, selector: str, timeout: Optional[int] = None):
        if self.owner.selector_error is not None:
            raise self.owner.selector_error
        return object()

    async def content(self) -> str:
        return self.owner.content_html

    async def evaluate(self, script: str, arg: Any = None):
        self.owner.evaluate_args.append(arg)
        if self.owner.evaluate_error is not None:
            raise self.owner.evaluate_error
        return self.owner.records[: arg["maxCards"]]

    def is_closed(self) -> bool:
        return self.closed

    async def close(self) -> None:
        self.closed = True


class FakeContext:
    def __init__(self, owner: "FakePlaywrightWorld", options: dict[str, Any]):
        self.owner = owner
        self.options = options
        self.closed = False
        self.pages: list[FakePage] = []

    async def new_page(self) -> FakePage:
        page = FakePage(self.owner)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.closed = True
        for page in self.pages:
            page.closed = True


class FakeBrowser:
    def __init__(self, owner: "FakePlaywrightWorld"):
        self.owner = owner
        self.connected = True
        self.contexts: list[FakeContext] = []

    def is_connected(self) -> bool:
        return self.connected

    async def new_context(self, **options: Any) -> FakeContext:
        context = FakeContext(self.owner, options)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.connected = False
        self.owner.browser_closes += 1


class FakeChromium:
    def __init__(self, owner: "FakePlaywrightWorld"):
        self.owner = owner

    async def launch(self, **kwargs: Any) -> FakeBrowser:
        world = self.owner
        world.launch_calls += 1
        world.launch_kwargs.append(kwargs)
        if world.launch_delay:
            await asyncio.sleep(world.launch_delay)
        if world.launch_failures > 0:
            world.launch_failures -= 1
            raise RuntimeError("chromium executable not found")
        browser = FakeBrowser(world)
        world.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self, owner: "FakePlaywrightWorld"):
        self.chromium = FakeChromium(owner)
        self.owner = owner

    async def stop(self) -> None:
        self.owner.stops += 1


class _FakePlaywrightContextManager:
    def __init__(self, owner: "FakePlaywrightWorld"):
        self.owner = owner

    async def start(self) -> FakePlaywright:
        self.owner.starts += 1
        return FakePlaywright(self.owner)


@dataclass
class FakePlaywrightWorld:
    """async_playwright()를 대체하는 가짜 Playwright 환경

    BrowserManager(playwright_factory=world.factory)로 주입합니다.
    """

    records: list[dict[str, Optional[str]]] = field(default_factory=list)
    content_html: str = "<html><body>no results</body></html>"
    launch_failures: int = 0
    launch_delay: float = 0.0
    goto_delay: float = 0.0
    goto_error: Optional[BaseException] = None
    selector_error: Optional[BaseException] = None
    evaluate_error: Optional[BaseException] = None

    starts: int = 0
    stops: int = 0
    launch_calls: int = 0
    browser_closes: int = 0
    active: int = 0
    max_active: int = 0
    launch_kwargs: list[dict[str, Any]] = field(default_factory=list)
    evaluate_args: list[Any] = field(default_factory=list)
    browsers: list[FakeBrowser] = field(default_factory=list)

    def factory(self) -> _FakePlaywrightContextManager:
        return _FakePlaywrightContextManager(self)


@pytest.fixture
def playwright_world() -> FakePlaywrightWorld:
    return FakePlaywrightWorld()
