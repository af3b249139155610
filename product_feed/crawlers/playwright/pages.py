"""Playwright page 설정/보조 함수.

Page 생성 후 라우팅(리소스 차단), 헤더 설정 등 공통 설정을 분리합니다.
"""

from __future__ import annotations

from playwright.async_api import Page

from product_feed.core.config import settings
from product_feed.crawlers.http_client import default_headers


# 카드 추출에는 DOM 속성만 필요하므로 실제 바이너리 리소스는 받지 않습니다.
_BLOCKED_RESOURCE_TYPES = {"image", "media", "font"}
_BLOCKED_EXTENSIONS = (
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".webp",
    ".svg",
    ".mp4",
    ".woff",
    ".woff2",
    ".ttf",
)


def should_block_request(resource_type: str, url: str) -> bool:
    if resource_type in _BLOCKED_RESOURCE_TYPES:
        return True
    lowered = (url or "").lower().split("?", 1)[0]
    return lowered.endswith(_BLOCKED_EXTENSIONS)


async def configure_page(page: Page, *, default_timeout_ms: int | None = None) -> Page:
    page.set_default_timeout(default_timeout_ms or settings.crawler_navigation_timeout_ms)

    async def _route_handler(route, request):
        if should_block_request(request.resource_type, request.url):
            await route.abort()
            return
        await route.continue_()

    await page.route("**/*", _route_handler)

    headers = default_headers()
    # User-Agent는 context 단위로 지정되므로 여기서는 제외
    headers.pop("User-Agent", None)
    await page.set_extra_http_headers(headers)

    return page
