"""공유 HTTP 클라이언트 (curl_cffi)

- 요청마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커지므로
  앱 단위로 세션 하나를 재사용합니다.
- 브라우저 지문(impersonate)과 실제 브라우저 헤더를 함께 보냅니다.
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from typing import Dict, Optional

from curl_cffi.requests import AsyncSession

from product_feed.core.config import settings
from product_feed.core.exceptions import NetworkException
from product_feed.core.logging import logger, sanitize_for_log


def default_headers() -> Dict[str, str]:
    return {
        "User-Agent": settings.crawler_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "Upgrade-Insecure-Requests": "1",
    }


class HttpClient:
    def __init__(self, session_factory=AsyncSession) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None
        self._session_factory = session_factory

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = self._session_factory(
                impersonate=settings.crawler_http_impersonate,
                headers=default_headers(),
                allow_redirects=True,
                max_clients=settings.crawler_http_max_clients,
                trust_env=False,
            )
            return self._session

    async def fetch_html(
        self,
        url: str,
        *,
        timeout_s: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """GET 요청 후 본문 텍스트 반환

        Args:
            url: 요청 URL
            timeout_s: 요청 타임아웃 (기본값: settings.crawler_http_timeout_s)
            headers: 추가 헤더

        Returns:
            str: 응답 본문

        Raises:
            NetworkException: 연결 실패 또는 2xx가 아닌 응답
        """
        sess = await self._ensure_session()
        timeout = timeout_s if timeout_s is not None else settings.crawler_http_timeout_s
        try:
            resp = await sess.get(url, headers=headers, timeout=timeout, allow_redirects=True)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] GET failed: {type(e).__name__}: {sanitize_for_log(repr(e))}")
            raise NetworkException(url, f"{type(e).__name__}: {e}") from e

        status = getattr(resp, "status_code", 0) or 0
        if not 200 <= status < 300:
            logger.info(f"[HTTP_CLIENT] Non-2xx response: status={status}, url={sanitize_for_log(url)}")
            raise NetworkException(url, f"HTTP {status}", status_code=status)

        return getattr(resp, "text", "") or ""

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.warning(f"[HTTP_CLIENT] Failed to close session: {type(e).__name__}: {e}")
            self._session = None
