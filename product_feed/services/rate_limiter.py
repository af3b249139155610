"""클라이언트별 슬라이딩 윈도우 Rate Limiter"""
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional

from product_feed.core.config import settings
from product_feed.core.logging import logger


class SlidingWindowRateLimiter:
    """최근 window_seconds 동안 max_requests개까지만 허용

    거절된 요청은 윈도우에 기록하지 않습니다.
    윈도우가 빈 클라이언트는 추적 목록에서 제거합니다 (window_seconds마다 전체 정리).
    """

    def __init__(
        self,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.max_requests = max_requests or settings.rate_limit_max_requests
        self.window_seconds = window_seconds or settings.rate_limit_window_seconds
        self._clock = clock
        self._windows: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    @property
    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._windows)

    def _evict(self, window: Deque[float], now: float) -> None:
        while window and now - window[0] >= self.window_seconds:
            window.popleft()

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return
        stale = [
            cid for cid, window in self._windows.items()
            if not window or now - window[-1] >= self.window_seconds
        ]
        for cid in stale:
            del self._windows[cid]
        self._last_sweep = now
        if stale:
            logger.debug(f"[RateLimit] Dropped idle clients: {len(stale)}")

    def admit(self, client_id: str) -> bool:
        """요청 허용 여부 판단 (허용 시 현재 시각 기록)"""
        now = self._clock()
        with self._lock:
            self._sweep(now)
            window = self._windows.get(client_id)
            if window is not None:
                self._evict(window, now)
                if len(window) >= self.max_requests:
                    logger.warning(f"[RateLimit] Rejected: client={client_id}, in_window={len(window)}")
                    return False
            else:
                window = self._windows[client_id] = deque()
            window.append(now)
            return True

    def retry_after(self, client_id: str) -> float:
        """가장 오래된 요청이 윈도우를 벗어날 때까지 남은 초 (여유가 있으면 0)"""
        now = self._clock()
        with self._lock:
            window = self._windows.get(client_id)
            if not window:
                return 0.0
            self._evict(window, now)
            if len(window) < self.max_requests:
                return 0.0
            return max(0.0, self.window_seconds - (now - window[0]))

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
