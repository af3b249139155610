"""인메모리 결과 캐시 - TTL 기반, 읽을 때만 만료 처리"""
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from product_feed.core.config import settings
from product_feed.core.logging import logger
from product_feed.schemas.product_schema import ProductListing


@dataclass
class CacheEntry:
    key: str
    data: List[ProductListing]
    timestamp: float


class ResultCache:
    """검색 결과 캐시

    - 항목은 저장 시각(timestamp)과 함께 보관
    - get() 시점에 TTL이 지난 항목은 제거하고 None 반환 (주기적 sweep 없음)
    - 같은 키에 대한 get/put은 lock으로 원자적으로 처리
    """

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.cache_ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[List[ProductListing]]:
        """
        캐시 조회

        Args:
            key: 캐시 키

        Returns:
            신선한 데이터(복사본) 또는 None
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug(f"[Cache] Miss: key={key}")
                return None

            age = self._clock() - entry.timestamp
            if age >= self.ttl_seconds:
                del self._entries[key]
                logger.debug(f"[Cache] Expired: key={key}, age={age:.1f}s")
                return None

            logger.info(f"[Cache] Hit: key={key}, age={age:.1f}s")
            return list(entry.data)

    def put(self, key: str, data: List[ProductListing]) -> None:
        """캐시 저장 (같은 키는 덮어씀)"""
        with self._lock:
            self._entries[key] = CacheEntry(key=key, data=list(data), timestamp=self._clock())
        logger.debug(f"[Cache] Set: key={key}, items={len(data)}")

    @property
    def size(self) -> int:
        """만료 여부와 관계없이 보관 중인 항목 수"""
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
