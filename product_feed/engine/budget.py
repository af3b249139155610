"""Budget Manager - 요청 1건의 시간 예산 관리

예산 할당 구조 (기본값):
- 전체: 60초
- FastPath(HTTP): 10초
- SlowPath(Playwright): 48초 (launch + goto 30초 + selector 대기 15초 + settle)
- 버퍼: 2초
"""

from dataclasses import dataclass
from time import monotonic
from typing import Callable, Optional

from product_feed.core.config import settings


@dataclass
class BudgetConfig:
    """예산 설정"""

    total_budget: float = 60.0  # 전체 예산 (초)
    fastpath_timeout: float = 10.0  # FastPath
    slowpath_timeout: float = 48.0  # SlowPath

    def __post_init__(self):
        """설정 검증"""
        if self.total_budget <= 0 or self.fastpath_timeout <= 0 or self.slowpath_timeout <= 0:
            raise ValueError("Budget values must be positive")
        sum_timeouts = self.fastpath_timeout + self.slowpath_timeout
        if sum_timeouts > self.total_budget:
            raise ValueError(
                f"Sum of timeouts ({sum_timeouts}s) exceeds total budget ({self.total_budget}s)"
            )

    @classmethod
    def from_settings(cls) -> "BudgetConfig":
        return cls(
            total_budget=settings.crawler_total_budget_s,
            fastpath_timeout=settings.crawler_fastpath_timeout_s,
            slowpath_timeout=settings.crawler_slowpath_timeout_s,
        )


class BudgetManager:
    """시간 예산 관리자

    요청마다 새로 만들어 사용합니다 (동시 요청 간 상태 공유 없음).

    Usage:
        manager = BudgetManager(config, deadline_s=30.0)
        manager.start()

        timeout = manager.get_timeout_for("fastpath")
        manager.checkpoint("fastpath_done")

        report = manager.get_report()
    """

    def __init__(
        self,
        config: Optional[BudgetConfig] = None,
        deadline_s: Optional[float] = None,
        clock: Callable[[], float] = monotonic,
    ):
        """
        Args:
            config: 예산 설정
            deadline_s: 호출자가 지정한 상한. 전체 예산보다 작을 때만 적용
            clock: 시간 함수 (테스트용)
        """
        self.config = config or BudgetConfig()
        self.total_budget = self.config.total_budget
        if deadline_s is not None and deadline_s > 0:
            self.total_budget = min(self.total_budget, deadline_s)
        self._clock = clock
        self.start_time: Optional[float] = None
        self._checkpoints: dict[str, float] = {}

    def start(self) -> None:
        """예산 측정 시작"""
        self.start_time = self._clock()
        self._checkpoints.clear()

    def checkpoint(self, name: str) -> None:
        """start() 이후 경과 시간을 name으로 기록 (start 전 호출 시 RuntimeError)"""
        if self.start_time is None:
            raise RuntimeError("Budget not started. Call start() first.")
        self._checkpoints[name] = self._clock() - self.start_time

    def elapsed(self) -> float:
        """경과 시간 (초). start() 전에는 0.0"""
        if self.start_time is None:
            return 0.0
        return self._clock() - self.start_time

    def remaining(self) -> float:
        return max(0.0, self.total_budget - self.elapsed())

    def get_timeout_for(self, stage: str) -> float:
        """단계 상한과 남은 예산 중 작은 값. 알 수 없는 단계는 남은 예산 전부."""
        limit = {
            "fastpath": self.config.fastpath_timeout,
            "slowpath": self.config.slowpath_timeout,
        }.get(stage)
        remaining = self.remaining()
        return remaining if limit is None else min(limit, remaining)

    def get_report(self) -> dict:
        return {
            "total_budget": self.total_budget,
            "elapsed": self.elapsed(),
            "remaining": self.remaining(),
            "checkpoints": self._checkpoints.copy(),
        }
