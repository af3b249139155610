"""Execution Strategy - Fast/Slow Path Decision Logic"""

from typing import Optional

from product_feed.core.config import settings


class EscalationStrategy:
    """SlowPath 승격 여부 결정

    Usage:
        strategy = EscalationStrategy()

        fast = await fastpath.execute(query, count)
        if strategy.should_escalate(fast.count, count):
            slow = await slowpath.execute(query, count)
    """

    def __init__(self, threshold: Optional[int] = None):
        self.threshold = threshold or settings.escalation_threshold

    def required_count(self, requested: int) -> int:
        """FastPath가 채워야 하는 최소 개수: min(threshold, requested)"""
        return min(self.threshold, requested)

    def should_escalate(self, found: int, requested: int) -> bool:
        """
        Args:
            found: FastPath가 수집한 개수
            requested: 요청된 개수

        Returns:
            bool: found < min(threshold, requested)이면 True
        """
        return found < self.required_count(requested)
