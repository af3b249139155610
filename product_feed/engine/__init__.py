"""Engine Layer - Core Orchestration

This module provides the core engine layer for the product feed:
- SearchOrchestrator: Main entry point for search execution
- BudgetManager: Per-request time budget (60s by default)
- SearchResult: Standardized result format
- EscalationStrategy: FastPath → SlowPath decision logic
"""

from .budget import BudgetConfig, BudgetManager
from .orchestrator import SearchOrchestrator
from .result import SearchResult, SearchStatus
from .strategy import EscalationStrategy

__all__ = [
    "SearchOrchestrator",
    "BudgetManager",
    "BudgetConfig",
    "SearchResult",
    "SearchStatus",
    "EscalationStrategy",
]
