"""Product listing crawler modules (hybrid HTTP + Playwright).

공개 API는 이 파일에서만 export합니다.
"""

from .executor import SearchExecutor
from .result import ExtractionOutcome, ExtractionResult
from .http_client import HttpClient
from .fastpath_executor import FastPathExecutor
from .slowpath_executor import SlowPathExecutor
from .disabled_slowpath_executor import DisabledSlowPathExecutor
from .trending import TRENDING_CACHE_KEY, TrendingFetcher

__all__ = [
    "SearchExecutor",
    "ExtractionOutcome",
    "ExtractionResult",
    "HttpClient",
    "FastPathExecutor",
    "SlowPathExecutor",
    "DisabledSlowPathExecutor",
    "TRENDING_CACHE_KEY",
    "TrendingFetcher",
]
