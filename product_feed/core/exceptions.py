"""커스텀 예외 정의 (Structured Exception Hierarchy)

복구 가능 여부는 계층이 아니라 호출 위치가 결정합니다.
- Lightweight 단계의 NetworkException: 결과 0건으로 취급
- Playwright 단계의 BrowserInitException / NavigationException: 요청 실패(500)
- RateLimitExceededException: 클라이언트 응답 429
"""
from typing import Any, Optional


class ProductFeedException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 크롤러 관련 예외
class CrawlerException(ProductFeedException):
    """크롤러 관련 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "CRAWLER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CRAWLER_ERROR", details)


class NetworkException(CrawlerException):
    """HTTP 요청 실패 (연결 오류 또는 non-2xx)"""
    def __init__(self, url: str, reason: str, status_code: Optional[int] = None, details: Optional[dict[str, Any]] = None):
        message = f"Request to {url} failed: {reason}"
        self.url = url
        self.status_code = status_code
        super().__init__(message, "NETWORK_ERROR",
                         details or {"url": url, "reason": reason, "status_code": status_code})


class BrowserException(CrawlerException):
    """브라우저 관련 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "BROWSER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "BROWSER_ERROR", details)


class BrowserInitException(BrowserException):
    """브라우저 프로세스를 띄우지 못함 (요청 단위 치명적 오류)"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Browser launch failed: {reason}"
        super().__init__(message, "BROWSER_INIT_ERROR", details or {"reason": reason})


class NavigationException(BrowserException):
    """페이지 이동 실패 (DNS, 무응답 등). 브라우저 자체는 계속 사용 가능"""
    def __init__(self, url: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Navigation to {url} failed: {reason}"
        super().__init__(message, "NAVIGATION_ERROR", details or {"url": url, "reason": reason})


# 클라이언트 요청 제한
class RateLimitExceededException(ProductFeedException):
    """슬라이딩 윈도우 요청 한도 초과"""
    def __init__(self, client_id: str, retry_after_s: float, details: Optional[dict[str, Any]] = None):
        message = "Too many requests"
        self.client_id = client_id
        self.retry_after_s = retry_after_s
        super().__init__(message, "RATE_LIMITED",
                         details or {"client_id": client_id, "retry_after_s": retry_after_s})
