"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 수집 대상
    target_base_url: str = "https://www.amazon.com"
    best_sellers_url: str = "https://www.amazon.com/Best-Sellers/zgbs"

    # 크롤러 공통
    crawler_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # Lightweight(HTTP) 경로
    crawler_http_impersonate: str = "chrome120"
    crawler_http_timeout_s: float = 10.0
    crawler_http_max_clients: int = 10

    # Playwright 경로
    # - navigation: page.goto 타임아웃
    # - selector: 검색 결과 카드가 나타날 때까지 대기하는 타임아웃
    crawler_navigation_timeout_ms: int = 30000
    crawler_selector_timeout_ms: int = 15000
    crawler_settle_delay_min_s: float = 1.0
    crawler_settle_delay_max_s: float = 3.0
    crawler_viewport_width: int = 1920
    crawler_viewport_height: int = 1080
    crawler_browser_launch_retries: int = 2
    crawler_browser_max_cards: int = 48

    # "playwright" | "disabled" (저메모리 환경에서는 브라우저 폴백 비활성화)
    crawler_slowpath_backend: str = "playwright"

    # 앱 시작 시 브라우저를 미리 띄울지 여부
    # 기본값 False: Lightweight 경로가 부족할 때만 lazy-launch
    crawler_playwright_warmup: bool = False

    # 요청 1건당 단계별 예산 (초)
    crawler_total_budget_s: float = 60.0
    crawler_fastpath_timeout_s: float = 10.0
    crawler_slowpath_timeout_s: float = 48.0

    # 결과 캐시
    cache_ttl_seconds: int = 600  # 10분

    # 클라이언트별 Rate Limit (슬라이딩 윈도우)
    rate_limit_max_requests: int = 10
    rate_limit_window_seconds: float = 60.0

    # 상품 API
    products_default_category: str = "electronics"
    products_default_count: int = 6
    products_max_count: int = 12

    # Lightweight 결과가 min(escalation_threshold, count) 미만이면 Playwright로 승격
    escalation_threshold: int = 3

    # 표시용 상품 데이터 규칙
    listing_title_max_length: int = 100
    listing_min_title_length: int = 3

    # 트렌딩(베스트셀러) 최소 수집 개수
    trending_min_count: int = 5

    # 요청 전체 하드 캡. Playwright 폴백까지 고려해 예산보다 약간 길게 둡니다.
    api_request_timeout_s: float = 65.0

    # API
    api_title: str = "Product Feed Service"
    api_version: str = "1.0.0"
    api_description: str = "Lightweight → Playwright 계층형 전략으로 외부 상품 목록을 수집합니다."
    service_name: str = "Amazon Product Scraper API"

    # 로깅 (environment="production"이면 DEBUG 억제 + 간결한 포맷)
    log_level: str = "INFO"
    environment: str = "development"

    @field_validator("cache_ttl_seconds", "rate_limit_max_requests", "products_max_count")
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator(
        "crawler_http_timeout_s",
        "crawler_total_budget_s",
        "crawler_fastpath_timeout_s",
        "crawler_slowpath_timeout_s",
        "rate_limit_window_seconds",
        "api_request_timeout_s",
    )
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts and windows must be positive")
        return v

    @field_validator("crawler_navigation_timeout_ms", "crawler_selector_timeout_ms")
    @classmethod
    def validate_browser_timeouts(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("browser timeouts must be positive")
        return v

    @field_validator("crawler_browser_launch_retries")
    @classmethod
    def validate_launch_retries(cls, v: int) -> int:
        if v < 1:
            raise ValueError("crawler_browser_launch_retries must be >= 1")
        return v

    @field_validator("crawler_slowpath_backend")
    @classmethod
    def validate_slowpath_backend(cls, v: str) -> str:
        backend = (v or "").strip().lower()
        if backend not in {"playwright", "disabled"}:
            raise ValueError(f"Unsupported crawler_slowpath_backend: {v}")
        return backend

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
