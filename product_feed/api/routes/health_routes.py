"""헬스 체크 엔드포인트"""
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from product_feed import __version__
from product_feed.core.config import settings
from product_feed.schemas.product_schema import ServiceHealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=ServiceHealthResponse)
async def health_check(request: Request):
    """
    헬스 체크 엔드포인트

    - 서버 상태
    - 브라우저 준비 여부 (lazy-launch 전에는 False가 정상)
    - 캐시 항목 수
    """
    browser_manager = getattr(request.app.state, "browser_manager", None)
    browser_ready = bool(browser_manager is not None and browser_manager.is_ready)

    return ServiceHealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        browser_ready=browser_ready,
        cache_size=request.app.state.cache.size,
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": settings.service_name,
        "version": __version__,
        "docs": "/docs",
    }
