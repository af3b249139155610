"""Product Routes - HTTP Layer

HTTP Layer는 요청 파라미터를 해석하고 ProductFeedService로 위임하는 Translator 역할만 수행합니다.
구성 요소(캐시/Rate Limiter/서비스)는 create_app()에서 만들어 app.state에 보관합니다.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from product_feed.core.config import settings
from product_feed.core.exceptions import RateLimitExceededException
from product_feed.core.logging import logger, sanitize_for_log
from product_feed.schemas.product_schema import ErrorResponse, HealthResponse, ProductsResponse
from product_feed.services.cache_service import ResultCache
from product_feed.services.product_feed_service import ProductFeedService
from product_feed.services.rate_limiter import SlidingWindowRateLimiter

router = APIRouter(tags=["products"])


def get_cache(request: Request) -> ResultCache:
    return request.app.state.cache


def get_rate_limiter(request: Request) -> SlidingWindowRateLimiter:
    return request.app.state.rate_limiter


def get_product_feed_service(request: Request) -> ProductFeedService:
    return request.app.state.product_feed_service


def get_client_id(request: Request) -> str:
    """X-Forwarded-For 첫 항목 → 소켓 peer 주소 → "unknown" 순으로 클라이언트 식별"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def enforce_rate_limit(
    request: Request,
    limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> str:
    """
    Raises:
        RateLimitExceededException: 윈도우 한도 초과 (앱 예외 핸들러가 429로 변환)
    """
    client_id = get_client_id(request)
    if not limiter.admit(client_id):
        raise RateLimitExceededException(client_id, limiter.retry_after(client_id))
    return client_id


def parse_count(raw: Optional[str]) -> int:
    """count 파라미터 해석: 숫자가 아니면 기본값, [1, products_max_count]로 고정"""
    try:
        value = int(str(raw).strip()) if raw is not None else settings.products_default_count
    except ValueError:
        value = settings.products_default_count
    return max(1, min(value, settings.products_max_count))


def parse_trending(raw: Optional[str]) -> bool:
    """문자열 "false"일 때만 트렌딩 비활성화"""
    return raw != "false"


@router.get("/products", response_model=ProductsResponse)
async def get_products(
    category: Optional[str] = None,
    count: Optional[str] = None,
    trending: Optional[str] = None,
    client_id: str = Depends(enforce_rate_limit),
    service: ProductFeedService = Depends(get_product_feed_service),
):
    """상품 목록 API

    Flow:
        1. Rate Limit 확인 (초과 시 429)
        2. 파라미터 해석 (category/count/trending)
        3. ProductFeedService에 위임 (Cache → FastPath → SlowPath + 트렌딩)
        4. 실패 시 500 오류 본문
    """
    query = (category or "").strip() or settings.products_default_category
    requested = parse_count(count)
    include_trending = parse_trending(trending)

    logger.info(
        f"[API] Products request: client={client_id}, category='{sanitize_for_log(query)}', "
        f"count={requested}, trending={include_trending}"
    )

    try:
        return await asyncio.wait_for(
            service.get_products(query, requested, include_trending, timeout_s=settings.api_request_timeout_s),
            timeout=settings.api_request_timeout_s,
        )
    except asyncio.TimeoutError:
        logger.error(f"[API] Timeout: category='{sanitize_for_log(query)}'")
        return _error_response("Request timed out")
    except Exception as e:
        logger.error(f"[API] Products request failed: category='{sanitize_for_log(query)}'", exc_info=True)
        return _error_response(str(e))


@router.post("/products", response_model=HealthResponse)
async def products_health(cache: ResultCache = Depends(get_cache)):
    """헬스 프로브 (캐시 크기 포함)"""
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        timestamp=datetime.now(timezone.utc),
        cache_size=cache.size,
    )


def _error_response(message: str) -> JSONResponse:
    body = ErrorResponse(
        error="Failed to fetch products",
        message=message,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))
