"""FastAPI 앱 팩토리"""
import math
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from product_feed.api import health_router, product_router
from product_feed.core.config import settings
from product_feed.core.exceptions import ProductFeedException, RateLimitExceededException
from product_feed.core.logging import logger
from product_feed.crawlers import (
    DisabledSlowPathExecutor,
    FastPathExecutor,
    HttpClient,
    SlowPathExecutor,
    TrendingFetcher,
)
from product_feed.crawlers.playwright import BrowserManager
from product_feed.engine import SearchOrchestrator
from product_feed.schemas.product_schema import ErrorResponse
from product_feed.services import ResultCache, SlidingWindowRateLimiter
from product_feed.services.product_feed_service import ProductFeedService


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기"""
    logger.info("Starting application...")
    browser_manager: Optional[BrowserManager] = app.state.browser_manager
    if settings.crawler_playwright_warmup and browser_manager is not None:
        try:
            await browser_manager.warmup()
        except Exception as e:
            # 워밍업 실패는 첫 요청에서 다시 launch를 시도하므로 기동을 막지 않음
            logger.warning(f"[Playwright] Warmup failed: {type(e).__name__}: {e}")
    logger.info("Application started")
    yield
    logger.info("Shutting down application...")
    if browser_manager is not None:
        try:
            await browser_manager.close()
        except Exception as e:
            logger.error(f"[Playwright] Shutdown failed: {type(e).__name__}: {e}")
    try:
        await app.state.http_client.close()
    except Exception as e:
        logger.error(f"[HTTP_CLIENT] Shutdown failed: {type(e).__name__}: {e}")


def build_components(app: FastAPI) -> None:
    """캐시/Rate Limiter/크롤러/서비스를 만들어 app.state에 보관"""
    cache = ResultCache()
    http_client = HttpClient()

    browser_manager: Optional[BrowserManager] = None
    if settings.crawler_slowpath_backend == "disabled":
        slowpath = DisabledSlowPathExecutor()
    else:
        browser_manager = BrowserManager()
        slowpath = SlowPathExecutor(browser_manager)

    orchestrator = SearchOrchestrator(
        cache=cache,
        fastpath_executor=FastPathExecutor(http_client),
        slowpath_executor=slowpath,
    )

    app.state.cache = cache
    app.state.rate_limiter = SlidingWindowRateLimiter()
    app.state.http_client = http_client
    app.state.browser_manager = browser_manager
    app.state.orchestrator = orchestrator
    app.state.product_feed_service = ProductFeedService(
        orchestrator=orchestrator,
        trending_fetcher=TrendingFetcher(http_client, cache),
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RateLimitExceededException)
    async def rate_limit_handler(request: Request, exc: RateLimitExceededException):
        body = ErrorResponse(
            error="Too many requests",
            message="Please wait before making more requests",
        )
        retry_after = max(1, math.ceil(exc.retry_after_s))
        return JSONResponse(
            status_code=429,
            content=body.model_dump(mode="json", exclude_none=True),
            headers={"Retry-After": str(retry_after)},
        )

    @app.exception_handler(ProductFeedException)
    async def product_feed_exception_handler(request: Request, exc: ProductFeedException):
        logger.error(f"[API] Unhandled service error: {exc}")
        body = ErrorResponse(error="Failed to fetch products", message=exc.message)
        return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


def create_app() -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Returns:
        FastAPI 앱 인스턴스
    """
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    build_components(app)
    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(health_router)
    app.include_router(product_router)

    return app


# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
