"""Pydantic 스키마 정의"""
from typing import Optional, List
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from product_feed.core.config import settings


# 추출 실패 시 채워지는 표시용 기본값 (유효성 검사에서 걸러짐)
PLACEHOLDER_TITLE = "Product Title"
PLACEHOLDER_IMAGE = "https://via.placeholder.com/200x200?text=No+Image"
PLACEHOLDER_PRICE = "Price not available"
DEFAULT_RATING = "4.0"
MISSING_URL = "#"


class ProductListing(BaseModel):
    """외부 상품 목록 1건 (모든 필드는 표시용 문자열)

    가격/평점은 업스트림에서 숫자 일관성이 보장되지 않아 문자열 그대로 둡니다.
    """
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="상품명 (표시 길이로 절단됨)")
    price: str = Field(PLACEHOLDER_PRICE, description="가격 문자열 (예: $19.99)")
    image: str = Field(PLACEHOLDER_IMAGE, description="대표 이미지 URL")
    rating: str = Field(DEFAULT_RATING, description="평점 문자열 (예: 4.5)")
    url: str = Field(MISSING_URL, description="상품 상세 URL")

    def is_displayable(self) -> bool:
        """표시 가능한 상품인지 검증

        - title: 비어있지 않고, placeholder가 아니며, 최소 길이 초과
        - image: 비어있지 않고 placeholder가 아님
        """
        if not self.title or self.title == PLACEHOLDER_TITLE:
            return False
        if len(self.title) <= settings.listing_min_title_length:
            return False
        if not self.image or self.image == PLACEHOLDER_IMAGE:
            return False
        return True


class ProductsResponse(BaseModel):
    """GET /products 응답"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    products: List[ProductListing] = Field(default_factory=list)
    trending: List[ProductListing] = Field(default_factory=list)
    top_trending: Optional[ProductListing] = Field(None, alias="topTrending")
    count: int = Field(..., ge=0, description="반환된 상품 수")
    query: str
    cached: bool = Field(..., description="상품 목록이 캐시에서 반환되었는지 여부")
    timestamp: datetime
    source: Optional[str] = Field(None, description="cache | fastpath | slowpath")
    status: str = Field(..., description="검색 상태 (timeout/blocked는 업스트림 이상 신호)")


class ErrorResponse(BaseModel):
    """오류 응답 (429 / 500)"""
    success: bool = False
    error: str
    message: str
    timestamp: Optional[datetime] = None


class HealthResponse(BaseModel):
    """POST /products 헬스 프로브 응답"""
    model_config = ConfigDict(populate_by_name=True)

    status: str
    service: str
    timestamp: datetime
    cache_size: int = Field(..., alias="cacheSize")


class ServiceHealthResponse(BaseModel):
    """GET /health 응답"""
    status: str
    timestamp: datetime
    version: str
    browser_ready: bool
    cache_size: int
