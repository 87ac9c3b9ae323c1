"""Pydantic 스키마 정의 (camelCase 응답)"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from price_search.core.config import settings


class CamelModel(BaseModel):
    """응답 필드를 camelCase로 직렬화하는 기본 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScrapeResult(CamelModel):
    """벤더 한 곳에서 찾은 상품 한 건 (생성 후 불변)"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="결과 ID (uuid4)")
    title: str = Field(..., min_length=1, description="상품명")
    price: float = Field(..., ge=0, description="가격")
    original_price: Optional[float] = Field(None, ge=0, description="정가")
    currency: str = Field("INR", description="통화")
    vendor: str = Field(..., description="벤더 식별자")
    url: Optional[str] = Field(None, description="상품 URL")
    image: Optional[str] = Field(None, description="이미지 URL")
    rating: Optional[float] = Field(None, ge=0, le=5, description="평점 (0~5)")
    reviews: Optional[int] = Field(None, ge=0, description="리뷰 수")
    discount: Optional[str] = Field(None, description="할인 표기 원문")
    in_stock: Optional[bool] = Field(None, description="재고 여부")
    description: Optional[str] = Field(None, description="상품 설명")


class VendorError(CamelModel):
    """벤더 호출 실패 기록"""
    vendor: str = Field(..., description="벤더 식별자")
    message: str = Field(..., description="오류 메시지")
    code: Optional[str] = Field(None, description="오류 코드")


class VendorTiming(CamelModel):
    """벤더별 소요 시간"""
    vendor: str = Field(..., description="벤더 식별자")
    duration_ms: int = Field(..., ge=0, description="소요 시간 (밀리초)")
    result_count: int = Field(..., ge=0, description="결과 수 (실패 시 0)")


class TimingSummary(CamelModel):
    """요청 전체 타이밍"""
    total_ms: int = Field(..., ge=0, description="전체 소요 시간 (밀리초)")
    per_vendor: list[VendorTiming] = Field(default_factory=list, description="벤더별 타이밍")


class SearchResponse(CamelModel):
    """멀티 벤더 검색 응답"""
    success: bool
    query: str
    total_results: int = Field(..., ge=0)
    results: list[ScrapeResult]
    errors: list[VendorError]
    timing: TimingSummary
    cached: bool
    timestamp: str = Field(..., description="ISO-8601 (UTC)")


class SearchRequest(BaseModel):
    """검색 요청 검증 (query + vendors)"""
    query: str = Field(..., min_length=1, max_length=settings.search_max_query_length)
    vendors: Optional[list[str]] = Field(None, max_length=settings.search_max_vendor_tokens)

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, v: Any) -> Any:
        """검색어 trim (공백만 있으면 빈 문자열 → min_length 검증 실패)"""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("vendors", mode="before")
    @classmethod
    def split_vendors(cls, v: Any) -> Any:
        """'a,b' 형태의 콤마 문자열도 허용, 빈 토큰은 제거"""
        if v is None:
            return None
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            tokens = [t.strip() for t in v if isinstance(t, str) and t.strip()]
            return tokens or None
        return v


class ProductGroup(CamelModel):
    """유사 상품 비교 그룹"""
    name: str
    products: list[ScrapeResult]
    lowest_price: float
    highest_price: float
    vendor_count: int
    savings: float


class CompareResponse(CamelModel):
    """유사 상품 그룹 응답"""
    success: bool
    query: str
    cached: bool
    total_results: int
    groups: list[ProductGroup]
    errors: list[VendorError]


class VendorInfo(CamelModel):
    """벤더 표시 정보"""
    id: str
    name: str
    color: str
    is_default: bool


class VendorListResponse(CamelModel):
    """등록된 벤더 목록"""
    vendors: list[VendorInfo]
    default_vendors: list[str]


class ErrorResponse(CamelModel):
    """오류 응답 (검증 실패/타임아웃/내부 오류)"""
    success: bool = False
    error: str
    error_code: Optional[str] = None


class HealthResponse(CamelModel):
    """헬스 체크 응답"""
    status: str
    timestamp: str
    version: str
    cache_entries: int
    vendors: int
