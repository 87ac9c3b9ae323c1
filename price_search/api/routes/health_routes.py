"""헬스 체크 엔드포인트"""
from fastapi import APIRouter, Depends

from price_search import __version__
from price_search.api.routes.search_routes import get_search_service
from price_search.engine import utc_timestamp
from price_search.schemas import HealthResponse
from price_search.services import SearchService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(service: SearchService = Depends(get_search_service)):
    """
    헬스 체크 엔드포인트

    - 서버 상태
    - 캐시 항목 수
    - 등록된 벤더 수
    """
    vendor_count = len(service.registry)
    return HealthResponse(
        status="ok" if vendor_count else "degraded",
        timestamp=utc_timestamp(),
        version=__version__,
        cache_entries=len(service.cache),
        vendors=vendor_count,
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "멀티 벤더 최저가 검색 서비스",
        "version": __version__,
        "docs": "/docs",
        "endpoints": ["/api/search", "/api/search/compare", "/api/vendors", "/health"],
    }
