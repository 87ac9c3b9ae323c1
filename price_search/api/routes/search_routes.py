"""Search Routes - HTTP layer for the multi-vendor search engine

HTTP Layer는 요청 검증과 응답 변환만 담당하고 검색은 SearchService에 위임합니다.
"""

import asyncio
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from price_search.core.config import settings
from price_search.core.exceptions import PriceSearchException, SearchTimeoutException
from price_search.core.logging import logger, sanitize_for_log
from price_search.schemas import (
    CompareResponse,
    ErrorResponse,
    SearchRequest,
    SearchResponse,
    VendorListResponse,
)
from price_search.scrapers import ScraperRegistry
from price_search.services import SearchService, group_similar_products

router = APIRouter(prefix="/api", tags=["search"])

INVALID_REQUEST_MESSAGE = "Invalid request. Please provide a search query."
TOO_MANY_VENDORS_MESSAGE = "Invalid request. Too many vendors selected (max {limit})."
TIMEOUT_MESSAGE = "Search timed out. Some vendors took too long to respond, please try again."


def get_search_service(request: Request) -> SearchService:
    """앱 시작 시 생성된 SearchService"""
    return request.app.state.search_service


def get_registry(request: Request) -> ScraperRegistry:
    return request.app.state.search_service.registry


def _error(status_code: int, message: str, error_code: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=message, error_code=error_code)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))


def _validation_message(error: ValidationError) -> str:
    """검색어 오류가 없고 벤더 목록만 잘못된 경우 그 원인을 알려줌"""
    fields = {err["loc"][0] for err in error.errors() if err.get("loc")}
    if "query" not in fields and "vendors" in fields:
        return TOO_MANY_VENDORS_MESSAGE.format(limit=settings.search_max_vendor_tokens)
    return INVALID_REQUEST_MESSAGE


async def _run_search(
    service: SearchService, q: Optional[str], vendors: Optional[str]
) -> Union[SearchResponse, JSONResponse]:
    """검증 → 검색 (전역 타임아웃) → 응답 또는 오류 JSONResponse"""
    try:
        search_request = SearchRequest(query=q, vendors=vendors)
    except ValidationError as e:
        logger.warning(f"[API] Input validation failed: {e.error_count()} errors")
        return _error(400, _validation_message(e), "VALIDATION_ERROR")

    safe_query = sanitize_for_log(search_request.query)
    logger.info(f"[API] Search request: query='{safe_query}', vendors={search_request.vendors}")

    try:
        return await asyncio.wait_for(
            service.search(search_request.query, search_request.vendors),
            timeout=settings.search_timeout_s,
        )
    except asyncio.TimeoutError:
        error = SearchTimeoutException(settings.search_timeout_s)
        logger.error(f"[API] {error}: query='{safe_query}'")
        return _error(504, TIMEOUT_MESSAGE, error.error_code)
    except PriceSearchException as e:
        logger.warning(f"[API] Search rejected: {e}")
        return _error(400, e.message, e.error_code)
    except Exception as e:
        logger.error(f"[API] Search failed: query='{safe_query}'", exc_info=True)
        return _error(500, f"Search failed: {type(e).__name__}", "INTERNAL_ERROR")


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
async def search(
    q: Optional[str] = Query(None, description="검색어"),
    vendors: Optional[str] = Query(None, description="콤마로 구분된 벤더 ID (예: amazon,flipkart)"),
    service: SearchService = Depends(get_search_service),
):
    """멀티 벤더 검색 API

    GET /api/search?q=...&vendors=amazon,flipkart

    선택된 벤더를 동시에 조회하고 가격 오름차순으로 병합합니다.
    일부 벤더 실패는 errors에 기록되며 요청 전체를 실패시키지 않습니다.
    """
    return await _run_search(service, q, vendors)


@router.get(
    "/search/compare",
    response_model=CompareResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
async def compare(
    q: Optional[str] = Query(None, description="검색어"),
    vendors: Optional[str] = Query(None, description="콤마로 구분된 벤더 ID"),
    service: SearchService = Depends(get_search_service),
):
    """유사 상품 비교 API

    검색 결과를 유사 상품 그룹으로 묶어 벤더 간 가격 차이를 보여줍니다.
    """
    result = await _run_search(service, q, vendors)
    if isinstance(result, JSONResponse):
        return result

    return CompareResponse(
        success=result.success,
        query=result.query,
        cached=result.cached,
        total_results=result.total_results,
        groups=group_similar_products(result.results),
        errors=result.errors,
    )


@router.get("/vendors", response_model=VendorListResponse)
async def list_vendors(registry: ScraperRegistry = Depends(get_registry)):
    """등록된 벤더 목록"""
    return VendorListResponse(
        vendors=registry.info(),
        default_vendors=registry.default_vendors(),
    )
