"""Response Assembler - Builds the externally visible SearchResponse"""

from datetime import datetime, timezone
from typing import Optional, Sequence

from price_search.schemas import (
    ScrapeResult,
    SearchResponse,
    TimingSummary,
    VendorError,
    VendorTiming,
)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC 타임스탬프 (밀리초, 'Z' 접미사)"""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_search_response(
    query: str,
    results: Sequence[ScrapeResult],
    errors: Sequence[VendorError],
    timings: Sequence[VendorTiming],
    total_ms: int,
    cached: bool = False,
    success: Optional[bool] = None,
    now: Optional[datetime] = None,
) -> SearchResponse:
    """검색 응답 생성

    Args:
        query: 원본 검색어
        results: 병합된 결과 (가격순)
        errors: 벤더 오류
        timings: 벤더별 타이밍 (캐시 히트 시 빈 목록)
        total_ms: 전체 소요 시간 (밀리초)
        cached: 캐시 히트 여부
        success: 성공 여부 (생략 시 결과/오류 수로 계산)
        now: 타임스탬프 기준 시각 (테스트용)

    Returns:
        SearchResponse
    """
    if success is None:
        success = bool(results) or len(errors) < len(timings)

    return SearchResponse(
        success=success,
        query=query,
        total_results=len(results),
        results=list(results),
        errors=list(errors),
        timing=TimingSummary(total_ms=max(0, int(total_ms)), per_vendor=list(timings)),
        cached=cached,
        timestamp=utc_timestamp(now),
    )


def build_cached_response(
    query: str,
    results: Sequence[ScrapeResult],
    total_ms: int,
    now: Optional[datetime] = None,
) -> SearchResponse:
    """캐시 히트 응답 (벤더 호출 없음 → perVendor 빈 목록)"""
    return build_search_response(
        query=query,
        results=results,
        errors=[],
        timings=[],
        total_ms=total_ms,
        cached=True,
        success=True,
        now=now,
    )
