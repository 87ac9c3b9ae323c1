"""Search Orchestrator - Concurrent vendor fan-out and merge

Coordinates a single search across the selected vendors:
1. One task per vendor, launched together
2. Per-task failure isolation (failures become VendorError data)
3. Per-vendor timing
4. Merge in invocation order, stable sort by price
"""

import asyncio
from typing import Any, Protocol, Sequence

from price_search.core.exceptions import PriceSearchException
from price_search.core.logging import logger, sanitize_for_log
from price_search.schemas import ScrapeResult, VendorError

from .result import OrchestrationResult, VendorOutcome
from .timing import Stopwatch

UNKNOWN_ERROR_MESSAGE = "Unknown error"


class VendorScraper(Protocol):
    """벤더 스크래퍼 인터페이스

    각 벤더 구현체가 만족해야 할 프로토콜입니다.
    """

    vendor: str

    async def scrape(self, query: str) -> list[ScrapeResult]:
        """검색 실행

        Args:
            query: 검색어

        Returns:
            상품 목록

        Raises:
            Exception: 실패 시 어떤 예외든 가능 (오케스트레이터가 격리)
        """
        ...


class SearchOrchestrator:
    """멀티 벤더 검색 오케스트레이터

    선택된 모든 벤더를 동시에 호출하고, 모두 끝날 때까지 기다린 뒤
    결과를 병합합니다. 한 벤더의 실패는 다른 벤더에 영향을 주지 않습니다.
    재시도는 하지 않습니다 (재시도 정책은 스크래퍼의 몫).
    """

    async def search(self, query: str, scrapers: Sequence[VendorScraper]) -> OrchestrationResult:
        """멀티 벤더 검색 실행

        Args:
            query: 검색어 (검증/trim 완료)
            scrapers: 호출할 스크래퍼 (정규 순서)

        Returns:
            OrchestrationResult: 병합 결과, 벤더 오류, 벤더별 타이밍

        Raises:
            ValueError: query가 유효하지 않은 경우
            asyncio.CancelledError: 요청 전체가 취소된 경우 (전역 타임아웃)
        """
        if not query or not isinstance(query, str):
            raise ValueError(f"Invalid query: {query}")

        safe_query = sanitize_for_log(query)
        logger.info(f"[ORCHESTRATOR] Fan-out: query='{safe_query}', vendors={[s.vendor for s in scrapers]}")

        # gather는 인자 순서대로 결과를 돌려주므로 완료 순서와 무관하게 호출 순서가 유지됩니다.
        outcomes: list[VendorOutcome] = list(
            await asyncio.gather(*(self._run_vendor(scraper, query) for scraper in scrapers))
        )

        merged = self.merge(outcomes)
        logger.info(
            f"[ORCHESTRATOR] Fan-in: query='{safe_query}', results={len(merged.results)}, "
            f"errors={len(merged.errors)}/{merged.vendors_invoked}, success={merged.success}"
        )
        return merged

    async def _run_vendor(self, scraper: VendorScraper, query: str) -> VendorOutcome:
        """벤더 1곳 실행 → 성공/실패를 VendorOutcome으로 변환

        Exception은 모두 잡아서 데이터로 바꿉니다.
        CancelledError 등 BaseException은 그대로 전파됩니다.
        """
        vendor = scraper.vendor
        watch = Stopwatch.started()
        try:
            results = self._normalize_results(await scraper.scrape(query))
        except Exception as e:
            duration_ms = watch.elapsed_ms()
            error = self._to_vendor_error(vendor, e)
            logger.warning(
                f"[{vendor}] Scrape failed after {duration_ms}ms: {type(e).__name__}: {error.message}"
            )
            return VendorOutcome.failure(vendor, error, duration_ms)

        duration_ms = watch.elapsed_ms()
        logger.info(f"[{vendor}] Scrape completed: results={len(results)}, elapsed={duration_ms}ms")
        return VendorOutcome.success(vendor, results, duration_ms)

    @staticmethod
    def _normalize_results(raw: Any) -> list[ScrapeResult]:
        """스크래퍼 반환값 → ScrapeResult 목록 (None은 빈 목록)

        Raises:
            TypeError: 목록이 아니거나 ScrapeResult가 아닌 항목이 있는 경우
        """
        if raw is None:
            return []
        if isinstance(raw, (str, bytes, dict)):
            raise TypeError(f"Scraper returned {type(raw).__name__}, expected a list of ScrapeResult")

        results = list(raw)
        for item in results:
            if not isinstance(item, ScrapeResult):
                raise TypeError(f"Unexpected result item type: {type(item).__name__}")
        return results

    @staticmethod
    def _to_vendor_error(vendor: str, error: Exception) -> VendorError:
        """예외 → VendorError (메시지가 없으면 기본 메시지)"""
        if isinstance(error, PriceSearchException):
            message = error.message or UNKNOWN_ERROR_MESSAGE
            code = error.error_code
        else:
            message = str(error) or UNKNOWN_ERROR_MESSAGE
            code = None
        return VendorError(vendor=vendor, message=message, code=code)

    @staticmethod
    def merge(outcomes: Sequence[VendorOutcome]) -> OrchestrationResult:
        """벤더 결과 병합

        1. 성공한 결과를 호출 순서대로 이어 붙임
        2. 가격 오름차순 안정 정렬 (동일 가격은 입력 순서 유지)
        """
        combined: list[ScrapeResult] = []
        errors: list[VendorError] = []
        for outcome in outcomes:
            if outcome.ok:
                combined.extend(outcome.results)
            else:
                errors.append(outcome.error)

        # list.sort는 안정 정렬
        combined.sort(key=lambda item: item.price)

        return OrchestrationResult(
            results=combined,
            errors=errors,
            timings=[outcome.timing for outcome in outcomes],
            outcomes=list(outcomes),
        )
