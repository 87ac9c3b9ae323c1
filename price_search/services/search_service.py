"""Search Service - Cache-aside wiring of registry, cache and orchestrator

Flow:
    1. Cache lookup (query + vendor selection)
    2. Registry resolves the vendor set
    3. Orchestrator fans out to vendor scrapers
    4. Response assembly
    5. Cache populate when the merged list is non-empty
"""

from typing import Optional, Sequence

from price_search.core.exceptions import InvalidQueryException
from price_search.core.logging import logger, sanitize_for_log
from price_search.engine import (
    ResultCache,
    SearchOrchestrator,
    Stopwatch,
    build_cached_response,
    build_search_response,
)
from price_search.schemas import SearchResponse
from price_search.scrapers import ScraperRegistry


class SearchService:
    """멀티 벤더 검색 서비스

    캐시와 레지스트리는 앱 시작 시 한 번 생성되어 주입됩니다.
    """

    def __init__(
        self,
        registry: ScraperRegistry,
        cache: ResultCache,
        orchestrator: Optional[SearchOrchestrator] = None,
    ):
        if registry is None:
            raise ValueError("registry must not be None")
        if cache is None:
            raise ValueError("cache must not be None")

        self.registry = registry
        self.cache = cache
        self.orchestrator = orchestrator or SearchOrchestrator()

    async def search(self, query: str, vendors: Optional[Sequence[str]] = None) -> SearchResponse:
        """통합 검색 실행

        Args:
            query: 검색어 (검증 완료, trim된 상태)
            vendors: 요청된 벤더 ID (None/빈 목록 → 기본 벤더)

        Returns:
            SearchResponse

        Raises:
            InvalidQueryException: 검색어가 비어 있는 경우
        """
        query = (query or "").strip()
        if not query:
            raise InvalidQueryException("query must not be empty")

        selection = list(vendors) if vendors else None
        watch = Stopwatch.started()
        safe_query = sanitize_for_log(query)

        cached = self.cache.get(query, selection)
        if cached is not None:
            watch.checkpoint("cache_hit")
            logger.info(f"[SEARCH] Served from cache: query='{safe_query}', results={len(cached)}")
            return build_cached_response(query, cached, total_ms=watch.elapsed_ms())
        watch.checkpoint("cache_miss")

        scrapers = self.registry.resolve(selection)
        if not scrapers:
            logger.warning(f"[SEARCH] No known vendors in selection: {selection}")

        outcome = await self.orchestrator.search(query, scrapers)
        watch.checkpoint("fan_in")

        response = build_search_response(
            query=query,
            results=outcome.results,
            errors=outcome.errors,
            timings=outcome.timings,
            total_ms=watch.elapsed_ms(),
            cached=False,
            success=outcome.success,
        )

        # 빈 결과는 캐시하지 않음 (일시 장애 벤더가 캐시를 오염시키지 않도록)
        if outcome.results:
            self.cache.set(query, outcome.results, selection)

        logger.debug(f"[SEARCH] Timing report: {watch.get_report()}")
        return response
