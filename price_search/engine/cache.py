"""Result Cache - In-memory TTL cache for merged search results

Process-lifetime memo of (query, vendor selection) -> ordered result list.
Constructed once at startup and handed to the SearchService.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from price_search.core.config import settings
from price_search.core.logging import logger
from price_search.schemas import ScrapeResult
from price_search.utils.text import normalize_query

ALL_VENDORS_KEY = "all"

# (정규화된 검색어, 정렬된 벤더 선택). 빈 튜플은 "벤더 미지정"
CacheKey = tuple[str, tuple[str, ...]]


@dataclass(frozen=True)
class CacheEntry:
    results: tuple[ScrapeResult, ...]
    expires_at: float


class ResultCache:
    """검색 결과 메모리 캐시 (TTL)

    - 키: 정규화된 검색어 + 정렬/중복 제거된 벤더 선택
    - 만료된 항목은 조회 시 삭제 (lazy eviction)
    - 항목 수가 임계값을 넘으면 set 시점에 만료 항목 일괄 정리
    - 모든 연산은 짧은 동기 구간이며 threading.Lock으로 보호됩니다.
      벤더 I/O 동안 락을 잡지 않습니다.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        sweep_threshold: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            ttl_seconds: 항목 유효 시간 (기본값: settings.search_cache_ttl_s)
            sweep_threshold: 만료 항목 정리를 시작할 항목 수
            clock: 단조 증가 시계 (테스트에서 주입)

        Raises:
            ValueError: ttl_seconds가 양수가 아닌 경우
        """
        self.ttl_seconds = float(ttl_seconds if ttl_seconds is not None else settings.search_cache_ttl_s)
        if self.ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.sweep_threshold = sweep_threshold or settings.search_cache_sweep_threshold
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(query: str, vendor_selection: Optional[Iterable[str]] = None) -> CacheKey:
        """캐시 키 생성

        `vendors=a,b`와 `vendors=b,a`는 같은 키가 됩니다.
        검색어와 벤더 토큰을 문자열로 이어 붙이지 않으므로
        토큰에 ':'나 ','가 들어 있어도 다른 요청과 충돌하지 않습니다.
        """
        selection = tuple(sorted({v for v in (vendor_selection or ()) if v}))
        return normalize_query(query), selection

    @staticmethod
    def describe_key(key: CacheKey) -> str:
        """로그/통계용 키 표기 (선택 없음 → "all")"""
        query, selection = key
        vendor_part = ",".join(selection) if selection else ALL_VENDORS_KEY
        return f"{query}:{vendor_part}"

    def get(
        self, query: str, vendor_selection: Optional[Iterable[str]] = None
    ) -> Optional[tuple[ScrapeResult, ...]]:
        """캐시 조회

        Returns:
            캐시된 결과 (가격순) 또는 None (미스/만료)
        """
        key = self.make_key(query, vendor_selection)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug(f"[CACHE] Miss: key='{self.describe_key(key)}'")
                return None

            if self._clock() >= entry.expires_at:
                del self._entries[key]
                logger.debug(f"[CACHE] Expired: key='{self.describe_key(key)}'")
                return None

        logger.info(f"[CACHE] Hit: key='{self.describe_key(key)}', results={len(entry.results)}")
        return entry.results

    def set(
        self,
        query: str,
        results: Sequence[ScrapeResult],
        vendor_selection: Optional[Iterable[str]] = None,
    ) -> bool:
        """결과 저장 (빈 결과는 저장하지 않음)

        Returns:
            저장 여부
        """
        if not results:
            logger.debug(f"[CACHE] Skip empty results: query='{query}'")
            return False

        key = self.make_key(query, vendor_selection)
        entry = CacheEntry(results=tuple(results), expires_at=self._clock() + self.ttl_seconds)
        with self._lock:
            self._entries[key] = entry
            if len(self._entries) > self.sweep_threshold:
                self._sweep_locked()

        logger.info(
            f"[CACHE] Set: key='{self.describe_key(key)}', results={len(entry.results)}, "
            f"TTL: {self.ttl_seconds:.0f}s"
        )
        return True

    def _sweep_locked(self) -> int:
        """만료 항목 정리 (호출자가 락을 잡고 있어야 함)"""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"[CACHE] Swept {len(expired)} expired entries")
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> dict:
        """캐시 현황 (키 목록 포함)"""
        with self._lock:
            return {
                "size": len(self._entries),
                "keys": [self.describe_key(key) for key in self._entries],
                "ttl_seconds": self.ttl_seconds,
            }
