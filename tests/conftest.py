"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Fake 스크래퍼/시계 주입

금지:
- 실제 벤더 호출 (HTTP 금지)
"""

from __future__ import annotations

import asyncio
import os
import sys
import uuid
from pathlib import Path
from typing import Optional, Sequence

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from price_search.engine import ResultCache  # noqa: E402
from price_search.schemas import ScrapeResult  # noqa: E402
from price_search.scrapers import ScraperRegistry  # noqa: E402
from price_search.services import SearchService  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


def make_result(vendor: str, title: str, price: float, **extra) -> ScrapeResult:
    """테스트용 ScrapeResult"""
    return ScrapeResult(
        id=extra.pop("id", str(uuid.uuid4())),
        title=title,
        price=price,
        vendor=vendor,
        url=extra.pop("url", f"https://{vendor}.example/item"),
        **extra,
    )


class FakeScraper:
    """설정 가능한 Fake 벤더 스크래퍼

    - results: 반환할 결과 (None이면 None 반환)
    - error: 발생시킬 예외
    - delay: 응답 전 대기 시간 (초)
    """

    def __init__(
        self,
        vendor: str,
        results: Optional[Sequence[ScrapeResult]] = (),
        error: Optional[BaseException] = None,
        delay: float = 0.0,
    ):
        self.vendor = vendor
        self.results = list(results) if results is not None else None
        self.error = error
        self.delay = delay
        self.calls = 0
        self.queries: list[str] = []

    async def scrape(self, query: str):
        self.calls += 1
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.results


class FakeClock:
    """ResultCache 주입용 수동 시계"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def wireless_mouse_scrapers() -> list[FakeScraper]:
    """amazon 성공 / flipkart 실패 / ebay 성공 시나리오"""
    return [
        FakeScraper("amazon", [make_result("amazon", "Logitech M235 Wireless Mouse", 1299)]),
        FakeScraper("flipkart", error=TimeoutError("timeout")),
        FakeScraper("ebay", [make_result("ebay", "HP Wireless Mouse X200", 999)]),
    ]


def build_service(
    scrapers: Sequence[FakeScraper],
    default_vendors: Optional[Sequence[str]] = None,
    cache: Optional[ResultCache] = None,
) -> SearchService:
    """Fake 스크래퍼로 구성한 SearchService"""
    registry = ScraperRegistry(scrapers, default_vendors=default_vendors)
    return SearchService(registry=registry, cache=cache if cache is not None else ResultCache(ttl_seconds=300))
