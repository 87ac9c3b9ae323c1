"""Vendor Outcome - Tagged per-vendor result and merged orchestration output

Each fan-out task ends in exactly one VendorOutcome: either a result batch
or a VendorError, never both.
"""

from dataclasses import dataclass, field
from typing import Optional

from price_search.schemas import ScrapeResult, VendorError, VendorTiming


@dataclass(frozen=True)
class VendorOutcome:
    """벤더 1곳의 호출 결과 (success(list) | failure(error))

    Attributes:
        vendor: 벤더 식별자
        duration_ms: 소요 시간 (밀리초)
        results: 성공 시 결과 목록
        error: 실패 시 오류
    """

    vendor: str
    duration_ms: int
    results: tuple[ScrapeResult, ...] = ()
    error: Optional[VendorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def timing(self) -> VendorTiming:
        return VendorTiming(
            vendor=self.vendor,
            duration_ms=self.duration_ms,
            result_count=len(self.results) if self.ok else 0,
        )

    @classmethod
    def success(cls, vendor: str, results: list[ScrapeResult], duration_ms: int) -> "VendorOutcome":
        return cls(vendor=vendor, duration_ms=duration_ms, results=tuple(results))

    @classmethod
    def failure(cls, vendor: str, error: VendorError, duration_ms: int) -> "VendorOutcome":
        return cls(vendor=vendor, duration_ms=duration_ms, error=error)


@dataclass
class OrchestrationResult:
    """오케스트레이터 출력

    Attributes:
        results: 가격 오름차순으로 병합된 결과 (동일 가격은 호출 순서 유지)
        errors: 실패한 벤더의 오류 (호출 순서)
        timings: 벤더별 타이밍 (호출 순서, 호출한 벤더 수와 동일)
        outcomes: 벤더별 원본 결과
    """

    results: list[ScrapeResult] = field(default_factory=list)
    errors: list[VendorError] = field(default_factory=list)
    timings: list[VendorTiming] = field(default_factory=list)
    outcomes: list[VendorOutcome] = field(default_factory=list)

    @property
    def vendors_invoked(self) -> int:
        return len(self.outcomes)

    @property
    def success(self) -> bool:
        """모든 벤더가 실패하고 결과도 없을 때만 False"""
        return bool(self.results) or len(self.errors) < self.vendors_invoked
