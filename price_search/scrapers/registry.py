"""Scraper Registry

Closed set of vendor scrapers registered once at startup.
Registration order is the canonical order used for fan-out, timing output
and cache keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from price_search.core.config import settings
from price_search.core.logging import logger
from price_search.engine import VendorScraper
from price_search.schemas import VendorInfo

from .vendors import (
    AjioScraper,
    AmazonScraper,
    CromaScraper,
    EbayScraper,
    FlipkartScraper,
    MyntraScraper,
    NykaaScraper,
    SnapdealScraper,
    TataCliqScraper,
)


@dataclass(frozen=True)
class VendorDisplay:
    name: str
    color: str


# ─── 벤더 표시 정보 ──────────────────────────────────────
VENDOR_DISPLAY: dict[str, VendorDisplay] = {
    "amazon": VendorDisplay("Amazon", "#FF9900"),
    "flipkart": VendorDisplay("Flipkart", "#2874F0"),
    "ebay": VendorDisplay("eBay", "#E53238"),
    "myntra": VendorDisplay("Myntra", "#FF3F6C"),
    "croma": VendorDisplay("Croma", "#00B140"),
    "ajio": VendorDisplay("Ajio", "#41494F"),
    "snapdeal": VendorDisplay("Snapdeal", "#E40046"),
    "tatacliq": VendorDisplay("Tata CLiQ", "#8B008B"),
    "nykaa": VendorDisplay("Nykaa", "#FC2779"),
}


class ScraperRegistry:
    """벤더 ID → 스크래퍼 인스턴스 (정규 순서 유지)

    Usage:
        registry = build_default_registry()
        scrapers = registry.resolve(["flipkart", "amazon"])  # → [amazon, flipkart]
    """

    def __init__(self, scrapers: Sequence[VendorScraper], default_vendors: Optional[Iterable[str]] = None):
        """
        Args:
            scrapers: 등록할 스크래퍼 (이 순서가 정규 순서)
            default_vendors: 벤더 미지정 시 사용할 ID (생략 시 전체)

        Raises:
            ValueError: 벤더 ID가 비었거나 중복된 경우
        """
        self._scrapers: dict[str, VendorScraper] = {}
        for scraper in scrapers:
            vendor = getattr(scraper, "vendor", "")
            if not vendor:
                raise ValueError(f"Scraper without vendor id: {scraper!r}")
            if vendor in self._scrapers:
                raise ValueError(f"Duplicate vendor id: {vendor}")
            self._scrapers[vendor] = scraper

        if default_vendors is None:
            self._defaults = frozenset(self._scrapers)
        else:
            defaults = set(default_vendors)
            unknown = defaults - set(self._scrapers)
            if unknown:
                logger.warning(f"[REGISTRY] Ignoring unknown default vendors: {sorted(unknown)}")
            self._defaults = frozenset(defaults & set(self._scrapers))

    def vendors(self) -> list[str]:
        """등록된 벤더 ID (정규 순서)"""
        return list(self._scrapers)

    def default_vendors(self) -> list[str]:
        """기본 벤더 ID (정규 순서)"""
        return [vendor for vendor in self._scrapers if vendor in self._defaults]

    def get(self, vendor: str) -> Optional[VendorScraper]:
        return self._scrapers.get(vendor)

    def resolve(self, selection: Optional[Iterable[str]] = None) -> list[VendorScraper]:
        """요청된 벤더 선택 → 호출할 스크래퍼 목록

        - 선택 없음/빈 선택 → 기본 벤더 전체
        - 선택 있음 → 선택에 포함된 등록 벤더만, 요청 순서가 아닌 정규 순서로
        - 알 수 없는 ID는 조용히 무시 (대소문자 구분)
        """
        requested = {v for v in (selection or ()) if v}
        if not requested:
            return [self._scrapers[vendor] for vendor in self.default_vendors()]

        unknown = requested - set(self._scrapers)
        if unknown:
            logger.debug(f"[REGISTRY] Ignoring unknown vendors: {sorted(unknown)}")

        return [scraper for vendor, scraper in self._scrapers.items() if vendor in requested]

    def info(self) -> list[VendorInfo]:
        """/api/vendors 응답용 표시 정보"""
        infos = []
        for vendor in self._scrapers:
            display = VENDOR_DISPLAY.get(vendor, VendorDisplay(vendor, "#666666"))
            infos.append(VendorInfo(
                id=vendor,
                name=display.name,
                color=display.color,
                is_default=vendor in self._defaults,
            ))
        return infos

    def __len__(self) -> int:
        return len(self._scrapers)


def build_default_registry() -> ScraperRegistry:
    """기본 벤더 스크래퍼 등록 (앱 시작 시 1회)"""
    scrapers = [
        AmazonScraper(),
        FlipkartScraper(),
        EbayScraper(),
        MyntraScraper(),
        CromaScraper(),
        AjioScraper(),
        SnapdealScraper(),
        TataCliqScraper(),
        NykaaScraper(),
    ]
    registry = ScraperRegistry(scrapers, default_vendors=settings.default_vendor_list)
    logger.info(
        f"[REGISTRY] Registered {len(registry)} vendors, defaults={registry.default_vendors()}"
    )
    return registry
