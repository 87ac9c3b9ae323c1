"""Vendor Scraper Base - curl_cffi fetch + selectolax card parsing

모든 벤더 스크래퍼의 공통 구현입니다. 각 벤더는 검색 URL과
상품 카드 선택자만 정의하면 됩니다.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional
from urllib.parse import quote_plus

from pydantic import ValidationError
from selectolax.parser import HTMLParser, Node

from price_search.core.config import settings
from price_search.core.exceptions import (
    VendorBlockedException,
    VendorFetchException,
    VendorParsingException,
)
from price_search.core.logging import logger
from price_search.schemas import ScrapeResult
from price_search.utils.text import clean_title, parse_price

from .http_client import SharedHttpClient, get_shared_http_client
from .parsing import absolute_url, first_attr, first_text, get_blocked_keyword, parse_rating

_BLOCKED_STATUS_CODES = (403, 429, 503)


class BaseScraper(ABC):
    """벤더 스크래퍼 기본 클래스

    scrape(query) 흐름:
        1. build_search_url(query)
        2. 공유 HTTP 세션으로 GET (타임아웃 적용)
        3. 차단 페이지 감지
        4. 상품 카드별 parse_card → ScrapeResult
    """

    vendor: ClassVar[str] = ""
    base_url: ClassVar[str] = ""
    currency: ClassVar[str] = "INR"

    card_selector: ClassVar[str] = ""
    title_selectors: ClassVar[tuple[str, ...]] = ()
    link_selectors: ClassVar[tuple[str, ...]] = ("a[href]",)
    price_selectors: ClassVar[tuple[str, ...]] = ()
    original_price_selectors: ClassVar[tuple[str, ...]] = ()
    image_selectors: ClassVar[tuple[str, ...]] = ("img",)
    rating_selectors: ClassVar[tuple[str, ...]] = ()
    discount_selectors: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        http_client: Optional[SharedHttpClient] = None,
        timeout_s: Optional[float] = None,
        max_results: Optional[int] = None,
    ):
        self.http_client = http_client or get_shared_http_client()
        self.timeout_s = timeout_s or settings.scraper_request_timeout_s
        self.max_results = max_results or settings.scraper_max_results_per_vendor

    @abstractmethod
    def build_search_url(self, query: str) -> str:
        """벤더 검색 URL 생성"""

    async def scrape(self, query: str) -> list[ScrapeResult]:
        """검색 실행

        Raises:
            VendorFetchException: 네트워크 오류/비정상 상태 코드
            VendorBlockedException: 봇 차단 감지
            VendorParsingException: HTML 파싱 실패
        """
        url = self.build_search_url(query)
        html = await self.fetch(url)
        return self.parse_products(html)

    async def fetch(self, url: str) -> str:
        response = await self.http_client.get_text(
            url,
            timeout_s=self.timeout_s,
            headers=SharedHttpClient.referer_headers(self.base_url),
            log_tag=self.vendor,
        )
        if response is None:
            raise VendorFetchException(self.vendor, "network error")

        status, html = response
        if status in _BLOCKED_STATUS_CODES:
            raise VendorBlockedException(self.vendor, keyword=f"HTTP {status}")
        if status >= 400:
            raise VendorFetchException(self.vendor, f"HTTP {status}", status_code=status)

        blocked = get_blocked_keyword(html)
        if blocked:
            raise VendorBlockedException(self.vendor, keyword=blocked)
        return html

    def parse_products(self, html: str) -> list[ScrapeResult]:
        """검색 결과 HTML → ScrapeResult 목록

        제목이 없거나 가격이 0 이하인 카드는 버립니다.
        """
        try:
            parser = HTMLParser(html)
            cards = parser.css(self.card_selector)
        except Exception as e:
            raise VendorParsingException(self.vendor, f"{type(e).__name__}: {e}") from e

        if not cards:
            logger.info(f"[{self.vendor}] No product cards found")
            return []

        results: list[ScrapeResult] = []
        for card in cards:
            raw = self.parse_card(card)
            if not raw or not raw.get("title") or raw.get("price", 0) <= 0:
                continue
            try:
                results.append(self._to_result(raw))
            except ValidationError as e:
                logger.debug(f"[{self.vendor}] Skipping invalid card: {e.error_count()} errors")
                continue
            if len(results) >= self.max_results:
                break

        logger.debug(f"[{self.vendor}] Parsed {len(results)}/{len(cards)} cards")
        return results

    def parse_card(self, card: Node) -> Optional[dict[str, Any]]:
        """상품 카드 1개 파싱 (벤더별로 재정의 가능)"""
        original_price_text = first_text(card, self.original_price_selectors)
        return {
            "title": first_text(card, self.title_selectors),
            "price": parse_price(first_text(card, self.price_selectors)),
            "original_price": parse_price(original_price_text) if original_price_text else None,
            "url": absolute_url(self.base_url, first_attr(card, self.link_selectors, ("href",))),
            "image": first_attr(card, self.image_selectors, ("src", "data-src")),
            "rating": parse_rating(first_text(card, self.rating_selectors)),
            "discount": first_text(card, self.discount_selectors),
        }

    def _to_result(self, raw: dict[str, Any]) -> ScrapeResult:
        return ScrapeResult(
            id=str(uuid.uuid4()),
            title=clean_title(raw["title"]),
            price=raw["price"],
            original_price=raw.get("original_price") or None,
            currency=raw.get("currency") or self.currency,
            vendor=self.vendor,
            url=raw.get("url"),
            image=raw.get("image"),
            rating=raw.get("rating"),
            reviews=raw.get("reviews"),
            discount=raw.get("discount"),
            in_stock=raw.get("in_stock", True),
            description=raw.get("description"),
        )

    @staticmethod
    def encode_query(query: str) -> str:
        return quote_plus(query.strip())
