"""벤더별 스크래퍼 (검색 URL + 상품 카드 선택자)"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

from selectolax.parser import Node

from .base import BaseScraper
from .parsing import first_text


class AmazonScraper(BaseScraper):
    vendor = "amazon"
    base_url = "https://www.amazon.in"

    card_selector = '[data-component-type="s-search-result"]'
    title_selectors = ("h2 .a-text-normal", "h2 a span", "h2 span")
    link_selectors = ("a.a-link-normal.s-no-outline", "h2 a")
    price_selectors = (".a-price .a-offscreen", ".a-price-whole")
    original_price_selectors = (".a-price.a-text-price .a-offscreen",)
    image_selectors = ("img.s-image",)
    rating_selectors = (".a-icon-alt",)

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/s?k={self.encode_query(query)}"


class FlipkartScraper(BaseScraper):
    vendor = "flipkart"
    base_url = "https://www.flipkart.com"

    card_selector = "div[data-id]"
    title_selectors = ("a.atJtCj", "a.IRpwF-", "._4rR01T", ".s1Q9rs", ".KzDlHZ", ".wjcEIp")
    link_selectors = ('a[href*="/p/"]', "a[href]")
    price_selectors = (".hZ3P6w", "._30jeq3", ".Nx9bqj", ".Nx9376")
    original_price_selectors = (".y3H6nd", "._3I9_wc", ".yRaY8j")
    image_selectors = ("img._396cs4", "img._2r_T1I", "img.DByuf4", "img")
    rating_selectors = (".XQD9m-", "._3LWZlK", ".XQDdHH")
    discount_selectors = (".Uk_O9r", "._3Ay6Sb", ".UkUFwK")

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/search?q={self.encode_query(query)}"


class EbayScraper(BaseScraper):
    vendor = "ebay"
    base_url = "https://www.ebay.com"
    currency = "USD"

    # 신규 카드 레이아웃과 기존 리스트 레이아웃을 모두 지원
    card_selector = "li.s-card, li.s-item"
    title_selectors = (".s-card__title", ".s-item__title")
    link_selectors = ("a.s-card__link", "a.s-item__link")
    price_selectors = (".s-card__price", ".s-item__price")
    image_selectors = (".s-item__image-img", "img")

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/sch/i.html?_nkw={self.encode_query(query)}"

    def parse_card(self, card: Node) -> Optional[dict[str, Any]]:
        raw = super().parse_card(card)
        # 검색 결과 맨 앞의 광고 placeholder 카드
        if raw and (raw.get("title") or "").lower().startswith("shop on ebay"):
            return None
        return raw


class MyntraScraper(BaseScraper):
    vendor = "myntra"
    base_url = "https://www.myntra.com"

    card_selector = ".product-base"
    link_selectors = ("a[href]",)
    price_selectors = (".product-discountedPrice", ".product-price")
    original_price_selectors = (".product-strike",)
    image_selectors = ("img.img-responsive", "img")
    rating_selectors = (".product-ratingsContainer span",)
    discount_selectors = (".product-discountPercentage",)

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/{quote(query.strip())}"

    def parse_card(self, card: Node) -> Optional[dict[str, Any]]:
        raw = super().parse_card(card)
        raw["title"] = _brand_title(card, (".product-brand",), (".product-product",))
        return raw


class CromaScraper(BaseScraper):
    vendor = "croma"
    base_url = "https://www.croma.com"

    card_selector = ".product-item"
    title_selectors = (".product-title",)
    price_selectors = (".amount",)
    original_price_selectors = (".old-price .amount",)

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/searchB?q={self.encode_query(query)}%3Arelevance"


class AjioScraper(BaseScraper):
    vendor = "ajio"
    base_url = "https://www.ajio.com"

    card_selector = ".item.rilrtl-products-list__item"
    price_selectors = (".price strong", ".price")
    original_price_selectors = (".orginal-price",)
    image_selectors = ("img.rilrtl-lazy-img", "img")
    discount_selectors = (".discount",)

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/search/?text={self.encode_query(query)}"

    def parse_card(self, card: Node) -> Optional[dict[str, Any]]:
        raw = super().parse_card(card)
        raw["title"] = _brand_title(card, (".brand",), (".name",))
        return raw


class SnapdealScraper(BaseScraper):
    vendor = "snapdeal"
    base_url = "https://www.snapdeal.com"

    card_selector = ".product-tuple-listing"
    title_selectors = (".product-title",)
    link_selectors = (".dp-widget-link", "a[href]")
    price_selectors = (".lfloat.product-price", ".product-price")
    original_price_selectors = (".lfloat.product-desc-price",)
    image_selectors = (".product-image img", "img")
    discount_selectors = (".product-discount",)

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/search?keyword={self.encode_query(query)}"


class TataCliqScraper(BaseScraper):
    vendor = "tatacliq"
    base_url = "https://www.tatacliq.com"

    card_selector = '[class*="ProductModule"], [class*="product-card"]'
    price_selectors = ('[class*="Price"]', '[class*="price"]')
    discount_selectors = ('[class*="Discount"]', '[class*="discount"]')

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/search/?searchCategory=all&text={self.encode_query(query)}"

    def parse_card(self, card: Node) -> Optional[dict[str, Any]]:
        raw = super().parse_card(card)
        raw["title"] = _brand_title(
            card,
            ('[class*="ProductBrand"]', '[class*="product-brand"]'),
            ('[class*="ProductName"]', '[class*="product-name"]'),
        )
        return raw


class NykaaScraper(BaseScraper):
    vendor = "nykaa"
    base_url = "https://www.nykaa.com"

    card_selector = ".productWrapper"
    title_selectors = (".css-xrzmfa", '[class*="product-name"]')
    price_selectors = (".css-111z9ua", '[class*="product-price"]')
    original_price_selectors = (".css-17x46n5", '[class*="strike"]')
    rating_selectors = ('[class*="rating"]',)
    discount_selectors = ('[class*="discount"]',)

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/search/result/?q={self.encode_query(query)}"


def _brand_title(card: Node, brand_selectors: tuple[str, ...], name_selectors: tuple[str, ...]) -> Optional[str]:
    """브랜드 + 상품명 조합 (둘 중 하나만 있으면 그것만)"""
    parts = [first_text(card, brand_selectors), first_text(card, name_selectors)]
    title = " ".join(part for part in parts if part)
    return title or None
