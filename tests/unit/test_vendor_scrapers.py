"""Unit Tests - 벤더 스크래퍼 (HTTP 없이 HTML 샘플로 파싱 검증)"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from fixtures import (
    AMAZON_SEARCH_PAGE,
    BLOCKED_PAGE,
    EBAY_SEARCH_PAGE,
    EMPTY_RESULTS_PAGE,
    MYNTRA_SEARCH_PAGE,
)
from price_search.core.exceptions import (
    VendorBlockedException,
    VendorFetchException,
)
from price_search.scrapers import (
    AmazonScraper,
    EbayScraper,
    FlipkartScraper,
    MyntraScraper,
    SnapdealScraper,
)


def _mock_client(response):
    client = MagicMock()
    client.get_text = AsyncMock(return_value=response)
    return client


class TestSearchUrls:
    def test_amazon_url_encodes_query(self):
        scraper = AmazonScraper(http_client=_mock_client(None))
        assert scraper.build_search_url("wireless mouse") == "https://www.amazon.in/s?k=wireless+mouse"

    def test_flipkart_url(self):
        scraper = FlipkartScraper(http_client=_mock_client(None))
        assert scraper.build_search_url("usb c & hdmi") == "https://www.flipkart.com/search?q=usb+c+%26+hdmi"

    def test_myntra_url_uses_path(self):
        scraper = MyntraScraper(http_client=_mock_client(None))
        assert scraper.build_search_url("running shoes") == "https://www.myntra.com/running%20shoes"

    def test_snapdeal_url(self):
        scraper = SnapdealScraper(http_client=_mock_client(None))
        assert scraper.build_search_url("kettle") == "https://www.snapdeal.com/search?keyword=kettle"


class TestParsing:
    def test_amazon_cards(self):
        scraper = AmazonScraper(http_client=_mock_client(None))

        results = scraper.parse_products(AMAZON_SEARCH_PAGE)

        assert [r.title for r in results] == ["Logitech M235 Wireless Mouse", "Dell MS116 Wired Mouse"]
        first = results[0]
        assert first.price == 1299.0
        assert first.original_price == 1995.0
        assert first.rating == 4.3
        assert first.currency == "INR"
        assert first.vendor == "amazon"
        assert first.url == "https://www.amazon.in/dp/B001?ref=sr"
        assert first.image == "https://m.media-amazon.com/images/I/1.jpg"
        assert results[1].original_price is None
        assert len({r.id for r in results}) == 2

    def test_myntra_brand_title(self):
        scraper = MyntraScraper(http_client=_mock_client(None))

        results = scraper.parse_products(MYNTRA_SEARCH_PAGE)

        assert len(results) == 1
        assert results[0].title == "Puma Running Shoes"
        assert results[0].price == 1499.0
        assert results[0].original_price == 2999.0
        assert results[0].url == "https://www.myntra.com/shoes/puma/123/buy"
        assert results[0].discount == "(50% OFF)"

    def test_ebay_skips_placeholder_and_uses_usd(self):
        scraper = EbayScraper(http_client=_mock_client(None))

        results = scraper.parse_products(EBAY_SEARCH_PAGE)

        assert [r.title for r in results] == ["HP Wireless Mouse X200"]
        assert results[0].price == 12.99
        assert results[0].currency == "USD"

    def test_no_cards_returns_empty(self):
        scraper = AmazonScraper(http_client=_mock_client(None))
        assert scraper.parse_products(EMPTY_RESULTS_PAGE) == []

    def test_max_results_cap(self):
        scraper = AmazonScraper(http_client=_mock_client(None), max_results=1)
        assert len(scraper.parse_products(AMAZON_SEARCH_PAGE)) == 1


class TestScrape:
    @pytest.mark.asyncio
    async def test_scrape_fetches_and_parses(self):
        client = _mock_client((200, AMAZON_SEARCH_PAGE))
        scraper = AmazonScraper(http_client=client, timeout_s=3.0)

        results = await scraper.scrape("wireless mouse")

        assert len(results) == 2
        client.get_text.assert_awaited_once_with(
            "https://www.amazon.in/s?k=wireless+mouse",
            timeout_s=3.0,
            headers={"Referer": "https://www.amazon.in/"},
            log_tag="amazon",
        )

    @pytest.mark.asyncio
    async def test_network_error(self):
        scraper = AmazonScraper(http_client=_mock_client(None))

        with pytest.raises(VendorFetchException) as exc_info:
            await scraper.scrape("mouse")
        assert exc_info.value.error_code == "VENDOR_FETCH_ERROR"

    @pytest.mark.asyncio
    async def test_server_error_status(self):
        scraper = AmazonScraper(http_client=_mock_client((500, "oops")))

        with pytest.raises(VendorFetchException) as exc_info:
            await scraper.scrape("mouse")
        assert exc_info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [403, 429, 503])
    async def test_blocked_status(self, status):
        scraper = AmazonScraper(http_client=_mock_client((status, "")))

        with pytest.raises(VendorBlockedException):
            await scraper.scrape("mouse")

    @pytest.mark.asyncio
    async def test_blocked_page_body(self):
        scraper = AmazonScraper(http_client=_mock_client((200, BLOCKED_PAGE)))

        with pytest.raises(VendorBlockedException) as exc_info:
            await scraper.scrape("mouse")
        assert exc_info.value.details["keyword"] == "captcha"
