"""API Tests - /api/search, /api/search/compare, /api/vendors, /health

PRD 원칙:
- 외부 호출 없음 (Fake 스크래퍼가 주입된 SearchService 사용)
- 상태 코드 / camelCase 응답 형태 검증
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import FakeScraper, build_service, make_result
from price_search.app import create_app
from price_search.core.config import settings


@pytest.fixture
def scrapers(wireless_mouse_scrapers):
    return wireless_mouse_scrapers


@pytest.fixture
def client(scrapers) -> TestClient:
    app = create_app(search_service=build_service(scrapers))
    return TestClient(app)


class TestSearchEndpoint:
    def test_search_success_shape(self, client):
        response = client.get("/api/search", params={"q": "wireless mouse"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["query"] == "wireless mouse"
        assert body["totalResults"] == 2
        assert body["cached"] is False
        assert [r["price"] for r in body["results"]] == [999, 1299]
        assert body["results"][0]["vendor"] == "ebay"
        assert body["errors"] == [{"vendor": "flipkart", "message": "timeout", "code": None}]
        assert [t["vendor"] for t in body["timing"]["perVendor"]] == ["amazon", "flipkart", "ebay"]
        assert body["timing"]["totalMs"] >= 0
        assert body["timestamp"].endswith("Z")

    def test_repeat_search_is_cached(self, client, scrapers):
        client.get("/api/search", params={"q": "wireless mouse"})
        body = client.get("/api/search", params={"q": "Wireless Mouse "}).json()

        assert body["cached"] is True
        assert body["errors"] == []
        assert body["timing"]["perVendor"] == []
        assert all(s.calls == 1 for s in scrapers)

    def test_vendor_filter(self, client, scrapers):
        body = client.get("/api/search", params={"q": "mouse", "vendors": "ebay, amazon"}).json()

        assert [t["vendor"] for t in body["timing"]["perVendor"]] == ["amazon", "ebay"]
        assert scrapers[1].calls == 0

    def test_blank_vendor_list_uses_defaults(self, client):
        body = client.get("/api/search", params={"q": "mouse", "vendors": " , "}).json()

        assert [t["vendor"] for t in body["timing"]["perVendor"]] == ["amazon", "flipkart", "ebay"]

    def test_unknown_vendors_only(self, client, scrapers):
        body = client.get("/api/search", params={"q": "mouse", "vendors": "walmart"}).json()

        assert body["success"] is False
        assert body["results"] == []
        assert body["timing"]["perVendor"] == []
        assert all(s.calls == 0 for s in scrapers)

    @pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
    def test_missing_query_is_400(self, client, scrapers, params):
        response = client.get("/api/search", params=params)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Invalid request. Please provide a search query."
        assert body["errorCode"] == "VALIDATION_ERROR"
        assert all(s.calls == 0 for s in scrapers)

    def test_too_long_query_is_400(self, client):
        response = client.get("/api/search", params={"q": "x" * (settings.search_max_query_length + 1)})

        assert response.status_code == 400

    def test_too_many_vendors_names_the_cause(self, client, scrapers):
        limit = settings.search_max_vendor_tokens
        vendors = ",".join(f"v{i}" for i in range(limit + 1))

        response = client.get("/api/search", params={"q": "mouse", "vendors": vendors})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == f"Invalid request. Too many vendors selected (max {limit})."
        assert body["errorCode"] == "VALIDATION_ERROR"
        assert all(s.calls == 0 for s in scrapers)

    def test_missing_query_reported_before_vendor_count(self, client):
        vendors = ",".join(f"v{i}" for i in range(settings.search_max_vendor_tokens + 1))

        body = client.get("/api/search", params={"vendors": vendors}).json()

        assert body["error"] == "Invalid request. Please provide a search query."

    def test_all_vendors_fail_still_200(self):
        service = build_service([
            FakeScraper("amazon", error=RuntimeError("down")),
            FakeScraper("ebay", error=RuntimeError("blocked")),
        ])
        client = TestClient(create_app(search_service=service))

        response = client.get("/api/search", params={"q": "mouse"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert [e["vendor"] for e in body["errors"]] == ["amazon", "ebay"]

    def test_timeout_is_504(self, monkeypatch):
        monkeypatch.setattr(settings, "search_timeout_s", 0.05)
        service = build_service([FakeScraper("amazon", [make_result("amazon", "Slow", 1)], delay=1.0)])
        client = TestClient(create_app(search_service=service))

        response = client.get("/api/search", params={"q": "mouse"})

        assert response.status_code == 504
        assert response.json()["errorCode"] == "TIMEOUT"
        assert len(service.cache) == 0

    def test_unexpected_error_is_500(self, monkeypatch):
        service = build_service([FakeScraper("amazon", [])])

        async def broken(query, vendors=None):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(service, "search", broken)
        client = TestClient(create_app(search_service=service))

        response = client.get("/api/search", params={"q": "mouse"})

        assert response.status_code == 500
        assert response.json()["errorCode"] == "INTERNAL_ERROR"


class TestCompareEndpoint:
    def test_groups_similar_products(self):
        service = build_service([
            FakeScraper("amazon", [make_result("amazon", "Logitech M235 Wireless Mouse Black", 1299)]),
            FakeScraper("ebay", [make_result("ebay", "Logitech M235 Wireless Mouse", 999)]),
            FakeScraper("myntra", [make_result("myntra", "Cotton Socks", 199)]),
        ])
        client = TestClient(create_app(search_service=service))

        response = client.get("/api/search/compare", params={"q": "mouse"})

        assert response.status_code == 200
        body = response.json()
        assert body["totalResults"] == 3
        first = body["groups"][0]
        assert first["vendorCount"] == 2
        assert first["lowestPrice"] == 999
        assert first["highestPrice"] == 1299
        assert first["savings"] == 300
        assert first["name"] == "Logitech M235 Wireless Mouse"

    def test_compare_validation(self, client):
        assert client.get("/api/search/compare").status_code == 400


class TestVendorsAndHealth:
    def test_vendor_list(self, client):
        body = client.get("/api/vendors").json()

        assert [v["id"] for v in body["vendors"]] == ["amazon", "flipkart", "ebay"]
        assert body["vendors"][0] == {"id": "amazon", "name": "Amazon", "color": "#FF9900", "isDefault": True}
        assert body["defaultVendors"] == ["amazon", "flipkart", "ebay"]

    def test_health(self, client):
        client.get("/api/search", params={"q": "wireless mouse"})

        body = client.get("/health").json()

        assert body["status"] == "ok"
        assert body["cacheEntries"] == 1
        assert body["vendors"] == 3

    def test_root(self, client):
        body = client.get("/").json()
        assert "/api/search" in body["endpoints"]
