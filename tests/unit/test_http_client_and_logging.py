"""Unit Tests - SharedHttpClient (세션 Fake 주입) / 로깅 설정"""

import logging
from types import SimpleNamespace

import pytest

from price_search.core import logging as log_module
from price_search.core.config import Settings
from price_search.core.logging import LOGGER_NAME, sanitize_for_log, setup_logging
from price_search.scrapers import http_client as http_module
from price_search.scrapers.http_client import HttpResponse, SharedHttpClient


class FakeSession:
    """curl_cffi AsyncSession 대체"""

    instances: list["FakeSession"] = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.response = SimpleNamespace(status_code=200, text="<html>ok</html>")
        self.error = None
        self.requests = []
        self.closed = False
        FakeSession.instances.append(self)

    async def get(self, url, headers=None, timeout=None):
        self.requests.append((url, headers, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


@pytest.fixture
def client(monkeypatch) -> SharedHttpClient:
    FakeSession.instances = []
    monkeypatch.setattr(http_module, "AsyncSession", FakeSession)
    return SharedHttpClient()


class TestSharedHttpClient:
    @pytest.mark.asyncio
    async def test_get_text_returns_status_and_body(self, client):
        response = await client.get_text("https://www.amazon.in/s?k=mouse", timeout_s=2.0, log_tag="amazon")

        assert response == HttpResponse(200, "<html>ok</html>")
        status, text = response
        assert status == 200
        session = FakeSession.instances[0]
        assert session.requests == [("https://www.amazon.in/s?k=mouse", None, 2.0)]
        assert session.kwargs["impersonate"] == "chrome110"
        assert "User-Agent" in session.kwargs["headers"]

    @pytest.mark.asyncio
    async def test_session_reused(self, client):
        await client.get_text("https://a.example/1", timeout_s=1.0)
        await client.get_text("https://a.example/2", timeout_s=1.0)

        assert len(FakeSession.instances) == 1
        assert len(FakeSession.instances[0].requests) == 2

    @pytest.mark.asyncio
    async def test_network_error_returns_none(self, client):
        await client.get_text("https://a.example/warmup", timeout_s=1.0)
        FakeSession.instances[0].error = TimeoutError("timed out")

        assert await client.get_text("https://a.example/", timeout_s=1.0) is None

    @pytest.mark.asyncio
    async def test_close_resets_session(self, client):
        await client.get_text("https://a.example/", timeout_s=1.0)
        assert client.is_open

        await client.close()

        assert FakeSession.instances[0].closed is True
        assert not client.is_open
        await client.close()

    def test_referer_headers(self):
        assert SharedHttpClient.referer_headers("https://www.myntra.com") == {"Referer": "https://www.myntra.com/"}


class TestSanitizeForLog:
    def test_control_characters_removed(self):
        assert sanitize_for_log("mouse\r\n[API] forged line") == "mouse [API] forged line"

    def test_secret_masked(self):
        assert sanitize_for_log("my api_key=abc") == "***"

    def test_truncated(self):
        assert sanitize_for_log("a" * 30, max_length=10) == "a" * 10 + "..."

    @pytest.mark.parametrize("value", ["", None, " \n "])
    def test_empty(self, value):
        assert sanitize_for_log(value) == "[empty]"


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_logger(self):
        yield
        setup_logging()

    def test_production_downgrades_debug_and_uses_compact_format(self):
        logger = setup_logging(Settings(environment="production", log_level="DEBUG"))

        handlers = [h for h in logger.handlers if h.get_name() == LOGGER_NAME]
        assert len(handlers) == 1
        assert logger.level == logging.INFO
        assert handlers[0].formatter._fmt == log_module._FORMATS["compact"]

    def test_explicit_format_and_repeated_setup(self):
        setup_logging(Settings(log_format="compact"))
        logger = setup_logging(Settings(log_level="DEBUG", log_format="verbose"))

        handlers = [h for h in logger.handlers if h.get_name() == LOGGER_NAME]
        assert len(handlers) == 1
        assert logger.level == logging.DEBUG
        assert handlers[0].formatter._fmt == log_module._FORMATS["verbose"]

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging(Settings(log_level="LOUD")).level == logging.INFO

    def test_quiet_loggers(self):
        setup_logging(Settings(log_quiet_loggers="noisy.lib"))
        assert logging.getLogger("noisy.lib").level == logging.WARNING

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValueError):
            Settings(log_format="json")
