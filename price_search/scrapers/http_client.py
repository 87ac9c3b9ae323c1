"""공유 HTTP 클라이언트 (curl_cffi)

벤더 스크래퍼 전체가 프로세스 단위 AsyncSession 하나를 공유합니다.
세션은 첫 요청 때 만들어지고 앱 종료(lifespan) 시 닫힙니다.
"""

from __future__ import annotations

import asyncio
from typing import Dict, NamedTuple, Optional
from urllib.parse import urlsplit

from curl_cffi.requests import AsyncSession

from price_search.core.config import settings
from price_search.core.logging import logger

_ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


class HttpResponse(NamedTuple):
    """GET 결과 (status, text)로 unpack 가능"""

    status: int
    text: str


class SharedHttpClient:
    """벤더 검색 페이지 요청용 HTTP 클라이언트

    - 브라우저 TLS 지문 위장 (settings.scraper_impersonate)
    - 동시 연결 수 제한 (settings.scraper_max_clients)
    - 네트워크 오류는 예외 대신 None으로 반환 (상태 코드 해석은 스크래퍼 몫)
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    @property
    def is_open(self) -> bool:
        return self._session is not None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is None:
                self._session = AsyncSession(
                    impersonate=settings.scraper_impersonate,
                    headers=self.default_headers(),
                    allow_redirects=True,
                    max_clients=settings.scraper_max_clients,
                    trust_env=False,
                )
                logger.debug(
                    f"[HTTP_CLIENT] Session opened: impersonate={settings.scraper_impersonate}, "
                    f"max_clients={settings.scraper_max_clients}"
                )
            return self._session

    @staticmethod
    def default_headers() -> Dict[str, str]:
        return {
            "User-Agent": settings.scraper_user_agent,
            "Accept": _ACCEPT_HTML,
            "Accept-Language": settings.scraper_accept_language,
        }

    @staticmethod
    def referer_headers(base_url: str) -> Dict[str, str]:
        """벤더 홈을 Referer로 지정"""
        return {"Referer": base_url.rstrip("/") + "/"}

    async def get_text(
        self,
        url: str,
        *,
        timeout_s: float,
        headers: Optional[Dict[str, str]] = None,
        log_tag: str = "HTTP_CLIENT",
    ) -> Optional[HttpResponse]:
        """GET 요청

        Args:
            url: 요청 URL
            timeout_s: 요청 타임아웃 (초)
            headers: 세션 기본 헤더에 덧붙일 헤더
            log_tag: 로그 태그 (보통 벤더 ID)

        Returns:
            HttpResponse 또는 네트워크 오류/타임아웃 시 None
        """
        sess = await self._ensure_session()
        host = urlsplit(url).netloc
        try:
            resp = await sess.get(url, headers=headers, timeout=timeout_s)
        except Exception as e:
            logger.warning(f"[{log_tag}] GET {host} failed (timeout={timeout_s}s): {type(e).__name__}: {e}")
            return None

        status = getattr(resp, "status_code", 0) or 0
        text = getattr(resp, "text", "") or ""
        logger.debug(f"[{log_tag}] GET {host} -> {status} ({len(text)} chars)")
        return HttpResponse(status, text)

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.debug(f"[HTTP_CLIENT] Session close failed: {type(e).__name__}: {e}")
            self._session = None
            logger.debug("[HTTP_CLIENT] Session closed")


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
