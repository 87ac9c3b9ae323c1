"""FastAPI 앱 팩토리"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from price_search.core.config import settings
from price_search.core.logging import logger
from price_search.api import health_router, search_router
from price_search.engine import ResultCache
from price_search.scrapers import build_default_registry, shutdown_shared_http_client
from price_search.services import SearchService


def build_search_service() -> SearchService:
    """프로세스 단위 SearchService (레지스트리 + 결과 캐시) 생성"""
    return SearchService(
        registry=build_default_registry(),
        cache=ResultCache(ttl_seconds=settings.search_cache_ttl_s),
    )


def create_app(search_service: Optional[SearchService] = None) -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Args:
        search_service: 주입할 SearchService (생략 시 기본 레지스트리/캐시로 생성)

    Returns:
        FastAPI 앱 인스턴스
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """애플리케이션 생명주기"""
        logger.info("Starting application...")
        app.state.search_service = search_service or build_search_service()
        logger.info("Application started")
        yield
        logger.info("Shutting down application...")
        await shutdown_shared_http_client()

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )

    # 라우터 의존성이 lifespan 이전에도 동작하도록 미리 주입
    if search_service is not None:
        app.state.search_service = search_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(search_router)

    return app


# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
