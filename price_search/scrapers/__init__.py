"""Vendor scraper modules (curl_cffi + selectolax).

공개 API는 이 파일에서만 export합니다.
"""

from .base import BaseScraper
from .http_client import SharedHttpClient, get_shared_http_client, shutdown_shared_http_client
from .registry import VENDOR_DISPLAY, ScraperRegistry, build_default_registry
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

__all__ = [
    "BaseScraper",
    "SharedHttpClient",
    "get_shared_http_client",
    "shutdown_shared_http_client",
    "ScraperRegistry",
    "build_default_registry",
    "VENDOR_DISPLAY",
    "AmazonScraper",
    "FlipkartScraper",
    "EbayScraper",
    "MyntraScraper",
    "CromaScraper",
    "AjioScraper",
    "SnapdealScraper",
    "TataCliqScraper",
    "NykaaScraper",
]
