"""API/엔진 공용 Pydantic 스키마 - export only."""

from .search_schema import (
    CompareResponse,
    ErrorResponse,
    HealthResponse,
    ProductGroup,
    ScrapeResult,
    SearchRequest,
    SearchResponse,
    TimingSummary,
    VendorError,
    VendorInfo,
    VendorListResponse,
    VendorTiming,
)

__all__ = [
    "CompareResponse",
    "ErrorResponse",
    "HealthResponse",
    "ProductGroup",
    "ScrapeResult",
    "SearchRequest",
    "SearchResponse",
    "TimingSummary",
    "VendorError",
    "VendorInfo",
    "VendorListResponse",
    "VendorTiming",
]
