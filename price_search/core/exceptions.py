"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


class PriceSearchException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 벤더 스크래퍼 관련 예외
class ScraperException(PriceSearchException):
    """스크래퍼 관련 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "SCRAPER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "SCRAPER_ERROR", details)


class VendorFetchException(ScraperException):
    """벤더 페이지 요청 실패 (네트워크 오류, 비정상 상태 코드)"""
    def __init__(self, vendor: str, reason: str, status_code: Optional[int] = None):
        message = f"Failed to fetch {vendor} results: {reason}"
        super().__init__(message, "VENDOR_FETCH_ERROR",
                         {"vendor": vendor, "reason": reason, "status_code": status_code})


class VendorBlockedException(ScraperException):
    """봇 감지/차단 예외"""
    def __init__(self, vendor: str, keyword: Optional[str] = None):
        message = f"Request blocked by {vendor} (possible bot detection)"
        super().__init__(message, "BLOCKED", {"vendor": vendor, "keyword": keyword})


class VendorParsingException(ScraperException):
    """HTML 파싱 오류"""
    def __init__(self, vendor: str, reason: str):
        message = f"Failed to parse {vendor} response: {reason}"
        super().__init__(message, "PARSING_ERROR", {"vendor": vendor, "reason": reason})


# 유효성 검증 관련 예외
class ValidationException(PriceSearchException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                         details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationException):
    """유효하지 않은 검색어"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__("query", reason, details)


# 시간 관련 예외
class SearchTimeoutException(PriceSearchException):
    """요청 전체 타임아웃"""
    def __init__(self, timeout_s: float, details: Optional[dict[str, Any]] = None):
        message = f"Search timed out after {timeout_s}s"
        super().__init__(message, "TIMEOUT", details or {"timeout_s": timeout_s})
