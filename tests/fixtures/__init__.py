"""테스트 자산(데이터) 레이어

규칙:
- 로직 없음 (단순 문자열/primitive)
- 엔진/네트워크 의존 없음
"""

from .vendor_pages import (
    AMAZON_SEARCH_PAGE,
    BLOCKED_PAGE,
    EBAY_SEARCH_PAGE,
    EMPTY_RESULTS_PAGE,
    MYNTRA_SEARCH_PAGE,
)

__all__ = [
    "AMAZON_SEARCH_PAGE",
    "MYNTRA_SEARCH_PAGE",
    "EBAY_SEARCH_PAGE",
    "BLOCKED_PAGE",
    "EMPTY_RESULTS_PAGE",
]
