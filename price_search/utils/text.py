"""텍스트/가격 정규화 헬퍼"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_PRICE_RE = re.compile(r"\d[\d,]*(?:\.\d+)?")

MAX_TITLE_LENGTH = 200

# 상품명 비교에서 무시하는 단어
STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "for", "with", "in", "on", "at", "to", "of",
    "new", "latest", "best", "top", "pack", "set", "combo", "buy", "get",
    "free", "shipping", "offer", "deal", "sale", "discount", "price",
    "men", "women", "mens", "womens", "unisex", "kids", "boys", "girls",
    "size", "color", "colour", "style", "type", "model", "version",
    "original", "genuine", "authentic", "official", "branded",
})


def normalize_query(query: str) -> str:
    """캐시 키용 검색어 정규화 (trim + lowercase)"""
    return (query or "").strip().lower()


def parse_price(price_text: str | None) -> float:
    """가격 텍스트에서 숫자만 추출.

    "₹1,299.00" → 1299.0, "$25.99 to $30.00" → 25.99 (첫 번째 금액).
    숫자가 없으면 0.0을 반환합니다.
    """
    if not price_text:
        return 0.0

    match = _PRICE_RE.search(price_text)
    if not match:
        return 0.0

    try:
        return float(match.group(0).replace(",", ""))
    except ValueError:
        return 0.0


def clean_title(title: str | None) -> str:
    """공백 정리 + 최대 길이 절단"""
    if not title:
        return ""
    return _WHITESPACE_RE.sub(" ", title).strip()[:MAX_TITLE_LENGTH]


def extract_keywords(title: str) -> list[str]:
    """상품명에서 비교용 키워드 추출"""
    lowered = _NON_ALNUM_RE.sub(" ", (title or "").lower())
    return [
        word for word in lowered.split()
        if len(word) > 2 and word not in STOP_WORDS
    ]
