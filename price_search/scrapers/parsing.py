"""벤더 검색 결과 HTML 파싱 유틸.

네트워크(fetch)와 분리된 순수 파싱/검증 로직만 담습니다.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence
from urllib.parse import urljoin

from selectolax.parser import Node


_BLOCK_KEYWORDS = (
    "access denied",
    "captcha",
    "are you a robot",
    "verify you are human",
    "unusual traffic",
    "just a moment",
)

_RATING_RE = re.compile(r"\d+(?:\.\d+)?")


def get_blocked_keyword(html: str) -> Optional[str]:
    """차단/챌린지 페이지로 보이는 문구 반환 (없으면 None)"""
    if not html:
        return None
    lowered = html.lower()
    for keyword in _BLOCK_KEYWORDS:
        if keyword in lowered:
            return keyword
    return None


def first_text(card: Node, selectors: Sequence[str]) -> Optional[str]:
    """선택자 순서대로 시도하여 처음으로 비어있지 않은 텍스트 반환"""
    for selector in selectors:
        node = card.css_first(selector)
        if node is None:
            continue
        text = node.text(separator=" ", strip=True)
        if text:
            return text
    return None


def first_attr(card: Node, selectors: Sequence[str], attrs: Sequence[str]) -> Optional[str]:
    """선택자 순서대로 시도하여 처음으로 존재하는 속성값 반환

    lazy-load 이미지처럼 src 대신 data-src를 쓰는 경우를 위해 attrs도 순서대로 확인합니다.
    """
    for selector in selectors:
        node = card.css_first(selector)
        if node is None:
            continue
        for attr in attrs:
            value = node.attributes.get(attr)
            if value:
                return value.strip()
    return None


def absolute_url(base_url: str, href: Optional[str]) -> Optional[str]:
    if not href:
        return None
    if href.startswith("//"):
        return f"https:{href}"
    return urljoin(base_url + "/", href)


def parse_rating(text: Optional[str]) -> Optional[float]:
    """'4.3 out of 5 stars' → 4.3 (0~5 범위 밖이면 None)"""
    if not text:
        return None
    match = _RATING_RE.search(text)
    if not match:
        return None
    rating = float(match.group(0))
    if 0 <= rating <= 5:
        return rating
    return None
