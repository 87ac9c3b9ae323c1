"""유사 상품 그룹핑 - 벤더 간 가격 비교"""

from __future__ import annotations

from typing import Sequence

from price_search.schemas import ProductGroup, ScrapeResult
from price_search.utils.text import extract_keywords

MAX_GROUP_NAME_LENGTH = 80
MIN_KEYWORD_MATCHES = 3
MIN_MATCH_RATIO = 0.5


def is_similar(title1: str, title2: str) -> bool:
    """두 상품명이 비슷한지 판단

    공통 키워드가 min(3, 짧은 쪽 키워드 수) 이상이거나
    짧은 쪽 기준 50% 이상 겹치면 유사.
    """
    words1 = extract_keywords(title1)
    words2 = extract_keywords(title2)
    if not words1 or not words2:
        return False

    shorter = min(len(words1), len(words2))
    matches = sum(1 for word in words1 if word in words2)
    min_match = min(MIN_KEYWORD_MATCHES, shorter)
    return matches >= min_match or matches / shorter >= MIN_MATCH_RATIO


def group_name(products: Sequence[ScrapeResult]) -> str:
    """가장 짧은 상품명을 그룹 이름으로 사용"""
    shortest = min(products, key=lambda p: len(p.title))
    name = " ".join(shortest.title.split())
    if len(name) > MAX_GROUP_NAME_LENGTH:
        name = name[:MAX_GROUP_NAME_LENGTH - 3] + "..."
    return name


def group_similar_products(products: Sequence[ScrapeResult]) -> list[ProductGroup]:
    """유사 상품끼리 묶어 비교 그룹 생성

    - 짧은 상품명(보통 더 일반적인 이름)부터 그룹의 기준으로 사용
    - 그룹 내부는 가격순
    - 그룹은 벤더 수 내림차순, 절약 가능 금액 내림차순
    """
    if not products:
        return []

    groups: list[ProductGroup] = []
    used: set[str] = set()

    for product in sorted(products, key=lambda p: len(p.title)):
        if product.id in used:
            continue

        similar = [
            p for p in products
            if p.id not in used and (p.id == product.id or is_similar(product.title, p.title))
        ]
        similar.sort(key=lambda p: p.price)
        used.update(p.id for p in similar)

        groups.append(ProductGroup(
            name=group_name(similar),
            products=similar,
            lowest_price=similar[0].price,
            highest_price=similar[-1].price,
            vendor_count=len({p.vendor for p in similar}),
            savings=similar[-1].price - similar[0].price if len(similar) > 1 else 0.0,
        ))

    groups.sort(key=lambda g: (-g.vendor_count, -g.savings))
    return groups
