"""공용 유틸리티 - export only."""

from .text import clean_title, extract_keywords, normalize_query, parse_price

__all__ = ["clean_title", "extract_keywords", "normalize_query", "parse_price"]
