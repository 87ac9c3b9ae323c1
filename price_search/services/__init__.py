"""비즈니스 로직 서비스 - export only."""

from .comparison_service import group_similar_products
from .search_service import SearchService

__all__ = ["SearchService", "group_similar_products"]
