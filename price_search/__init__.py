"""멀티 벤더 최저가 검색 서비스"""

__version__ = "1.0.0"
