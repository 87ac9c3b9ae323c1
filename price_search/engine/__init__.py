"""Engine Layer - Multi-vendor orchestration, caching and response assembly

This module provides the core engine layer:
- SearchOrchestrator: concurrent vendor fan-out with failure isolation
- ResultCache: in-memory TTL cache keyed by query + vendor selection
- VendorOutcome / OrchestrationResult: tagged per-vendor results
- build_search_response: response assembly
- Stopwatch: timing helper
"""

from .assembler import build_cached_response, build_search_response, utc_timestamp
from .cache import ResultCache
from .orchestrator import SearchOrchestrator, VendorScraper
from .result import OrchestrationResult, VendorOutcome
from .timing import Stopwatch

__all__ = [
    "SearchOrchestrator",
    "VendorScraper",
    "ResultCache",
    "OrchestrationResult",
    "VendorOutcome",
    "Stopwatch",
    "build_search_response",
    "build_cached_response",
    "utc_timestamp",
]
