"""Stopwatch - 벤더별/요청 전체 소요 시간 측정"""

from time import perf_counter
from typing import Callable, Optional


class Stopwatch:
    """경과 시간 측정기

    Usage:
        watch = Stopwatch.started()
        await scraper.scrape(query)
        watch.checkpoint("scraped")
        duration_ms = watch.elapsed_ms()
    """

    def __init__(self, clock: Callable[[], float] = perf_counter):
        self._clock = clock
        self.start_time: Optional[float] = None
        self._checkpoints: dict[str, float] = {}

    @classmethod
    def started(cls, clock: Callable[[], float] = perf_counter) -> "Stopwatch":
        watch = cls(clock)
        watch.start()
        return watch

    def start(self) -> None:
        """측정 시작"""
        self.start_time = self._clock()
        self._checkpoints.clear()

    def checkpoint(self, name: str) -> None:
        """체크포인트 기록

        Raises:
            RuntimeError: start()가 호출되지 않은 경우
        """
        if self.start_time is None:
            raise RuntimeError("Stopwatch not started. Call start() first.")
        self._checkpoints[name] = self._clock() - self.start_time

    def elapsed(self) -> float:
        """경과 시간 (초). start() 전에는 0.0"""
        if self.start_time is None:
            return 0.0
        return max(0.0, self._clock() - self.start_time)

    def elapsed_ms(self) -> int:
        """경과 시간 (정수 밀리초)"""
        return int(round(self.elapsed() * 1000))

    def get_report(self) -> dict:
        return {
            "elapsed": self.elapsed(),
            "checkpoints": self._checkpoints.copy(),
        }
