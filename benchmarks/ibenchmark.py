from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Iterable, List


class BenchmarkError(Exception):
    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class BenchmarkResult:
    file_name: str
    size_megabytes: int
    strategy: str
    buffer_kb: int
    trials: int
    mean_ms: float
    stddev_ms: float

    @property
    def throughput_mbps(self) -> float:
        if self.mean_ms <= 0:
            return float("nan")
        return self.size_megabytes / (self.mean_ms / 1000)


class IBenchmark(ABC):
    @abstractmethod
    def run(self, paths: Iterable[Path]) -> List[BenchmarkResult]:
        """
        Time every strategy and buffer size against each file.

        Args:
            paths: Fixture files to benchmark, in order.

        Returns:
            list: One result per (file, strategy, buffer size).
        """
        pass

    @property
    @abstractmethod
    def name(self):
        pass
