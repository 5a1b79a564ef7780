# benchmarks/read_benchmark.py
from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from fixtures.file_spec import MEGABYTE
from utils.logging import setup_class_logger

from .ibenchmark import BenchmarkError, BenchmarkResult, IBenchmark

if TYPE_CHECKING:
    import logging
    from typing import ClassVar, Iterable, List

KB = 1024
# Byte value counted on every pass so a read cannot be skipped or cut short
NEEDLE = 0xFF

DEFAULT_NUM_TRIALS = 10
DEFAULT_BUFFER_KB = (
    4, 8, 12, 16, 24, 32, 40, 48, 56, 64, 256, 1024, 4096, 16384, 65536, 262144,
)


def _count_needles(buf) -> int:
    return int(np.count_nonzero(np.frombuffer(buf, dtype=np.uint8) == NEEDLE))


def read_plain(path, buf_size):
    count = 0
    with open(path, "rb", buffering=0) as f:
        while True:
            chunk = f.read(buf_size)
            if not chunk:
                break
            count += _count_needles(chunk)
    return count


def read_into(path, buf_size):
    count = 0
    buf = bytearray(buf_size)
    view = memoryview(buf)
    with open(path, "rb", buffering=0) as f:
        while True:
            n = f.readinto(buf)
            if not n:
                break
            count += _count_needles(view[:n])
    return count


READ_STRATEGIES = {
    "read_plain": read_plain,
    "read_into": read_into,
}


@setup_class_logger
class ReadBenchmark(IBenchmark):
    """
    Sequential read benchmark over generated fixture files.

    Each strategy reads the whole file once per trial with a given buffer size.
    Buffer sizes larger than the file are skipped. The needle count of every
    trial has to match the reference count taken before timing starts.
    """

    __logger: ClassVar[logging.Logger]

    def __init__(
        self,
        num_trials: int = DEFAULT_NUM_TRIALS,
        buffer_kb: Iterable[int] = DEFAULT_BUFFER_KB,
        strategies: Iterable[str] = tuple(READ_STRATEGIES),
    ):
        if num_trials <= 0:
            raise ValueError(f"num_trials must be positive, got {num_trials}")

        unknown = [s for s in strategies if s not in READ_STRATEGIES]
        if unknown:
            raise ValueError(f"Unsupported read strategy: {', '.join(unknown)}")

        self.num_trials = num_trials
        self.buffer_kb = tuple(buffer_kb)
        self.strategies = tuple(strategies)

    @property
    def name(self):
        return "read"

    def run(self, paths: Iterable[Path]) -> List[BenchmarkResult]:
        results = []

        for path in map(Path, paths):
            if not path.is_file():
                raise BenchmarkError(f"Cannot benchmark missing file {path}", path=path)

            file_size = path.stat().st_size
            expected = read_plain(path, MEGABYTE)

            for strategy in self.strategies:
                for buffer_kb in self.buffer_kb:
                    if buffer_kb * KB > file_size:
                        continue
                    results.append(
                        self._run_trials(path, file_size, strategy, buffer_kb, expected)
                    )

        return results

    def _run_trials(self, path, file_size, strategy, buffer_kb, expected):
        func = READ_STRATEGIES[strategy]
        samples = []

        for _ in range(self.num_trials):
            start_time = time.perf_counter()
            count = func(path, buffer_kb * KB)
            samples.append((time.perf_counter() - start_time) * 1000)

            if count != expected:
                raise BenchmarkError(
                    f"{strategy} {buffer_kb} Kb on {path} counted {count} needle bytes, expected {expected}",
                    path=path,
                )

        samples = np.asarray(samples)
        result = BenchmarkResult(
            file_name=path.name,
            size_megabytes=file_size // MEGABYTE,
            strategy=strategy,
            buffer_kb=buffer_kb,
            trials=self.num_trials,
            mean_ms=float(samples.mean()),
            stddev_ms=float(samples.std()),
        )
        self.__logger.info(
            f"{path.name} {strategy} {buffer_kb} Kb, {result.mean_ms:.3f}, {result.stddev_ms:.3f}"
        )
        return result
