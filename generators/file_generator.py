# generators/file_generator.py
from __future__ import annotations

import errno
import os
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from fixtures.file_spec import BLOCK_BYTES, MEGABYTE, FileSpec
from random_sources.irandom_source import RandomSourceUnavailableError
from utils.logging import setup_class_logger

from .igenerator import (
    FileGenerationError,
    IFileGenerator,
    OutputDirectoryError,
    ResourceExhaustionError,
)

if TYPE_CHECKING:
    import logging
    from typing import ClassVar, Iterable, List

    from random_sources.irandom_source import IRandomSource

_DISK_FULL_ERRNOS = (errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC))


@dataclass(frozen=True)
class GenerationResult:
    size_megabytes: int
    path: Path
    bytes_written: int
    block_count: int
    duration_s: float

    @property
    def throughput_mbps(self) -> float:
        # MB/s, nan when the clock was too coarse to time the write
        if self.duration_s <= 0:
            return float("nan")
        return self.bytes_written / self.duration_s / MEGABYTE


@setup_class_logger
class TestFileGenerator(IFileGenerator):
    __test__ = False
    __logger: ClassVar[logging.Logger]

    def __init__(
        self,
        output_dir,
        random_source: IRandomSource,
        block_bytes: int = BLOCK_BYTES,
        check_free_space: bool = True,
    ):
        self.output_dir = Path(output_dir)
        self.random_source = random_source
        self.block_bytes = block_bytes
        self.check_free_space = check_free_space

    def generate(self, sizes: Iterable[int]) -> List[GenerationResult]:
        # Every size is validated before the first file is opened
        file_specs = [FileSpec(size, self.block_bytes) for size in sizes]

        self._check_output_dir()
        if self.check_free_space:
            self._check_free_space(file_specs)

        results = []
        for file_spec in file_specs:
            results.append(self._generate_file(file_spec))

        self.__logger.info(
            f"Created {len(results)} test file(s) in {self.output_dir}"
        )
        return results

    def verify(self, sizes: Iterable[int]) -> List[Path]:
        mismatched = []

        for size in sizes:
            file_spec = FileSpec(size, self.block_bytes)
            path = file_spec.path_in(self.output_dir)

            if not path.is_file():
                self.__logger.warning(f"Missing test file {path}")
                mismatched.append(path)
                continue

            actual = path.stat().st_size
            if actual != file_spec.file_byte_length:
                self.__logger.warning(
                    f"Test file {path} is {actual} bytes, expected {file_spec.file_byte_length}"
                )
                mismatched.append(path)

        return mismatched

    def _check_output_dir(self):
        if not self.output_dir.exists():
            raise OutputDirectoryError(
                f"Output directory {self.output_dir} does not exist",
                path=self.output_dir,
            )
        if not self.output_dir.is_dir():
            raise OutputDirectoryError(
                f"Output path {self.output_dir} is not a directory",
                path=self.output_dir,
            )
        if not os.access(self.output_dir, os.W_OK | os.X_OK):
            raise OutputDirectoryError(
                f"Output directory {self.output_dir} is not writable",
                path=self.output_dir,
            )

    def _check_free_space(self, file_specs):
        required = 0
        for file_spec in file_specs:
            path = file_spec.path_in(self.output_dir)
            # Files being overwritten give their space back
            existing = path.stat().st_size if path.is_file() else 0
            required += max(file_spec.file_byte_length - existing, 0)

        free = shutil.disk_usage(self.output_dir).free
        self.__logger.debug(f"Need {required} bytes, {free} bytes free")

        if required > free:
            raise ResourceExhaustionError(
                f"Not enough disk space in {self.output_dir}: "
                f"{required} bytes required, {free} bytes free",
                path=self.output_dir,
            )

    def _generate_file(self, file_spec: FileSpec) -> GenerationResult:
        path = file_spec.path_in(self.output_dir)
        self.__logger.info(f"Creating {file_spec.size_megabytes} MB test file.")

        bytes_written = 0
        start_time = time.monotonic()

        try:
            with path.open("wb") as f:
                for _ in range(file_spec.block_count):
                    block = self.random_source.read(file_spec.block_bytes)
                    if len(block) != file_spec.block_bytes:
                        raise FileGenerationError(
                            f"Random source {self.random_source.name} returned "
                            f"{len(block)} bytes, expected {file_spec.block_bytes}",
                            path=path,
                        )
                    f.write(block)
                    bytes_written += len(block)
        except RandomSourceUnavailableError as e:
            raise ResourceExhaustionError(
                f"Failed to create {path}: {e}", path=path
            ) from e
        except OSError as e:
            if e.errno in _DISK_FULL_ERRNOS:
                raise ResourceExhaustionError(
                    f"Failed to create {path}: out of disk space", path=path
                ) from e
            raise FileGenerationError(f"Failed to create {path}: {e}", path=path) from e

        duration = time.monotonic() - start_time
        self.__logger.debug(
            f"Wrote {bytes_written} bytes ({file_spec.block_count} blocks) to {path} in {duration:.3f}s"
        )

        return GenerationResult(
            size_megabytes=file_spec.size_megabytes,
            path=path,
            bytes_written=bytes_written,
            block_count=file_spec.block_count,
            duration_s=duration,
        )
