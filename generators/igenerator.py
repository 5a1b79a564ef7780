from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Iterable, List


class FixtureGenerationError(Exception):
    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class OutputDirectoryError(FixtureGenerationError):
    """The output directory is missing or cannot be written to."""


class ResourceExhaustionError(FixtureGenerationError):
    """Out of disk space, or no randomness source to fill the file from."""


class FileGenerationError(FixtureGenerationError):
    pass


class IFileGenerator(ABC):
    @abstractmethod
    def generate(self, sizes: Iterable[int]):
        """
        Write one fixture file per size, in order.

        Args:
            sizes: File sizes in megabytes.

        Returns:
            list: One result per file written.
        """
        pass

    @abstractmethod
    def verify(self, sizes: Iterable[int]) -> List[Path]:
        pass
