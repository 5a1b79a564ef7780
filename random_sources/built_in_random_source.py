# random_sources/built_in_random_source.py
from __future__ import annotations

import os
from typing import TYPE_CHECKING

import numpy as np

from utils.logging import setup_class_logger

from .irandom_source import BaseRandomSource, RandomSourceUnavailableError

if TYPE_CHECKING:
    import logging
    from typing import ClassVar


@setup_class_logger
class SystemRandomSource(BaseRandomSource):
    __logger: ClassVar[logging.Logger]

    def __init__(self):
        super().__init__(name="urandom")

    def read(self, num_bytes):
        try:
            return os.urandom(num_bytes)
        except NotImplementedError as e:
            self.__logger.error(f"System randomness source unavailable: {e}")
            raise RandomSourceUnavailableError(
                "No system randomness source found"
            ) from e


@setup_class_logger
class NumpyRandomSource(BaseRandomSource):
    """
    Bytes from a numpy ``Generator``. With a seed the byte stream, and so every
    fixture file's content, is the same on each run.
    """

    __logger: ClassVar[logging.Logger]

    def __init__(self, seed=None):
        super().__init__(name="numpy")
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.__logger.debug(f"Seeded numpy generator with {seed!r}")

    def read(self, num_bytes):
        return self.rng.bytes(num_bytes)
