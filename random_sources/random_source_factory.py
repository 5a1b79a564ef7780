# random_sources/random_source_factory.py
from __future__ import annotations

from typing import TYPE_CHECKING

from utils.logging import setup_class_logger

from .built_in_random_source import NumpyRandomSource, SystemRandomSource

if TYPE_CHECKING:
    import logging
    from typing import ClassVar


@setup_class_logger
class RandomSourceFactory:
    __logger: ClassVar[logging.Logger]

    @staticmethod
    def create_random_source(source_config):
        source_name = source_config["name"]
        source_params = source_config.get("params") or {}

        if source_name == "urandom":
            RandomSourceFactory.__logger.info("Using system random source")
            return SystemRandomSource()
        elif source_name == "numpy":
            seed = source_params.get("seed")
            RandomSourceFactory.__logger.info(
                f"Using numpy random source (seed={seed})"
            )
            return NumpyRandomSource(seed=seed)
        else:
            raise ValueError(f"Unsupported random source: {source_name}")
