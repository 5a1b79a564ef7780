# main.py
import sys

from benchmarks.ibenchmark import BenchmarkError
from benchmarks.read_benchmark import (
    DEFAULT_BUFFER_KB,
    DEFAULT_NUM_TRIALS,
    READ_STRATEGIES,
    ReadBenchmark,
)
from fixtures.file_spec import BLOCK_BYTES
from fixtures.presets import resolve_sizes
from generators.file_generator import TestFileGenerator
from generators.igenerator import FileGenerationError, FixtureGenerationError
from random_sources.random_source_factory import RandomSourceFactory
from result_management.generation_result_manager import GenerationResultManager
from utils.config import OUTPUT_DIR, config
from utils.logging import MAIN_LOGGER


def main():
    generation = config.generation
    benchmark_config = config.get("benchmark") or {}
    benchmark_results = []

    try:
        # Get the ordered list of file sizes [MB] from the preset or an explicit list
        sizes = resolve_sizes(
            preset=generation.get("preset"), sizes=generation.get("sizes")
        )

        # Create the random byte source from the YAML entry [SystemRandomSource / NumpyRandomSource]
        random_source = RandomSourceFactory.create_random_source(config.random_source)

        generator = TestFileGenerator(
            output_dir=OUTPUT_DIR,
            random_source=random_source,
            block_bytes=generation.get("block_bytes") or BLOCK_BYTES,
            check_free_space=generation.get("check_free_space", True),
        )

        MAIN_LOGGER.info(
            f"Generating {len(sizes)} test file(s) in {OUTPUT_DIR}: {', '.join(map(str, sizes))} MB"
        )
        results = generator.generate(sizes)

        if generation.get("verify", True):
            mismatched = generator.verify(sizes)
            if mismatched:
                raise FileGenerationError(
                    f"{len(mismatched)} test file(s) failed verification: "
                    + ", ".join(str(path) for path in mismatched)
                )

        # Time sequential reads over the files just written
        if benchmark_config.get("enabled", False):
            benchmark = ReadBenchmark(
                num_trials=benchmark_config.get("num_trials") or DEFAULT_NUM_TRIALS,
                buffer_kb=benchmark_config.get("buffer_kb") or DEFAULT_BUFFER_KB,
                strategies=benchmark_config.get("strategies") or tuple(READ_STRATEGIES),
            )
            benchmark_results = benchmark.run(result.path for result in results)
    except (FixtureGenerationError, BenchmarkError, ValueError) as e:
        MAIN_LOGGER.error(e, exc_info=True)
        return 1

    # Set up a Result Manager object and report
    result_manager = GenerationResultManager()
    result_manager.add_results(results)
    result_manager.add_benchmark_results(benchmark_results)
    result_manager.summarize_results()
    result_manager.save_config()

    if benchmark_results:
        result_manager.summarize_benchmark_results()

    if config.results.get("csv", True):
        result_manager.save_results()
        if benchmark_results:
            result_manager.save_benchmark_results()

    plot_configs = config.results.get("plot") or {}
    if plot_configs.get("enabled", False):
        result_manager.plot_results()
        if benchmark_results:
            result_manager.plot_benchmark_results()

    return 0


def run():
    try:
        return main()
    except Exception as e:
        MAIN_LOGGER.error(e, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(run())
