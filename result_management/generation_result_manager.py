# result_management/generation_result_manager.py

import json
import logging
from pathlib import Path
from typing import ClassVar

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from tabulate import tabulate

from utils.config import RESULT_DIR, config, config_to_dict
from utils.logging import setup_class_logger

RESULT_COLUMNS = [
    "size_megabytes",
    "file_name",
    "bytes_written",
    "block_count",
    "duration_s",
    "throughput_mbps",
]
BENCHMARK_COLUMNS = [
    "file_name",
    "size_megabytes",
    "strategy",
    "buffer_kb",
    "trials",
    "mean_ms",
    "stddev_ms",
    "throughput_mbps",
]


@setup_class_logger
class GenerationResultManager:
    __logger: ClassVar[logging.Logger]

    def __init__(self, result_dir=None):
        self.results = []
        self.benchmark_results = []
        self.result_dir = Path(result_dir) if result_dir is not None else RESULT_DIR

    def add_result(self, result):
        self.results.append(result)

    def add_results(self, results):
        for result in results:
            self.add_result(result)

    def add_benchmark_results(self, results):
        self.benchmark_results.extend(results)

    def to_dataframe(self):
        rows = [
            {
                "size_megabytes": result.size_megabytes,
                "file_name": result.path.name,
                "bytes_written": result.bytes_written,
                "block_count": result.block_count,
                "duration_s": result.duration_s,
                "throughput_mbps": result.throughput_mbps,
            }
            for result in self.results
        ]
        return pd.DataFrame(rows, columns=RESULT_COLUMNS)

    def summarize_results(self):
        table_data = []
        headers = [
            "Size (MB)",
            "File",
            "Bytes",
            "Blocks",
            "Duration (s)",
            "Throughput (MB/s)",
        ]

        for result in self.results:
            row = [
                result.size_megabytes,
                result.path.name,
                result.bytes_written,
                result.block_count,
                f"{result.duration_s:.3f}",
                f"{result.throughput_mbps:.2f}",
            ]
            table_data.append(row)

        table = tabulate(table_data, headers, tablefmt="grid")

        self.__logger.info("Test File Generation Summary:")
        self.__logger.info(f"\n{table}\n")

        return table

    def save_results(self):
        csv_path = self.result_dir / "generation_results.csv"
        self.to_dataframe().to_csv(csv_path, index=False)
        self.__logger.info(f"Results saved to {csv_path}")
        return csv_path

    def save_config(self):
        # Keep the configuration next to the results it produced
        config_path = self.result_dir / "run_config.json"
        with config_path.open("w") as f:
            json.dump(config_to_dict(config), f, indent=4)
        return config_path

    def plot_results(self):
        plot_configs = config.results.get("plot") or {}
        figsize = tuple(plot_configs.get("figsize") or (10, 6))
        title = plot_configs.get("title") or "Test File Write Throughput"

        df = self.to_dataframe()

        plt.figure(figsize=figsize)
        sns.set(style="whitegrid")

        ax = sns.barplot(x="size_megabytes", y="throughput_mbps", data=df, color="steelblue")
        ax.set_xlabel("File Size (MB)")
        ax.set_ylabel("Throughput (MB/s)")
        ax.set_title(f"{title} (Test Campaign: {config.name})")
        plt.xticks(rotation=45)

        plot_file_path = self.result_dir / "throughput_barplot.png"
        plt.tight_layout()
        plt.savefig(plot_file_path)
        plt.close()
        self.__logger.info(f"Plot saved to {plot_file_path}")

        return plot_file_path

    def benchmark_dataframe(self):
        rows = [
            {
                "file_name": result.file_name,
                "size_megabytes": result.size_megabytes,
                "strategy": result.strategy,
                "buffer_kb": result.buffer_kb,
                "trials": result.trials,
                "mean_ms": result.mean_ms,
                "stddev_ms": result.stddev_ms,
                "throughput_mbps": result.throughput_mbps,
            }
            for result in self.benchmark_results
        ]
        return pd.DataFrame(rows, columns=BENCHMARK_COLUMNS)

    def summarize_benchmark_results(self):
        table_data = []
        headers = [
            "File",
            "Strategy",
            "Buffer (Kb)",
            "Trials",
            "Mean (ms)",
            "Stddev (ms)",
            "Throughput (MB/s)",
        ]

        for result in self.benchmark_results:
            row = [
                result.file_name,
                result.strategy,
                result.buffer_kb,
                result.trials,
                f"{result.mean_ms:.3f}",
                f"{result.stddev_ms:.3f}",
                f"{result.throughput_mbps:.2f}",
            ]
            table_data.append(row)

        table = tabulate(table_data, headers, tablefmt="grid")

        self.__logger.info("Read Benchmark Summary:")
        self.__logger.info(f"\n{table}\n")

        return table

    def save_benchmark_results(self):
        csv_path = self.result_dir / "read_benchmark_results.csv"
        self.benchmark_dataframe().to_csv(csv_path, index=False)
        self.__logger.info(f"Benchmark results saved to {csv_path}")
        return csv_path

    def plot_benchmark_results(self):
        plot_configs = config.results.get("plot") or {}
        figsize = tuple(plot_configs.get("figsize") or (10, 6))

        df = self.benchmark_dataframe()
        plot_file_paths = []

        for file_name, file_df in df.groupby("file_name", sort=False):
            plt.figure(figsize=figsize)
            sns.set(style="whitegrid")

            ax = sns.lineplot(
                x="buffer_kb", y="mean_ms", hue="strategy", data=file_df, marker="o"
            )
            ax.set_xscale("log", base=2)
            ax.set_xlabel("Buffer Size (Kb)")
            ax.set_ylabel("Mean Read Time (ms)")
            ax.set_title(f"Sequential Read (Test Campaign: {config.name}, File: {file_name})")

            plot_file_path = self.result_dir / f"read_benchmark_{Path(file_name).stem}.png"
            plt.tight_layout()
            plt.savefig(plot_file_path)
            plt.close()
            self.__logger.info(f"Plot saved to {plot_file_path}")
            plot_file_paths.append(plot_file_path)

        return plot_file_paths
