import contextlib
import os
import time
from pathlib import Path

from pyconfigparser import Config, configparser
from schema import And, Optional, Or


@contextlib.contextmanager
# temporarily change to a different working directory
def temporaryWorkingDirectory(path):
    _oldCWD = os.getcwd()
    os.chdir(os.path.abspath(path))

    try:
        yield
    finally:
        os.chdir(_oldCWD)


def config_to_dict(config):
    """
    Recursively convert a pyconfigparser.Config object to a dictionary.

    Args:
        config (pyconfigparser.Config or list): The configuration object or list.

    Returns:
        dict or list: The converted dictionary or list.
    """

    def convert(value):
        if isinstance(value, Config):
            return config_to_dict(value)
        elif isinstance(value, list):
            return [convert(item) for item in value]
        else:
            return value

    if isinstance(config, list):
        return [convert(item) for item in config]
    else:
        return {key: convert(value) for key, value in dict(config).items()}


MAIN_DIR = Path(__file__).resolve().parent.parent
# FIXTUREGEN_CONFIG_DIR points at an alternative directory holding config.yaml
CONFIG_DIR = Path(os.environ.get("FIXTUREGEN_CONFIG_DIR", MAIN_DIR)).resolve()

_positive_int = And(int, lambda n: not isinstance(n, bool) and n > 0)

SCHEMA_CONFIG = {
    "name": And(str, len),
    "generation": {
        "output_dir": And(str, len),
        Optional("preset"): And(str, len),
        Optional("sizes"): And([_positive_int], len),
        Optional("block_bytes"): _positive_int,
        Optional("check_free_space"): bool,
        Optional("verify"): bool,
    },
    Optional("benchmark"): {
        Optional("enabled"): bool,
        Optional("num_trials"): _positive_int,
        Optional("buffer_kb"): And([_positive_int], len),
        Optional("strategies"): And(
            [And(str, lambda s: s in ["read_plain", "read_into"])], len
        ),
    },
    "random_source": {
        "name": And(str, lambda s: s in ["urandom", "numpy"]),
        Optional("params"): Or(None, {Optional("seed"): Or(None, int)}),
    },
    "results": {
        "dir": And(str, len),
        Optional("csv"): bool,
        Optional("plot"): {
            Optional("enabled"): bool,
            Optional("figsize"): [_positive_int],
            Optional("title"): And(str, len),
        },
    },
    "logging": {
        "file_level": And(str, len),
        "stdout_level": And(str, len),
    },
}

# Load and validate the configuration

with temporaryWorkingDirectory(path=CONFIG_DIR):
    config = configparser.get_config(schema=SCHEMA_CONFIG, config_dir="")


def resolve_path(path):
    # Relative paths are taken from the directory holding config.yaml
    path = Path(path)
    return path if path.is_absolute() else CONFIG_DIR / path


def result_dir_publish(config):
    result_dir = resolve_path(config.results.dir)

    test_campaign_name = config.name
    date_stamp = time.strftime("%Y%m%d-%H%M%S")
    RESULT_DIR = result_dir / test_campaign_name / date_stamp
    RESULT_DIR.mkdir(exist_ok=True, parents=True)

    return RESULT_DIR


RESULT_DIR = result_dir_publish(config)

# The output directory is never created here, it has to exist before a run
OUTPUT_DIR = resolve_path(config.generation.output_dir)
