import pandas as pd
import pytest
from schema import Schema, SchemaError

import main as main_module
from fixtures.file_spec import MEGABYTE
from utils.config import CONFIG_DIR, OUTPUT_DIR, RESULT_DIR, SCHEMA_CONFIG, config


def test_config_comes_from_test_directory():
    assert config.name == "pytest_campaign"
    assert OUTPUT_DIR == CONFIG_DIR / "data"
    assert RESULT_DIR.is_dir()
    assert (RESULT_DIR / "system.log").exists()


def test_main_generates_configured_sizes(tmp_path, monkeypatch):
    monkeypatch.setattr(main_module, "OUTPUT_DIR", tmp_path)

    assert main_module.main() == 0

    assert (tmp_path / "test_1.bin").stat().st_size == MEGABYTE
    assert (tmp_path / "test_2.bin").stat().st_size == 2 * MEGABYTE
    assert (RESULT_DIR / "generation_results.csv").exists()


def test_main_fails_on_missing_output_dir(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr(main_module, "OUTPUT_DIR", tmp_path / "missing")

    assert main_module.main() == 1
    assert any("does not exist" in message for message in caplog.messages)


def test_main_fails_verification(tmp_path, monkeypatch):
    monkeypatch.setattr(main_module, "OUTPUT_DIR", tmp_path)
    monkeypatch.setattr(
        main_module.TestFileGenerator, "verify", lambda self, sizes: [tmp_path / "x"]
    )

    assert main_module.main() == 1


def test_main_rejects_invalid_size(tmp_path, monkeypatch):
    monkeypatch.setattr(main_module, "OUTPUT_DIR", tmp_path)
    monkeypatch.setattr(
        main_module, "resolve_sizes", lambda preset=None, sizes=None: (0,)
    )

    assert main_module.main() == 1
    assert list(tmp_path.iterdir()) == []


def test_main_runs_read_benchmark(tmp_path, monkeypatch):
    monkeypatch.setattr(main_module, "OUTPUT_DIR", tmp_path)

    assert main_module.main() == 0

    df = pd.read_csv(RESULT_DIR / "read_benchmark_results.csv")
    # 2 files x 2 strategies x 2 buffer sizes
    assert len(df) == 8
    assert set(df["file_name"]) == {"test_1.bin", "test_2.bin"}
    assert (df["trials"] == 2).all()


def test_unexpected_error_is_logged_and_exits_nonzero(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr(main_module, "OUTPUT_DIR", tmp_path)

    def disk_gone(self):
        raise OSError("results volume went away")

    monkeypatch.setattr(main_module.GenerationResultManager, "save_results", disk_gone)

    assert main_module.run() == 1
    assert "results volume went away" in caplog.messages


def test_schema_rejects_empty_size_list():
    generation = {"output_dir": "data", "sizes": []}

    with pytest.raises(SchemaError):
        Schema(SCHEMA_CONFIG["generation"]).validate(generation)

    assert Schema(SCHEMA_CONFIG["generation"]).validate({"output_dir": "data", "sizes": [8]})
