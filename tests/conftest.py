import os
import shutil
import tempfile
import textwrap
from pathlib import Path

import pytest

# The project loads config.yaml on import, so the test config has to be in
# place before any test module imports it.
_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="fixturegen-test-"))
(_CONFIG_DIR / "data").mkdir()
(_CONFIG_DIR / "config.yaml").write_text(
    textwrap.dedent(
        """\
        name: pytest_campaign
        generation:
          output_dir: data
          sizes: [1, 2]
          block_bytes: 65536
          check_free_space: true
          verify: true
        benchmark:
          enabled: true
          num_trials: 2
          buffer_kb: [64, 1024]
          strategies: [read_plain, read_into]
        random_source:
          name: numpy
          params:
            seed: 1234
        results:
          dir: results
          csv: true
          plot:
            enabled: false
            figsize: [6, 4]
            title: Pytest Throughput
        logging:
          file_level: DEBUG
          stdout_level: WARNING
        """
    )
)
os.environ["FIXTUREGEN_CONFIG_DIR"] = str(_CONFIG_DIR)


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_CONFIG_DIR, ignore_errors=True)


class FakeRandomSource:
    """Deterministic stand-in that counts how many bytes were requested."""

    name = "fake"

    def __init__(self, fill=b"\xab"):
        self.fill = fill
        self.bytes_read = 0

    def read(self, num_bytes):
        self.bytes_read += num_bytes
        return self.fill * num_bytes


@pytest.fixture
def fake_source():
    return FakeRandomSource()


@pytest.fixture
def output_dir(tmp_path):
    directory = tmp_path / "data"
    directory.mkdir()
    return directory
