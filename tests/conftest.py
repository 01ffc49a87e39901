import pytest
from pathlib import Path

from photo_grouper import config


class FakeReader:
    """Dictionary-backed stand-in for MetadataReader, keyed by file name."""

    def __init__(self, props=None):
        self.props = props or {}
        self.calls = []

    def read_properties(self, path, names):
        self.calls.append((Path(path).name, list(names)))
        data = self.props.get(Path(path).name, {})
        return {n: data[n] for n in names if n in data}


@pytest.fixture
def make_files(tmp_path):
    """Creates empty files in tmp_path (or a sub folder) and returns their paths."""
    def _make(*names, folder=None):
        root = tmp_path / folder if folder else tmp_path
        root.mkdir(parents=True, exist_ok=True)
        paths = []
        for name in names:
            p = root / name
            p.write_bytes(b"data")
            paths.append(p)
        return paths
    return _make


@pytest.fixture
def exposures():
    """Builds FakeReader props from {name: exposure text}."""
    def _build(mapping):
        return FakeReader({name: {config.EXPOSURE_BIAS: value} for name, value in mapping.items()})
    return _build


@pytest.fixture
def fake_reader():
    return FakeReader
