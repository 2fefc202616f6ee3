import datetime as dt
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def anchor() -> dt.date:
    return dt.date(2025, 1, 1)


@pytest.fixture
def default_protocol_path() -> Path:
    return REPO_ROOT / "examples" / "default_protocol.yaml"


@pytest.fixture
def write_yaml(tmp_path):
    """Write ``text`` to a YAML file inside ``tmp_path`` and return its path."""

    def _write(text: str, name: str = "protocol.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
