# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch
import pytest

from gradesheet.config.loader import SOURCE_URL_ENV
from gradesheet.models.config_models import SheetLayout

# Three configured blocks (rows 0, 6, 9); the block at row 6 has no subject.
SAMPLE_CSV = "\n".join([
    'Math,,,5.9.2024,12.09.24,19.9',
    ',,,Intro,"Quiz, part 1",',
    'u1,Alice,,85,н,"зачет"',
    ',Ghost,,100,,',
    'u2,Bob,,xyz,70',
    '',
    ',,,1.10.2024',
    ',,,Topic',
    'u1,Alice,,50',
    'Physics,,,03/10/2024,',
    ',,,,',
    'u1,Alice,,"4.5",7',
]) + "\n"

SAMPLE_LAYOUT = SheetLayout(block_offsets=(0, 6, 9))


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    monkeypatch.delenv(SOURCE_URL_ENV, raising=False)
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def sample_layout() -> SheetLayout:
    return SAMPLE_LAYOUT


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_url: https://sheets.example.test/spreadsheets/d/e/KEY/pub?output=csv
fallback_file: ./data/demo.csv
layout:
  block_offsets: [0, 6, 9]
  min_rows: 3
  reserved_columns: 3
markers:
  absence: "н"
  pass: "зачет"
  topic_placeholder: "N/A"
diagnostics:
  enabled: false
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "gradesheet.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def demo_file(temp_workdir: Path, sample_csv: str) -> Path:
    f = temp_workdir / "data" / "demo.csv"
    f.write_text(sample_csv, encoding="utf-8")
    return f


def make_response(body: bytes, status: int = 200, chunks: int = 1) -> MagicMock:
    """Mock of a streamed requests.Response."""
    resp = MagicMock()
    resp.status_code = status
    resp.headers = {"Content-Length": str(len(body))}
    step = max(1, len(body) // chunks)
    resp.iter_content.return_value = [body[i:i + step] for i in range(0, len(body), step)]
    return resp


@pytest.fixture()
def fake_session(sample_csv: str) -> MagicMock:
    session = MagicMock()
    session.get.return_value = make_response(sample_csv.encode("utf-8"))
    return session


@pytest.fixture()
def response_factory():
    return make_response


@pytest.fixture()
def patch_http(fake_session: MagicMock):
    """Route requests.Session() inside the fetch service to the fake session."""
    with patch("gradesheet.services.fetch.requests.Session", return_value=fake_session):
        yield fake_session
