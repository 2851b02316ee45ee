from __future__ import annotations
from pathlib import Path

import requests

from gradesheet.cli import main as cli_main
from gradesheet.logging.init import reset_logging


def test_cli_success(write_config, patch_http, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Fetching grade sheet: https://sheets.example.test/" in out
    assert "SUMMARY blocks=2/3 records=5 users=2 skipped_blocks=1 skipped_rows=1 skipped_cells=2" in out
    # blank subject block is reported
    assert "WARN no subject name for block at row 7" in out


def test_cli_config_missing(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config file not found" in out


def test_cli_explicit_config_path(write_config: Path, temp_workdir: Path, patch_http, capsys):
    reset_logging()
    moved = temp_workdir / "other.yml"
    write_config.rename(moved)
    code = cli_main(["--config", str(moved)])
    assert code == 0
    assert "SUMMARY" in capsys.readouterr().out


def test_cli_fetch_error_without_fallback(write_config: Path, patch_http, capsys):
    reset_logging()
    text = write_config.read_text(encoding="utf-8").replace("fallback_file: ./data/demo.csv\n", "")
    write_config.write_text(text, encoding="utf-8")
    patch_http.get.side_effect = requests.ConnectionError("offline")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR fetch: request to" in out
    assert "SUMMARY" not in out


def test_cli_fetch_error_uses_fallback(write_config, demo_file, patch_http, capsys):
    reset_logging()
    patch_http.get.side_effect = requests.ConnectionError("offline")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    assert "WARN fetch failed, showing demo data from ./data/demo.csv" in out
    assert "records=5" in out


def test_cli_fallback_file_missing(write_config, patch_http, capsys):
    reset_logging()
    patch_http.get.side_effect = requests.ConnectionError("offline")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR fallback: sheet file not found" in out
