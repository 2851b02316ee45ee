from __future__ import annotations

import json
from pathlib import Path

from gradesheet.cli import main as cli_main
from gradesheet.logging.init import reset_logging

"""End-to-end CLI run against a mocked published sheet.

Verifies the per-user report, the JSON export and the SUMMARY line of a full
fetch + parse run.
"""


def test_run_with_user_report_and_json(write_config, temp_workdir: Path, patch_http, capsys):
    reset_logging()
    out_file = temp_workdir / "records.json"
    code = cli_main(["--user", "u1", "--json", str(out_file)])
    out = capsys.readouterr().out

    assert code == 0
    assert "USER u1 (Alice)" in out
    assert "Math" in out and "Physics" in out
    assert "85.00" in out
    assert f"INFO records written: {out_file}" in out

    payload = json.loads(out_file.read_text(encoding="utf-8"))
    assert len(payload) == 5
    first = payload[0]
    assert first["user_id"] == "u1"
    assert first["subject"] == "Math"
    assert first["score"] == "pass"
    assert {p["score"] for p in payload} == {"pass", "absence", 85, 70, 4.5}
    # every recognized header date is ISO formatted
    assert all(len(p["date"]) == 10 and p["date"][4] == "-" for p in payload)


def test_run_unknown_user_prints_no_grades(write_config, patch_http, capsys):
    reset_logging()
    code = cli_main(["--user", "nobody"])
    out = capsys.readouterr().out
    assert code == 0
    assert "USER nobody" in out
    assert "no grades" in out


def test_run_env_file_overrides_source_url(write_config, temp_workdir: Path, patch_http, monkeypatch, capsys):
    from gradesheet.config.loader import SOURCE_URL_ENV
    # registered with monkeypatch so the value loaded from .env is undone afterwards
    monkeypatch.setenv(SOURCE_URL_ENV, "")
    (temp_workdir / ".env").write_text(
        f"{SOURCE_URL_ENV}=https://override.test/sheet/pubhtml?gid=3\n", encoding="utf-8"
    )
    reset_logging()
    code = cli_main([])
    assert code == 0
    patch_http.get.assert_called_once()
    assert patch_http.get.call_args.args[0] == "https://override.test/sheet/pub?output=csv&gid=3"


def test_run_with_diagnostics_writes_skip_log(write_config, temp_workdir: Path, patch_http, capsys):
    text = write_config.read_text(encoding="utf-8").replace("enabled: false", "enabled: true")
    write_config.write_text(text, encoding="utf-8")
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    logs = list((temp_workdir / "logs").glob("skips-*.log"))
    assert len(logs) == 1
    assert "INFO skip log written:" in out
    lines = logs[0].read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4
