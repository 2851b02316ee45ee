from __future__ import annotations
import json
from pathlib import Path

from gradesheet.logging.skip_log import SkipLogBuffer
from gradesheet.models.skip_record import CELL_NO_DATE, ROW_NO_USER_ID, SkipRecord

KEYS = {"block", "subject", "row", "column", "reason", "value"}


def test_skip_record_json_line():
    rec = SkipRecord(block=18, subject="Химия", row=21, column=5, reason=CELL_NO_DATE, value="5")
    data = json.loads(rec.to_json_line())
    assert data["subject"] == "Химия"
    assert data["column"] == 5
    assert set(data.keys()) == KEYS
    # non-ASCII kept as is
    assert "Химия" in rec.to_json_line()


def test_skip_record_is_cell():
    assert SkipRecord(0, "M", 3, 4, CELL_NO_DATE).is_cell
    assert not SkipRecord(0, "M", 3, -1, ROW_NO_USER_ID).is_cell


def test_skip_log_buffer_flush(temp_workdir: Path):
    buf = SkipLogBuffer()
    buf.append(SkipRecord(0, "Math", 4, -1, ROW_NO_USER_ID))
    buf.append(SkipRecord(0, "Math", 5, 3, CELL_NO_DATE, "5"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == Path("./logs")
    assert path.name.startswith("skips-")
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == KEYS
    # buffer cleared after flush
    assert len(buf) == 0


def test_skip_log_buffer_multiple_flushes(temp_workdir: Path):
    buf = SkipLogBuffer()
    buf.append(SkipRecord(0, "Math", 4, -1, ROW_NO_USER_ID))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(SkipRecord(0, "Math", 6, -1, ROW_NO_USER_ID))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_skip_log_buffer_empty_flush_writes_nothing(tmp_path: Path):
    buf = SkipLogBuffer(tmp_path / "diag")
    assert buf.flush() is None
    assert not (tmp_path / "diag").exists()


def test_skip_log_buffer_queries():
    buf = SkipLogBuffer()
    buf.append(SkipRecord(0, "Math", 4, -1, ROW_NO_USER_ID))
    buf.append(SkipRecord(0, "Math", 5, 3, CELL_NO_DATE))
    buf.append(SkipRecord(18, "Bio", 21, 3, CELL_NO_DATE))
    assert len(buf.for_block(0)) == 2
    assert buf.counts_by_reason() == {ROW_NO_USER_ID: 1, CELL_NO_DATE: 2}
