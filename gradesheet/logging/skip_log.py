from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

from gradesheet.models.skip_record import SkipRecord

"""Skip log buffer: the optional diagnostics channel of the parser.

- The parser appends one SkipRecord per dropped block / row / cell
- flush() writes them as JSON Lines to ``logs/skips-YYYYMMDD-HHMMSS.log`` (UTC)
- The returned record list never depends on whether a buffer is attached
"""

__all__ = [
    "SkipLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class SkipLogBuffer:
    """In-memory buffer of skip records. Flush writes JSON Lines.

    The file path is decided on first access. Not thread safe; each parse run
    owns its own buffer.
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[SkipRecord] = []
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"skips-{stamp}.log"
        return self._file_path

    def append(self, record: SkipRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SkipRecord]:
        return iter(self._records)

    def for_block(self, start_row: int) -> list[SkipRecord]:
        return [r for r in self._records if r.block == start_row]

    def counts_by_reason(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for r in self._records:
            counts[r.reason] = counts.get(r.reason, 0) + 1
        return counts

    def flush(self) -> Path | None:
        """Append buffered records to the log file and clear the buffer.

        Returns:
            Path written to, or None when there was nothing to write
        """
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
