from __future__ import annotations

import json
from dataclasses import asdict, dataclass

"""SkipRecord model for the diagnostics channel.

Every unit the parser drops (block, row or cell) can be described by a
SkipRecord. Records are serialized as JSON Lines with a fixed key set by
gradesheet.logging.skip_log.
"""

__all__ = [
    "BLOCK_NO_SUBJECT",
    "CELL_NO_DATE",
    "CELL_UNRECOGNIZED_SCORE",
    "ROW_NO_USER_ID",
    "SkipRecord",
]

BLOCK_NO_SUBJECT = "BLOCK_NO_SUBJECT"
ROW_NO_USER_ID = "ROW_NO_USER_ID"
CELL_NO_DATE = "CELL_NO_DATE"
CELL_UNRECOGNIZED_SCORE = "CELL_UNRECOGNIZED_SCORE"


@dataclass(frozen=True)
class SkipRecord:
    """Structured record of one dropped unit.

    Attributes:
        block: Table row index where the owning block starts
        subject: Subject name of the block ("" when the block itself was dropped)
        row: Row number in the sheet (1-based)
        column: Column index (0-based). Use -1 for block- and row-level skips
        reason: Skip classification in UPPER_SNAKE_CASE format
        value: Offending raw cell value, "" when not applicable
    """
    block: int
    subject: str
    row: int
    column: int
    reason: str
    value: str = ""

    @property
    def is_cell(self) -> bool:
        return self.column >= 0

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
