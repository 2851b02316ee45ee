from __future__ import annotations

import logging

from gradesheet.logging.skip_log import SkipLogBuffer
from gradesheet.models.config_models import DEFAULT_LAYOUT, SheetLayout
from gradesheet.models.grade_record import GradeRecord
from gradesheet.models.skip_record import (
    CELL_NO_DATE,
    CELL_UNRECOGNIZED_SCORE,
    ROW_NO_USER_ID,
    SkipRecord,
)
from gradesheet.models.subject_block import SubjectBlock

from .blocks import locate_blocks
from .dates import normalize_date
from .reader import read_table
from .scores import classify_score

"""Record emitter: SubjectBlock rows -> GradeRecord list.

Irregular input never aborts the parse. The smallest affected unit is
dropped and, when a SkipLogBuffer is attached, described there:

- data row without user id      -> row dropped   (ROW_NO_USER_ID)
- score column without a date   -> cell dropped  (CELL_NO_DATE)
- unclassifiable score cell     -> cell dropped  (CELL_UNRECOGNIZED_SCORE)
"""

__all__ = [
    "parse_blocks",
    "parse_grades",
    "scan_block",
]

logger = logging.getLogger(__name__)


def scan_block(
    block: SubjectBlock,
    layout: SheetLayout = DEFAULT_LAYOUT,
    current_year: int | None = None,
    skip_log: SkipLogBuffer | None = None,
) -> list[GradeRecord]:
    """Emit the grade records of one block.

    Score columns are read right to left (newest entries are at the end of a
    row) down to ``layout.reserved_columns``. Output order follows that scan
    and is stable for identical input.
    """
    records: list[GradeRecord] = []

    def skip(row_number: int, column: int, reason: str, value: str = "") -> None:
        logger.debug(
            "skip subject=%s row=%d column=%d reason=%s value=%r",
            block.subject, row_number, column, reason, value,
        )
        if skip_log is not None:
            skip_log.append(
                SkipRecord(
                    block=block.start_row,
                    subject=block.subject,
                    row=row_number,
                    column=column,
                    reason=reason,
                    value=value,
                )
            )

    for offset, row in enumerate(block.data_rows):
        row_number = block.first_data_row + offset + 1
        if not any(cell.strip() for cell in row):
            continue

        user_id = row[0].strip()
        if not user_id:
            skip(row_number, -1, ROW_NO_USER_ID)
            continue
        user_name = row[1].strip() if len(row) > 1 and row[1].strip() else None

        for column in range(len(row) - 1, layout.reserved_columns - 1, -1):
            cell = row[column].strip()
            if not cell:
                continue

            date_text = block.date_at(column)
            if not date_text:
                skip(row_number, column, CELL_NO_DATE, cell)
                continue

            score = classify_score(cell, layout)
            if score is None:
                skip(row_number, column, CELL_UNRECOGNIZED_SCORE, cell)
                continue

            records.append(
                GradeRecord(
                    user_id=user_id,
                    user_name=user_name,
                    subject=block.subject,
                    topic=block.topic_at(column) or layout.topic_placeholder,
                    date=normalize_date(date_text, current_year),
                    score=score,
                )
            )
    return records


def parse_grades(
    text: str,
    layout: SheetLayout = DEFAULT_LAYOUT,
    *,
    current_year: int | None = None,
    skip_log: SkipLogBuffer | None = None,
) -> list[GradeRecord]:
    """Parse export text into the flat list of grade records of every user.

    No filtering by user is done here; callers select the rows they need.

    Args:
        text: Raw CSV export (a leading BOM is allowed)
        layout: Sheet geometry and sentinel tokens
        current_year: Year substituted into ``D.M`` dates, defaults to today's
        skip_log: Optional buffer receiving one SkipRecord per dropped unit

    Returns:
        New list of GradeRecord; empty when the text is blank or shorter than
        ``layout.min_rows`` rows
    """
    records: list[GradeRecord] = []
    for _, block_records in parse_blocks(text, layout, current_year=current_year, skip_log=skip_log):
        records.extend(block_records)
    return records


def parse_blocks(
    text: str,
    layout: SheetLayout = DEFAULT_LAYOUT,
    *,
    current_year: int | None = None,
    skip_log: SkipLogBuffer | None = None,
) -> list[tuple[SubjectBlock, list[GradeRecord]]]:
    """Like parse_grades but keeps the records grouped by their block."""
    table = read_table(text, layout)
    if not table:
        return []
    if len(table) < layout.min_rows:
        logger.warning("sheet has %d rows (< %d), treating it as empty", len(table), layout.min_rows)
        return []
    return [
        (block, scan_block(block, layout, current_year, skip_log))
        for block in locate_blocks(table, layout, skip_log)
    ]
