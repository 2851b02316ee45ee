from __future__ import annotations

import logging

from gradesheet.logging.skip_log import SkipLogBuffer
from gradesheet.models.config_models import DEFAULT_LAYOUT, SheetLayout
from gradesheet.models.skip_record import BLOCK_NO_SUBJECT, SkipRecord
from gradesheet.models.subject_block import RawTable, SubjectBlock

"""Block locator.

The sheet holds one block per subject. Block boundaries come from the
configured offsets only, never from blank-row gaps or other content:

    row start      subject | ... | date | date | ...
    row start+1            | ... | topic| topic| ...
    row start+2..  user id | name | - | score | score | ...

Data rows of block i end at offset i+1, or at the table end for the last
configured block.
"""

__all__ = [
    "locate_blocks",
]

logger = logging.getLogger(__name__)


def locate_blocks(
    table: RawTable,
    layout: SheetLayout = DEFAULT_LAYOUT,
    skip_log: SkipLogBuffer | None = None,
) -> list[SubjectBlock]:
    """Return the subject blocks present in ``table``.

    Offsets beyond the table are omitted without notice (sheets may be shorter
    than the largest expected size). A block whose subject cell is blank is
    omitted and reported.
    """
    blocks: list[SubjectBlock] = []
    offsets = layout.block_offsets
    row_count = len(table)

    for index, start in enumerate(offsets):
        if start >= row_count:
            continue

        header_row = table[start]
        subject = header_row[0].strip() if header_row else ""
        if not subject:
            logger.warning("no subject name for block at row %d, skipping", start + 1)
            if skip_log is not None:
                skip_log.append(
                    SkipRecord(block=start, subject="", row=start + 1, column=-1, reason=BLOCK_NO_SUBJECT)
                )
            continue

        topic_row = table[start + 1] if start + 1 < row_count else ()
        end = offsets[index + 1] if index + 1 < len(offsets) else row_count
        data_rows = table[start + 2:end]

        blocks.append(
            SubjectBlock(
                start_row=start,
                subject=subject,
                header_row=header_row,
                topic_row=topic_row,
                data_rows=data_rows,
            )
        )
        logger.debug("block subject=%s start_row=%d data_rows=%d", subject, start, len(data_rows))
    return blocks
