from __future__ import annotations

from dataclasses import dataclass

"""SubjectBlock model: one fixed-offset vertical slice of the raw table."""

__all__ = [
    "RawRow",
    "RawTable",
    "SubjectBlock",
]

RawRow = tuple[str, ...]
RawTable = tuple[RawRow, ...]


@dataclass(frozen=True)
class SubjectBlock:
    """Processing unit for one subject of the sheet.

    ``header_row`` carries the subject name in column 0 and a date per score
    column; ``topic_row`` carries topic labels aligned to the same columns.
    ``data_rows`` spans up to the next configured offset (or the table end).
    """
    start_row: int  # table row index of the header row (0-based)
    subject: str
    header_row: RawRow
    topic_row: RawRow
    data_rows: tuple[RawRow, ...]

    @property
    def first_data_row(self) -> int:
        """Table index of the first data row."""
        return self.start_row + 2

    def date_at(self, column: int) -> str:
        return _cell(self.header_row, column)

    def topic_at(self, column: int) -> str:
        return _cell(self.topic_row, column)


def _cell(row: RawRow, column: int) -> str:
    if column < len(row):
        return row[column].strip()
    return ""
