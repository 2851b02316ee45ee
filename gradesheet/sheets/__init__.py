"""Pure parsing stages: text -> rows -> blocks -> grade records."""

from .blocks import locate_blocks
from .dates import normalize_date
from .reader import parse_row, read_table, split_rows
from .records import parse_blocks, parse_grades, scan_block
from .scores import classify_score

__all__ = [
    "classify_score",
    "locate_blocks",
    "normalize_date",
    "parse_blocks",
    "parse_grades",
    "parse_row",
    "read_table",
    "scan_block",
    "split_rows",
]
