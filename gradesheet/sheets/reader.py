from __future__ import annotations

import re

from gradesheet.models.config_models import DEFAULT_LAYOUT, SheetLayout
from gradesheet.models.subject_block import RawTable

"""CSV text -> RawTable.

Only what the published export needs: rows separated by LF or CRLF, fields
separated by a single delimiter, quoted fields that may contain the
delimiter, and doubled quotes inside quoted fields. Newlines inside quoted
fields are not supported (the sheet never produces them).
"""

__all__ = [
    "BOM",
    "parse_row",
    "read_table",
    "split_rows",
]

BOM = "\ufeff"
_ROW_SEPARATOR = re.compile(r"\r?\n")


def split_rows(text: str) -> list[str]:
    """Split export text into raw row strings.

    A leading byte-order mark is removed and the whole text is trimmed first,
    so trailing blank lines do not produce rows.
    """
    if text.startswith(BOM):
        text = text[1:]
    text = text.strip()
    if not text:
        return []
    return _ROW_SEPARATOR.split(text)


def parse_row(row: str, delimiter: str = ",", quote_char: str = '"') -> list[str]:
    """Parse one CSV row into trimmed field values.

    >>> parse_row('a,"b,c",d')
    ['a', 'b,c', 'd']
    >>> parse_row('a,"b""c",d')
    ['a', 'b"c', 'd']
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(row)
    while i < n:
        ch = row[i]
        if ch == quote_char:
            if in_quotes and i + 1 < n and row[i + 1] == quote_char:
                current.append(quote_char)
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    # trailing field has no terminating delimiter
    values.append("".join(current).strip())
    return values


def read_table(text: str, layout: SheetLayout = DEFAULT_LAYOUT) -> RawTable:
    return tuple(
        tuple(parse_row(row, layout.delimiter, layout.quote_char)) for row in split_rows(text)
    )
