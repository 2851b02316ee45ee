from __future__ import annotations

import re
from datetime import date

__all__ = [
    "normalize_date",
]

# [0-9] rather than \d: str patterns would also accept non-ASCII digits
_FULL_YEAR = re.compile(r"^([0-9]{1,2})[./]([0-9]{1,2})[./]([0-9]{4})$")
_SHORT_YEAR = re.compile(r"^([0-9]{1,2})[./]([0-9]{1,2})[./]([0-9]{2})$")
_NO_YEAR = re.compile(r"^([0-9]{1,2})[./]([0-9]{1,2})$")


def _iso(year: str | int, month: str, day: str) -> str:
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def normalize_date(raw: str | None, current_year: int | None = None) -> str:
    """Normalize a header date to ``YYYY-MM-DD``.

    Accepted inputs are ``D.M.YYYY``, ``D.M.YY`` (century 20) and ``D.M``
    (current calendar year), with ``.`` or ``/`` as separator. Anything else,
    including dates that are already ISO formatted, is returned trimmed but
    otherwise unchanged. Never raises; the result is a best-effort value, not a
    validated date.

    Args:
        raw: Header cell text
        current_year: Year used for ``D.M`` input. Defaults to the year at call time
    """
    if not raw:
        return ""
    cleaned = raw.strip()

    m = _FULL_YEAR.match(cleaned)
    if m:
        day, month, year = m.groups()
        return _iso(year, month, day)

    m = _SHORT_YEAR.match(cleaned)
    if m:
        day, month, year = m.groups()
        return _iso(f"20{year}", month, day)

    m = _NO_YEAR.match(cleaned)
    if m:
        day, month = m.groups()
        year_value = current_year if current_year is not None else date.today().year
        return _iso(year_value, month, day)

    return cleaned
