from __future__ import annotations

import math

from gradesheet.models.config_models import DEFAULT_LAYOUT, SheetLayout
from gradesheet.models.grade_record import Score

__all__ = [
    "classify_score",
    "parse_number",
]


def parse_number(text: str) -> float | None:
    """Return the finite float value of ``text`` or None."""
    # float() accepts digit-group underscores ("1_0"); a grade cell never means that
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def classify_score(raw: str | None, layout: SheetLayout = DEFAULT_LAYOUT) -> Score | None:
    """Classify a score cell.

    Precedence: absence token (exact, case-insensitive), then finite number
    (no range check), then pass token (substring, case-insensitive). Anything
    else, blank cells included, yields None and the caller drops the cell.
    """
    if raw is None:
        return None
    text = raw.strip().strip(layout.quote_char).strip()
    if not text:
        return None

    folded = text.casefold()
    if folded == layout.absence_token.casefold():
        return Score.absence()

    number = parse_number(text)
    if number is not None:
        return Score.numeric(number)

    if layout.pass_token.casefold() in folded:
        return Score.passed()

    return None
