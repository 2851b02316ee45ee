from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from ..models.grade_record import GradeRecord, ScoreKind

"""Consumer-side views of a record list.

The parser returns every record of every user; selecting one user and
grouping by subject is the caller's job. These helpers do that, and build the
per-subject summary (average of numeric scores, passes, absences, band) with
pandas.
"""

__all__ = [
    "RECORD_COLUMNS",
    "SUMMARY_COLUMNS",
    "group_by_subject",
    "records_for_user",
    "records_to_frame",
    "render_subject_report",
    "score_band",
    "summarize_subjects",
]

RECORD_COLUMNS = ["user_id", "user_name", "subject", "topic", "date", "kind", "value"]
SUMMARY_COLUMNS = ["subject", "average", "numeric_count", "passes", "absences", "band"]

# (lower bound, band) on the 100 point scale, checked top down
_BANDS = (
    (86, "excellent"),
    (71, "good"),
    (56, "satisfactory"),
)


def score_band(average: float) -> str:
    for lower, band in _BANDS:
        if average >= lower:
            return band
    return "unsatisfactory"


def records_for_user(records: Iterable[GradeRecord], user_id: str | int) -> list[GradeRecord]:
    uid = str(user_id).strip()
    return [r for r in records if r.user_id == uid]


def group_by_subject(records: Iterable[GradeRecord]) -> dict[str, list[GradeRecord]]:
    """Group records by subject, keeping first-seen subject order."""
    groups: dict[str, list[GradeRecord]] = {}
    for r in records:
        groups.setdefault(r.subject, []).append(r)
    return groups


def records_to_frame(records: Iterable[GradeRecord]) -> pd.DataFrame:
    rows = [
        {
            "user_id": r.user_id,
            "user_name": r.user_name,
            "subject": r.subject,
            "topic": r.topic,
            "date": r.date,
            "kind": r.score.kind.value,
            "value": r.score.value,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def summarize_subjects(records: Iterable[GradeRecord]) -> pd.DataFrame:
    """One summary row per subject, in first-seen subject order.

    ``average`` is the mean of numeric scores rounded to 2 decimals (0.0 when
    the subject has none, in which case ``band`` is "none").
    """
    df = records_to_frame(records)
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    rows = []
    for subject, group in df.groupby("subject", sort=False):
        numeric = pd.to_numeric(group.loc[group["kind"] == ScoreKind.NUMERIC.value, "value"])
        average = round(float(numeric.mean()), 2) if not numeric.empty else 0.0
        rows.append(
            {
                "subject": subject,
                "average": average,
                "numeric_count": int(numeric.size),
                "passes": int((group["kind"] == ScoreKind.PASS.value).sum()),
                "absences": int((group["kind"] == ScoreKind.ABSENCE.value).sum()),
                "band": score_band(average) if not numeric.empty else "none",
            }
        )
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def render_subject_report(records: Iterable[GradeRecord]) -> str:
    summary = summarize_subjects(records)
    if summary.empty:
        return "no grades"
    return summary.to_string(index=False, float_format=lambda v: f"{v:.2f}")
