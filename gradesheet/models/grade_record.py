from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""GradeRecord model and the three-way Score type.

A GradeRecord is the unit emitted by the ingestion pipeline: one score of one
user for one dated topic of one subject.
"""

__all__ = [
    "GradeRecord",
    "Score",
    "ScoreKind",
]


class ScoreKind(Enum):
    """Score classification.

    - NUMERIC: the cell holds a finite number (no range validation)
    - PASS: non-numeric credit / pass outcome
    - ABSENCE: the student was marked absent
    """
    NUMERIC = "numeric"
    PASS = "pass"
    ABSENCE = "absence"


@dataclass(frozen=True)
class Score:
    kind: ScoreKind
    value: int | float | None = None  # only set for NUMERIC

    @staticmethod
    def numeric(value: int | float) -> Score:
        # 5.0 -> 5 so integral grades compare and serialize like the sheet shows them
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return Score(ScoreKind.NUMERIC, value)

    @staticmethod
    def passed() -> Score:
        return Score(ScoreKind.PASS)

    @staticmethod
    def absence() -> Score:
        return Score(ScoreKind.ABSENCE)

    @property
    def is_numeric(self) -> bool:
        return self.kind is ScoreKind.NUMERIC

    def to_json_value(self) -> int | float | str:
        """Number for numeric scores, otherwise the marker name."""
        if self.kind is ScoreKind.NUMERIC:
            assert self.value is not None
            return self.value
        return self.kind.value


@dataclass(frozen=True)
class GradeRecord:
    """Single normalized grade.

    Attributes:
        user_id: Identifier from column 0 of the data row (never blank)
        user_name: Display name from column 1, None when blank
        subject: Subject name read from the block header cell
        topic: Topic label aligned with the score column (placeholder when blank)
        date: ``YYYY-MM-DD`` when recognized, otherwise the raw header text
        score: Classified score
    """
    user_id: str
    user_name: str | None
    subject: str
    topic: str
    date: str
    score: Score

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "user_name": self.user_name,
            "subject": self.subject,
            "topic": self.topic,
            "date": self.date,
            "score": self.score.to_json_value(),
        }
