from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .grade_record import GradeRecord

"""Ingestion result models.

IngestResult aggregates one fetch + parse run: the record list itself plus
the counters used by the SUMMARY line. BlockStat carries per-block counts of
emitted records and dropped rows / cells.
"""

__all__ = [
    "BlockStat",
    "IngestResult",
]


@dataclass(frozen=True)
class BlockStat:
    """Per-block parse statistics."""
    subject: str
    start_row: int
    records: int
    skipped_rows: int = 0
    skipped_cells: int = 0


@dataclass(frozen=True)
class IngestResult:
    """Aggregated outcome of a single ingestion run."""
    source: str  # URL or local path the text came from
    records: tuple[GradeRecord, ...]
    configured_blocks: int  # offsets in the layout
    block_stats: tuple[BlockStat, ...]  # blocks that were actually parsed
    skipped_blocks: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    used_fallback: bool = False

    @property
    def skipped_rows(self) -> int:
        return sum(b.skipped_rows for b in self.block_stats)

    @property
    def skipped_cells(self) -> int:
        return sum(b.skipped_cells for b in self.block_stats)

    @property
    def user_count(self) -> int:
        return len({r.user_id for r in self.records})
