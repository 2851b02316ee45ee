"""Domain models for the grade sheet ingestion tool.

This package contains the immutable dataclasses passed between the parsing
stages, the ingestion service and the CLI.
"""

from .config_models import DEFAULT_LAYOUT, AppConfig, SheetLayout
from .grade_record import GradeRecord, Score, ScoreKind
from .ingest_result import BlockStat, IngestResult
from .skip_record import SkipRecord
from .subject_block import RawRow, RawTable, SubjectBlock

__all__ = [
    # Configuration models
    "AppConfig",
    "DEFAULT_LAYOUT",
    "SheetLayout",
    # Parsing models
    "GradeRecord",
    "RawRow",
    "RawTable",
    "Score",
    "ScoreKind",
    "SubjectBlock",
    # Results / diagnostics
    "BlockStat",
    "IngestResult",
    "SkipRecord",
]
