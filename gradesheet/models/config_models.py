from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the grade sheet ingestion tool.

This module defines the domain models for configuration. They are separate
from the loader implementation in gradesheet/config/loader.py and focus on
typing and sensible defaults, so the parsing stages can be used without any
YAML file at all.
"""

__all__ = [
    "DEFAULT_BLOCK_OFFSETS",
    "DEFAULT_LAYOUT",
    "AppConfig",
    "SheetLayout",
]

# Row indexes of the subject header rows in the published sheet
DEFAULT_BLOCK_OFFSETS: tuple[int, ...] = (0, 18, 36, 54, 72)


@dataclass(frozen=True)
class SheetLayout:
    """Geometry and sentinel tokens of the published grade sheet.

    The layout is assumed rather than discovered: blocks start at fixed row
    offsets, the first ``reserved_columns`` columns of a data row hold
    id / name / unused, and score columns follow.
    """
    block_offsets: tuple[int, ...] = DEFAULT_BLOCK_OFFSETS
    min_rows: int = 3  # below this the sheet is treated as empty
    reserved_columns: int = 3  # id, name, unused
    delimiter: str = ","
    quote_char: str = '"'
    absence_token: str = "н"
    pass_token: str = "зачет"
    topic_placeholder: str = "N/A"


DEFAULT_LAYOUT = SheetLayout()


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object for a fetch + parse run."""
    source_url: str  # Published CSV export (or pubhtml link)
    layout: SheetLayout = field(default_factory=SheetLayout)
    fallback_file: str | None = None  # Local demo export used when the fetch fails
    diagnostics: bool = False  # Write skipped units to logs/skips-*.log
