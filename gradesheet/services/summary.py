from __future__ import annotations

from ..models.ingest_result import IngestResult

"""SUMMARY line rendering service.

Format:
SUMMARY blocks={parsed}/{configured} records={n} users={n} skipped_blocks={n}
skipped_rows={n} skipped_cells={n} elapsed_sec={x}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: IngestResult) -> str:
    """Render the SUMMARY line for an IngestResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 9, 1, tzinfo=timezone.utc)
        >>> result = IngestResult(
        ...     source="demo.csv", records=(), configured_blocks=5, block_stats=(),
        ...     skipped_blocks=1, start_time=t, end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY blocks=0/5 records=0 users=0 skipped_blocks=1 skipped_rows=0 skipped_cells=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY blocks={len(result.block_stats)}/{result.configured_blocks} "
        f"records={len(result.records)} "
        f"users={result.user_count} "
        f"skipped_blocks={result.skipped_blocks} "
        f"skipped_rows={result.skipped_rows} "
        f"skipped_cells={result.skipped_cells} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
