from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

import requests

from ..logging.skip_log import SkipLogBuffer
from ..models.config_models import AppConfig
from ..models.ingest_result import BlockStat, IngestResult
from ..models.skip_record import BLOCK_NO_SUBJECT
from ..sheets.records import parse_blocks
from .fetch import fetch_sheet_text

"""Ingestion orchestration: fetch + parse + metrics.

Fetching and parsing stay separate units; this module only joins them and
collects the numbers for the SUMMARY line. A fetch failure propagates
unchanged (FetchError) and no partial result is produced.
"""

__all__ = [
    "ingest",
    "ingest_text",
]

logger = logging.getLogger(__name__)


def ingest(
    config: AppConfig,
    *,
    session: requests.Session | None = None,
    current_year: int | None = None,
    progress: bool = True,
    logs_dir: Path | None = None,
) -> IngestResult:
    """Fetch the configured sheet and parse it.

    Args:
        config: Application configuration
        session: Optional requests session (tests pass a mock)
        current_year: Year for ``D.M`` dates, defaults to today's
        progress: Show the download bar on a TTY
        logs_dir: Directory for the skip log when diagnostics are enabled

    Returns:
        IngestResult with every record of every user

    Raises:
        FetchError: when the sheet cannot be downloaded
    """
    start_time = datetime.now(UTC)
    logger.info(f"Fetching grade sheet: {config.source_url}")
    text = fetch_sheet_text(config.source_url, session=session, progress=progress)
    return ingest_text(
        text,
        config,
        source=config.source_url,
        current_year=current_year,
        start_time=start_time,
        logs_dir=logs_dir,
    )


def ingest_text(
    text: str,
    config: AppConfig,
    *,
    source: str,
    current_year: int | None = None,
    used_fallback: bool = False,
    start_time: datetime | None = None,
    logs_dir: Path | None = None,
) -> IngestResult:
    """Parse already loaded sheet text into an IngestResult."""
    if start_time is None:
        start_time = datetime.now(UTC)
    skip_log = SkipLogBuffer(logs_dir)

    parsed = parse_blocks(text, config.layout, current_year=current_year, skip_log=skip_log)

    block_stats: list[BlockStat] = []
    records = []
    for block, block_records in parsed:
        block_skips = skip_log.for_block(block.start_row)
        block_stats.append(
            BlockStat(
                subject=block.subject,
                start_row=block.start_row,
                records=len(block_records),
                skipped_rows=sum(1 for s in block_skips if not s.is_cell),
                skipped_cells=sum(1 for s in block_skips if s.is_cell),
            )
        )
        records.extend(block_records)
        logger.debug(
            f"block subject={block.subject} records={len(block_records)} skips={len(block_skips)}"
        )

    skipped_blocks = skip_log.counts_by_reason().get(BLOCK_NO_SUBJECT, 0)

    if config.diagnostics:
        try:
            written = skip_log.flush()
        except OSError as e:
            # Diagnostics never fail the run
            logger.warning(f"could not write skip log: {e}")
        else:
            if written is not None:
                logger.info(f"skip log written: {written}")

    end_time = datetime.now(UTC)
    return IngestResult(
        source=source,
        records=tuple(records),
        configured_blocks=len(config.layout.block_offsets),
        block_stats=tuple(block_stats),
        skipped_blocks=skipped_blocks,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        used_fallback=used_fallback,
    )
