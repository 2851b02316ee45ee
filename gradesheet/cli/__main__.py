from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from gradesheet.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from gradesheet.logging.init import enable_debug, log_summary, setup_logging
from gradesheet.models.config_models import AppConfig
from gradesheet.models.ingest_result import IngestResult
from gradesheet.services.fetch import FetchError, fetch_sheet_text, read_local_text
from gradesheet.services.pipeline import ingest, ingest_text
from gradesheet.services.report import records_for_user, render_subject_report
from gradesheet.services.summary import render_summary_line
from gradesheet.sheets.blocks import locate_blocks
from gradesheet.sheets.reader import read_table

"""CLI entrypoint.

Flow:
- Load .env (override mode) and the YAML config
- Fetch + parse the published sheet
- On fetch failure, parse the configured fallback (demo) export instead
- Print the per-subject report for --user, write --json, log the SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_FALLBACK = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values there win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Published grade sheet -> grade records")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to the YAML config")
    p.add_argument("--user", help="Print the per-subject report for this user id")
    p.add_argument("--json", type=Path, dest="json_path", help="Write all records to this JSON file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print located subject blocks then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: AppConfig) -> int:
    logger = setup_logging()
    try:
        text = fetch_sheet_text(cfg.source_url)
    except FetchError as e:
        if not cfg.fallback_file:
            logger.error(f"fetch: {e}")
            return EXIT_FATAL
        logger.warning(f"fetch failed, inspecting fallback data: {e}")
        try:
            text = read_local_text(cfg.fallback_file)
        except FetchError as fe:
            logger.error(f"fallback: {fe}")
            return EXIT_FATAL

    table = read_table(text, cfg.layout)
    print(f"ROWS: {len(table)}")
    for block in locate_blocks(table, cfg.layout):
        dated = [
            c for c in range(cfg.layout.reserved_columns, len(block.header_row)) if block.date_at(c)
        ]
        print(f"  BLOCK: row={block.start_row + 1} subject={block.subject} data_rows={len(block.data_rows)}")
        print("    dates=", [block.date_at(c) for c in dated][:5])
        print("    topics=", [block.topic_at(c) for c in dated][:5])
    return EXIT_SUCCESS


def _run_with_fallback(cfg: AppConfig) -> IngestResult | None:
    logger = setup_logging()
    try:
        return ingest(cfg)
    except FetchError as e:
        if not cfg.fallback_file:
            logger.error(f"fetch: {e}")
            return None
        logger.warning(f"fetch failed, showing demo data from {cfg.fallback_file}: {e}")

    try:
        text = read_local_text(cfg.fallback_file)
    except FetchError as e:
        logger.error(f"fallback: {e}")
        return None
    return ingest_text(text, cfg, source=cfg.fallback_file, used_fallback=True)


def _print_user_report(result: IngestResult, user_id: str) -> None:
    own = records_for_user(result.records, user_id)
    name = next((r.user_name for r in own if r.user_name), None)
    print(f"USER {user_id}" + (f" ({name})" if name else ""))
    print(render_subject_report(own))


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an empty list from tests must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(cfg)

    result = _run_with_fallback(cfg)
    if result is None:
        return EXIT_FATAL

    logger.info(f"source={result.source} records={len(result.records)}")

    if args.user:
        _print_user_report(result, args.user)

    if args.json_path:
        payload = [r.to_dict() for r in result.records]
        args.json_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info(f"records written: {args.json_path}")

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.used_fallback:
        return EXIT_FALLBACK
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
