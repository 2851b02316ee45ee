from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from gradesheet.models.config_models import AppConfig, SheetLayout

"""Config loader.

Responsibilities:
- Load the YAML config (default config/gradesheet.yml)
- Validate it against config_schema.json (shipped next to this module)
- Apply layout / marker defaults from SheetLayout
- Let GRADESHEET_SOURCE_URL override source_url
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SOURCE_URL_ENV",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/gradesheet.yml")
SOURCE_URL_ENV = "GRADESHEET_SOURCE_URL"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation (missing keys, wrong types, extra keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_layout(layout_raw: dict[str, Any], markers_raw: dict[str, Any]) -> SheetLayout:
    defaults = SheetLayout()
    offsets = tuple(layout_raw.get("block_offsets", defaults.block_offsets))
    # data rows of block i end at offset i+1, so the order has to be strictly ascending
    if any(b <= a for a, b in zip(offsets, offsets[1:])):
        raise ConfigError(f"layout.block_offsets must be strictly ascending: {list(offsets)}")
    return SheetLayout(
        block_offsets=offsets,
        min_rows=layout_raw.get("min_rows", defaults.min_rows),
        reserved_columns=layout_raw.get("reserved_columns", defaults.reserved_columns),
        delimiter=layout_raw.get("delimiter", defaults.delimiter),
        quote_char=layout_raw.get("quote_char", defaults.quote_char),
        absence_token=markers_raw.get("absence", defaults.absence_token),
        pass_token=markers_raw.get("pass", defaults.pass_token),
        topic_placeholder=markers_raw.get("topic_placeholder", defaults.topic_placeholder),
    )


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    layout = _build_layout(data.get("layout") or {}, data.get("markers") or {})
    if layout.delimiter == layout.quote_char:
        raise ConfigError("layout.delimiter and layout.quote_char must differ")

    # Environment (.env loaded by the CLI) takes precedence over the file
    source_url = os.getenv(SOURCE_URL_ENV) or data["source_url"]
    diagnostics = (data.get("diagnostics") or {}).get("enabled", False)
    return AppConfig(
        source_url=source_url,
        layout=layout,
        fallback_file=data.get("fallback_file"),
        diagnostics=diagnostics,
    )
