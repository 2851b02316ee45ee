from __future__ import annotations

import json

import jsonschema
import pytest
from jsonschema.exceptions import ValidationError

from gradesheet.config.loader import SCHEMA_PATH

"""Config schema contract test."""


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_valid_full_example(schema):
    config = {
        "source_url": "https://docs.google.com/spreadsheets/d/e/KEY/pub?output=csv",
        "fallback_file": "./data/demo_grades.csv",
        "layout": {
            "block_offsets": [0, 18, 36, 54, 72],
            "min_rows": 3,
            "reserved_columns": 3,
            "delimiter": ",",
            "quote_char": '"',
        },
        "markers": {"absence": "н", "pass": "зачет", "topic_placeholder": "N/A"},
        "diagnostics": {"enabled": True},
    }
    jsonschema.validate(config, schema)


def test_config_schema_minimal_example(schema):
    jsonschema.validate({"source_url": "https://x.test"}, schema)


def test_config_schema_missing_source_url(schema):
    with pytest.raises(ValidationError):
        jsonschema.validate({"layout": {}}, schema)


@pytest.mark.parametrize(
    "layout",
    [
        {"block_offsets": []},
        {"block_offsets": [0, 0]},
        {"block_offsets": ["0"]},
        {"delimiter": ";;"},
        {"min_rows": -1},
        {"unknown": 1},
    ],
)
def test_config_schema_invalid_layout(schema, layout):
    with pytest.raises(ValidationError):
        jsonschema.validate({"source_url": "https://x.test", "layout": layout}, schema)


def test_config_schema_rejects_extra_key(schema):
    with pytest.raises(ValidationError):
        jsonschema.validate({"source_url": "https://x.test", "extra_field": "not allowed"}, schema)


def test_repository_example_config_is_valid(schema):
    import pathlib
    import yaml

    example = pathlib.Path(__file__).resolve().parents[2] / "config" / "gradesheet.yml"
    jsonschema.validate(yaml.safe_load(example.read_text(encoding="utf-8")), schema)
