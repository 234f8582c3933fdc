from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..excel.reader import column_index
from ..models.mapping import ColumnMapping, MappingTable, build_mapping_table

"""Mapping config loader.

Responsibilities:
- Load the YAML mapping config (default: config/mapping.yml)
- Validate it against the packaged JSON schema (mapping_schema.json)
- Resolve column references (0-based int or letter code) to indices
- Reject unknown output field names before any file is converted

Example:
    merge_duplicates: false
    mappings:
      recipient_name: {columns: [BM], operation: concat}
      quantity: {columns: [3, D], operation: multiply}
"""

SCHEMA_PATH = Path(__file__).with_name("mapping_schema.json")

DEFAULT_CONFIG_PATH = Path("config/mapping.yml")

# .env / 環境変数でマッピング設定ファイルを上書き可能
CONFIG_ENV_VAR = "SHIPSHEET_MAPPING"


class ConfigError(Exception):
    error_type = "CONFIG_ERROR"


@dataclass(frozen=True)
class MappingConfig:
    mappings: MappingTable
    merge_duplicates: bool = False


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or the data violates it
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


def _resolve_column(ref: int | str) -> int:
    if isinstance(ref, int):
        return ref
    return column_index(ref)


def parse_mappings(raw: dict[str, Any]) -> MappingTable:
    """Turn the validated `mappings` section into a MappingTable."""
    parsed: dict[str, ColumnMapping] = {}
    for field_name, entry in raw.items():
        try:
            indices = [_resolve_column(ref) for ref in entry["columns"]]
            parsed[field_name] = ColumnMapping.create(indices, entry.get("operation", "concat"))
        except ValueError as e:
            raise ConfigError(f"mapping '{field_name}': {e}") from e
    try:
        return build_mapping_table(parsed)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def load_config(path: Path) -> MappingConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    return MappingConfig(
        mappings=parse_mappings(data["mappings"]),
        merge_duplicates=bool(data.get("merge_duplicates", False)),
    )


def resolve_config_path(explicit: Path | None = None) -> Path | None:
    """Pick the mapping config: explicit path > $SHIPSHEET_MAPPING > config/mapping.yml.

    Returns None when no config is given and the default file does not exist
    (callers then fall back to the fixed-column preset).
    """
    if explicit is not None:
        return explicit
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None
