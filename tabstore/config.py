"""
Configuration model and YAML I/O for tabstore.

``StoreConfig`` carries the knobs shared by the parsers, the store and
the exporter: text encodings, the CSV delimiter and line terminator,
JSON indentation, the column name used for header-less input, and the
default page size.

Key functions:
- load_config(path) -> StoreConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Why Pydantic + YAML:
- Pydantic gives strict validation and clear error messages.
- YAML is human-editable and round-trips cleanly.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from tabstore.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    """Runtime settings for parsing, querying and exporting."""

    encoding: str = Field(
        "utf-8-sig", description="Encoding used to decode binary input streams"
    )
    output_encoding: str = Field(
        "utf-8", description="Encoding used when writing export files"
    )
    csv_delimiter: str = Field(
        ",", min_length=1, max_length=1, description="Delimiter for CSV parsing"
    )
    line_terminator: Literal["\n", "\r\n"] = Field(
        "\n", description="Line separator for CSV export"
    )
    json_indent: int = Field(2, ge=0, description="Indentation for JSON export")
    text_column: str = Field(
        "value",
        min_length=1,
        description="Column name given to rows from header-less input",
    )
    default_page_size: int = Field(10, ge=1, description="Default rows per page")

    @field_validator("encoding", "output_encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: '{value}'") from exc
        return value


def load_config(path: str | Path) -> StoreConfig:
    """Load and validate a YAML config file into a StoreConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or not a mapping.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file must contain a mapping, got {type(raw).__name__}: {path}"
        )
    logger.info("Loaded config from %s", path)
    return StoreConfig.model_validate(raw)


def save_config(config: StoreConfig, path: str | Path) -> None:
    """Serialize a StoreConfig to YAML with a short header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# tabstore configuration\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
