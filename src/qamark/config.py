"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "QAMARK_"


class Settings(BaseModel):
    app_name:      str = "qamark"
    db_url:        str = "sqlite:///qamark.db"
    output_dir:    str = Field(default="dist", description="Directory for exported files")
    output_format: str = Field(default="csv", pattern="^(csv|json|docx|pdf)$", description="csv, json, docx or pdf")
    export_status: str = Field(default="all", description="Document status to export; 'all' disables the filter")
    render_format: str = Field(default="html", pattern="^(html|json)$", description="html or json")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def _file_values(path: Path) -> dict[str, Any]:
    """Mapping from the YAML config file; empty when the file is absent or blank."""
    if not path.exists():
        return {}
    try:
        values = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(values).__name__}")
    return values


def _env_values() -> dict[str, str]:
    """Non-empty QAMARK_<FIELD> variables keyed by field name."""
    found = {name: os.getenv(f"{ENV_PREFIX}{name.upper()}") for name in Settings.model_fields}
    return {name: val for name, val in found.items() if val}


def load_config(overrides: dict[str, Any] = None, path: Path = None) -> Settings:
    """Build Settings from layers, later ones winning: config.yaml, QAMARK_* env vars, non-None overrides.

    Raises ValueError for unreadable YAML or values Settings rejects.
    """
    layers = [
        _file_values(path or Path(CONFIG_FILE)),
        _env_values(),
        {k: v for k, v in (overrides or {}).items() if v is not None},
    ]
    data: dict[str, Any] = {}
    for layer in layers:
        data.update(layer)
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid settings: {e}") from e
