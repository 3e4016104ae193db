"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:      str  = "semmark"
    view_mode:     str  = Field(default="thread",  pattern="^(thread|wiki)$", description="thread or wiki")
    decorate:      bool = Field(default=True,      description="Prefix wiki consensus/synthesis/debate blocks with a label")
    max_nesting:   int  = Field(default=2, ge=1, le=6, description="Max heading depth that starts a new section")
    output_dir:    str  = Field(default="dist",    description="Directory for rendered files")
    output_format: str  = Field(default="md",      pattern="^(md|json)$", description="md or json")
    log_level:     str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SEMMARK_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"SEMMARK_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
