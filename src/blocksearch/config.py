"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    db_url:      str = "sqlite:///blocksearch.db"
    block_name:  str = Field(default="dmg/read-more", min_length=1, description="Namespaced block to search for")
    window_days: int = Field(default=30, ge=0, description="Trailing window used when no date flags are given")
    post_status: str = Field(default="publish", description="Post status that counts as published")
    post_type:   str = Field(default="post",    description="Post type searched")
    workers:     int = Field(default=1, ge=1,   description="Verification threads; 1 verifies sequentially")
    log_level:   str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$", description="Logging level")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BLOCKSEARCH_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"BLOCKSEARCH_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
