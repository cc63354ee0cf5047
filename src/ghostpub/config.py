"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "GHOSTPUB_"


class Settings(BaseModel):
    app_name:           str = "ghostpub"
    output_dir:         str = Field(default="dist", description="Directory for HTML, Lexical and post JSON output")
    passthrough_fields: list[str] = Field(
        default=["title", "excerpt"], min_length=2, max_length=2,
        description="Frontmatter fields whose raw value (quotes included) is kept verbatim",
    )
    media_placeholder:  str = Field(
        default="[missing media: {name}]",
        description="Text substituted for unresolved media embeds; '{name}' is the reference",
    )
    default_status:     str = Field(default="draft", pattern="^(draft|published|scheduled)$")
    default_visibility: str = Field(default="public", pattern="^(public|members|paid)$")
    default_tags:       str = Field(default="", description="Comma-separated tags for posts without any")
    default_featured:   bool = False
    log_level:          str = Field(default="WARNING", description="Root log level for the CLI")


def _env_value(name: str, raw: str) -> Any:
    """List-typed fields are given as comma-separated env values."""
    if Settings.model_fields[name].annotation == list[str]:
        return [v.strip() for v in raw.split(",") if v.strip()]
    return raw


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then GHOSTPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = _env_value(name, val)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid settings: {e}") from e
