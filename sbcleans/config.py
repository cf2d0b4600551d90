"""
sbcleans.config - YAML config loading and validation.

Handles loading cleans.yaml (project directory or explicit path), applying
defaults, and validating all export parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from sbcleans.exceptions import ConfigError

CONFIG_FILENAME = "cleans.yaml"


class Resolution(BaseModel):
    """Movie export resolution in pixels."""

    width: int = Field(default=1920, gt=0)
    height: int = Field(default=1080, gt=0)


class Subfolders(BaseModel):
    """Names of the folders created inside each dated cleans folder."""

    movies: str = "Scene Quicktimes"
    panels: str = "Panels"
    audio: str = "Audio"


class CleansConfig(BaseModel):
    """Resolved configuration for a cleans export run."""

    target_frame_rate: float = Field(default=23.976, gt=0.0)
    sequence_prefix: str = "SQ"
    placeholder_name: str = "Untitled"

    resolution: Resolution = Field(default_factory=Resolution)
    movie_format: str = "mov"
    bitmap_format: str = "png"
    target_format: int = Field(default=0, ge=0)
    export_movies: bool = True

    folder_suffix: str = "_CLEANS"
    subfolders: Subfolders = Field(default_factory=Subfolders)
    audio_extensions: list[str] = Field(default_factory=lambda: [".wav", ".aif", ".aiff", ".mp3"])

    report_name: str = "_MotionLayers.txt"
    report_header: str = "SCENES WITH MOTION LAYERS: "

    config_path: Path | None = None

    @field_validator("movie_format", "bitmap_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = v.lower().lstrip(".")
        if not v:
            raise ValueError("format must not be empty")
        return v

    @field_validator("audio_extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("audio_extensions must list at least one extension")
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @field_validator("target_format")
    @classmethod
    def validate_target_format(cls, v: int) -> int:
        # 0 is Final Cut Pro XML; the offline document only writes that target
        valid = {0}
        if v not in valid:
            raise ValueError(f"target_format must be one of: {valid}")
        return v


def load_config(path: Path | None = None) -> CleansConfig:
    """Load and validate configuration.

    Args:
        path: A cleans.yaml file, a directory containing one, or None

    Returns:
        Validated config; defaults when no file is found

    Raises:
        ConfigError: If the file is unreadable or fails validation
    """
    if path is None:
        return CleansConfig()

    config_file = path / CONFIG_FILENAME if path.is_dir() else path
    if not config_file.exists():
        if path.is_dir():
            return CleansConfig()
        raise ConfigError(f"Config file not found: {config_file}")

    try:
        with open(config_file) as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Expected a mapping in {config_file}")

    raw_config["config_path"] = config_file
    try:
        return CleansConfig(**raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_file}: {e}") from e


def create_default_config() -> dict[str, Any]:
    """Create a default config dictionary suitable for writing to YAML."""
    return CleansConfig().model_dump(exclude={"config_path"})


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
