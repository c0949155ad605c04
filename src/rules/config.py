from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "jacbridge.toml"

DEFAULT_SOURCE_DIRS = ("src", "lib")
DEFAULT_ANALYZER_SOURCES = ("pylance", "pyright")


class BridgeConfig(BaseModel):
    """Configuration read once per activation of a bridge session."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enable_semantic_highlighting: bool = Field(
        default=True,
        description="Annotate imports that resolve to Jac modules",
    )
    suppress_analyzer_diagnostics: bool = Field(
        default=True,
        description="Replace false missing-import errors with informational notes",
    )
    developer_mode: bool = Field(
        default=False,
        description="Show verbose status messages; never affects resolution",
    )
    settle_delay: float = Field(
        default=0.5,
        ge=0,
        description="Seconds to wait after a diagnostics change before reconciling",
    )
    source_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SOURCE_DIRS),
        description="Workspace sub-directories searched for <name>.jac",
    )
    extension: str = Field(
        default="jac",
        description="File extension of embedded-language modules",
    )
    host_language_id: str = Field(
        default="python",
        description="Language identifier of documents the passes operate on",
    )
    analyzer_sources: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ANALYZER_SOURCES),
        description="Diagnostic source names whose import errors may be suppressed",
    )

    @field_validator("source_dirs")
    @classmethod
    def validate_source_dirs(cls, v: list[str]) -> list[str]:
        """Source directories must be non-empty paths relative to the workspace."""
        for entry in v:
            if not entry or entry.startswith("~") or Path(entry).is_absolute():
                msg = f"source_dirs entry {entry!r} must be a relative path"
                raise ValueError(msg)
        return v

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        v = v.lstrip(".")
        if not v or "/" in v or "\\" in v:
            msg = f"Invalid extension {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("analyzer_sources")
    @classmethod
    def validate_analyzer_sources(cls, v: list[str]) -> list[str]:
        return [source.lower() for source in v if source]


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> BridgeConfig:
    """Load configuration from jacbridge.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return BridgeConfig()

    try:
        with config_path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return BridgeConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
