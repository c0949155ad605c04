"""Configuration loading for jacbridge."""

from rules.config import (
    CONFIG_FILENAME,
    BridgeConfig,
    ConfigError,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "BridgeConfig",
    "ConfigError",
    "load_config",
]
