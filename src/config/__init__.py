"""Configuration for builtin-godoc."""

from config.settings import (
    CONFIG_FILENAME,
    ConfigError,
    GodocConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GodocConfig",
    "load_config",
]
