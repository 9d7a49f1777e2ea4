from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.errors import GodocError
from models.doc import BUILTIN_UNIT

CONFIG_FILENAME = "godoc.toml"

DEFAULT_UNIT_FILES = ("builtin.go",)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class GodocConfig(BaseModel):
    """Configuration for builtin lookups."""

    model_config = ConfigDict(extra="forbid")

    goroot: str | None = Field(
        default=None,
        description="Go installation root (default: $GOROOT, then `go env GOROOT`)",
    )
    unit_name: str = Field(
        default=BUILTIN_UNIT,
        min_length=1,
        description="Directory name of the unit under GOROOT/src",
    )
    unit_files: list[str] = Field(
        default_factory=lambda: list(DEFAULT_UNIT_FILES),
        description="Source files that make up the unit",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Minimum level for diagnostic events",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Diagnostic output format",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("unit_files")
    @classmethod
    def validate_unit_files(cls, v: list[str]) -> list[str]:
        """Require bare ``.go`` file names; paths are resolved per unit."""
        if not v:
            msg = "unit_files must name at least one file"
            raise ValueError(msg)
        for name in v:
            if Path(name).name != name or not name.endswith(".go"):
                msg = f"unit_files entry '{name}' must be a bare .go file name"
                raise ValueError(msg)
        return v


class ConfigError(GodocError):
    """Raised when config file exists but cannot be parsed."""


def load_config(path: Path | None = None) -> GodocConfig:
    """Load configuration from ``path``, or from godoc.toml in the cwd.

    An explicit path must exist. Without one, a missing godoc.toml yields
    the defaults.
    """
    if path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.is_file():
            return GodocConfig()
    else:
        config_path = path
        if not config_path.is_file():
            msg = f"Config file not found: {config_path}"
            raise ConfigError(msg)

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return GodocConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_UNIT_FILES",
    "ConfigError",
    "GodocConfig",
    "load_config",
]
