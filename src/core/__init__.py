"""Shared error types and logging setup for builtin-godoc."""

from core.errors import GodocError, UnitNotFoundError, UnitParseError
from core.logging import configure_logging

__all__ = [
    "GodocError",
    "UnitNotFoundError",
    "UnitParseError",
    "configure_logging",
]
