"""Error types for builtin-godoc.

Failing to find or parse the builtin unit is fatal for a lookup: the unit
ships with every Go toolchain, so its absence means the environment is
misconfigured. A name that is not declared is not an error.
"""


class GodocError(Exception):
    """Base class for builtin-godoc errors."""


class UnitNotFoundError(GodocError):
    """Raised when the unit's directory or source files cannot be found or read."""


class UnitParseError(GodocError):
    """Raised when the unit's source contains syntax errors."""


__all__ = ["GodocError", "UnitNotFoundError", "UnitParseError"]
