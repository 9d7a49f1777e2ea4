"""Unit discovery for builtin-godoc."""

from locate.goroot import find_goroot, open_builtin_unit, unit_directory

__all__ = ["find_goroot", "open_builtin_unit", "unit_directory"]
