"""Discovery of the builtin unit on disk."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from core.errors import UnitNotFoundError
from models.doc import BUILTIN_UNIT
from parse.treesitter_go import load_unit

if TYPE_CHECKING:
    from config.settings import GodocConfig
    from models.syntax import Unit

logger = structlog.get_logger()


def _go_env_goroot() -> str | None:
    go_binary = shutil.which("go")
    if go_binary is None:
        return None
    try:
        result = subprocess.run(
            [go_binary, "env", "GOROOT"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        msg = f"`go env GOROOT` failed: {exc}"
        raise UnitNotFoundError(msg) from exc
    return result.stdout.strip() or None


def find_goroot(explicit: str | None = None) -> Path:
    """Locate the Go installation root.

    Checks, in order: ``explicit``, the GOROOT environment variable, and
    ``go env GOROOT``.

    Raises:
        UnitNotFoundError: If no candidate is available.
    """
    if explicit:
        return Path(explicit).expanduser()

    env_goroot = os.environ.get("GOROOT")
    if env_goroot:
        return Path(env_goroot).expanduser()

    go_goroot = _go_env_goroot()
    if go_goroot:
        logger.debug("goroot_from_toolchain", goroot=go_goroot)
        return Path(go_goroot)

    msg = "GOROOT is not set and no go toolchain was found on PATH"
    raise UnitNotFoundError(msg)


def unit_directory(goroot: Path, unit_name: str = BUILTIN_UNIT) -> Path:
    """Return ``<goroot>/src/<unit_name>``, which must exist."""
    directory = goroot / "src" / unit_name
    if not directory.is_dir():
        msg = f"Unit '{unit_name}' not found under {goroot}: {directory} is not a directory"
        raise UnitNotFoundError(msg)
    return directory


def open_builtin_unit(config: GodocConfig, *, goroot: str | None = None) -> Unit:
    """Locate and parse the configured unit.

    ``goroot`` takes precedence over ``config.goroot``. Every call parses
    the source again.
    """
    root = find_goroot(goroot or config.goroot)
    directory = unit_directory(root, config.unit_name)
    return load_unit(directory, unit_name=config.unit_name, include=config.unit_files)


__all__ = ["find_goroot", "open_builtin_unit", "unit_directory"]
