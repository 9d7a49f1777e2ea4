"""Resolve builtin names to documentation records."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

import structlog

from resolve.matchers import match_declaration

if TYPE_CHECKING:
    from collections.abc import Callable

    from config.settings import GodocConfig
    from models.doc import DocRecord
    from models.syntax import Unit

logger = structlog.get_logger()


class BuiltinResolver:
    """Looks names up in the declarations of a single unit.

    The unit is obtained from ``load_unit`` on every call, so each lookup
    works on a fresh parse and nothing is retained between calls.
    """

    def __init__(self, load_unit: Callable[[], Unit]) -> None:
        self._load_unit = load_unit

    def resolve(self, name: str) -> DocRecord | None:
        """Return the first declaration in source order that binds ``name``.

        Returns None when no declaration matches. Load and parse failures
        propagate to the caller.
        """
        unit = self._load_unit()
        logger.debug("unit_loaded", unit=unit.name, files=len(unit.files))

        for source_file in unit.files:
            for decl in source_file.decls:
                doc = match_declaration(name, decl, unit_name=unit.name)
                if doc is not None:
                    logger.debug(
                        "symbol_resolved",
                        name=name,
                        unit=unit.name,
                        position=doc.position,
                    )
                    return doc
        return None


def find_builtin(
    name: str,
    *,
    config: GodocConfig | None = None,
    goroot: str | None = None,
) -> DocRecord | None:
    """Resolve ``name`` against the builtin unit of the local Go toolchain."""
    from config.settings import GodocConfig
    from locate.goroot import open_builtin_unit

    if config is None:
        config = GodocConfig()

    resolver = BuiltinResolver(partial(open_builtin_unit, config, goroot=goroot))
    return resolver.resolve(name)


__all__ = ["BuiltinResolver", "find_builtin"]
