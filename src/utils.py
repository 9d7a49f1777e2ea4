"""Shared utilities for builtin-godoc."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from models.doc import DocRecord


def record_to_json(record: DocRecord, *, indent: bool = True) -> bytes:
    """Serialize a record as JSON with keys in a stable order.

    Examples:
        >>> from models.doc import DocRecord
        >>> record_to_json(DocRecord(name="len", declaration_text="func len(v Type) int"), indent=False)
        b'{"declaration_text":"func len(v Type) int","doc_text":"","module_name":"builtin","name":"len","position":"","unit_name":"builtin"}'
    """
    option = orjson.OPT_SORT_KEYS
    if indent:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(record.model_dump(), option=option)


__all__ = ["record_to_json"]
