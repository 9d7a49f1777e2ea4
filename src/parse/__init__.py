"""Parsing utilities for builtin-godoc."""

from parse.comments import CommentIndex
from parse.treesitter_go import load_unit, parse_source

__all__ = [
    "CommentIndex",
    "load_unit",
    "parse_source",
]
