"""Declaration matching and builtin lookup for builtin-godoc."""

from resolve.matchers import (
    match_declaration,
    match_func_decl,
    match_type_spec,
    match_value_spec,
)
from resolve.resolver import BuiltinResolver, find_builtin

__all__ = [
    "BuiltinResolver",
    "find_builtin",
    "match_declaration",
    "match_func_decl",
    "match_type_spec",
    "match_value_spec",
]
