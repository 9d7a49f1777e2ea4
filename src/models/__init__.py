"""Syntax and record models for builtin-godoc."""

from models.doc import BUILTIN_UNIT, DocRecord
from models.syntax import (
    BasicLit,
    BinaryExpr,
    Channel,
    CommentGroup,
    Field,
    FuncDecl,
    FuncType,
    GenDecl,
    Ident,
    InterfaceType,
    MapType,
    Named,
    OpaqueExpr,
    Pointer,
    Position,
    Slice,
    SourceFile,
    TypeSpec,
    Unit,
    Unknown,
    ValueSpec,
    Variadic,
)

__all__ = [
    "BUILTIN_UNIT",
    "BasicLit",
    "BinaryExpr",
    "Channel",
    "CommentGroup",
    "DocRecord",
    "Field",
    "FuncDecl",
    "FuncType",
    "GenDecl",
    "Ident",
    "InterfaceType",
    "MapType",
    "Named",
    "OpaqueExpr",
    "Pointer",
    "Position",
    "Slice",
    "SourceFile",
    "TypeSpec",
    "Unit",
    "Unknown",
    "ValueSpec",
    "Variadic",
]
