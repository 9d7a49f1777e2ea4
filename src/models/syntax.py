"""Declaration and type-expression models for a parsed Go unit.

These are the shapes the loader produces and the matchers consume. They
mirror the subset of the Go syntax tree needed to document a declaration:
bound names with positions, an optional type, initializer expressions, and
the attached doc comment. All nodes are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

ChanDir = Literal["send", "recv", "both"]
DeclToken = Literal["const", "var", "type"]

_DIRECTIVE_PREFIXES = ("line ", "extern ", "export ")


@dataclass(frozen=True)
class Position:
    """A source location, 1-based, with the column counted in bytes."""

    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        if self.line <= 0:
            return ""
        text = f"{self.filename}:{self.line}" if self.filename else f"{self.line}"
        if self.column > 0:
            text = f"{text}:{self.column}"
        return text


@dataclass(frozen=True)
class Ident:
    name: str
    position: Position | None = None


def _is_directive(text: str) -> bool:
    """Report whether a ``//`` comment body is a tool directive.

    Directives are ``line``/``extern``/``export`` pragmas and anything of the
    form ``word:word`` such as ``go:generate``.
    """
    if text.startswith(_DIRECTIVE_PREFIXES):
        return True
    colon = text.find(":")
    if colon <= 0 or colon + 1 >= len(text):
        return False
    for index, char in enumerate(text[: colon + 2]):
        if index == colon:
            continue
        if not ("a" <= char <= "z" or "0" <= char <= "9"):
            return False
    return True


@dataclass(frozen=True)
class CommentGroup:
    """A run of adjacent comments, kept with their comment markers."""

    comments: tuple[str, ...] = ()

    def text(self) -> str:
        """Return the comment text without markers.

        Comment markers, directive lines, trailing whitespace, and leading
        blank lines are removed; runs of interior blank lines collapse to a
        single blank line. Non-empty results end with one newline.
        """
        lines: list[str] = []
        for comment in self.comments:
            if comment.startswith("//"):
                body = comment[2:]
                if body.startswith(" "):
                    body = body[1:]
                elif body and _is_directive(body):
                    continue
            elif comment.startswith("/*"):
                body = comment[2:-2]
            else:
                body = comment
            lines.extend(line.rstrip() for line in body.split("\n"))

        compact: list[str] = []
        for line in lines:
            if line or (compact and compact[-1]):
                compact.append(line)

        if compact and compact[-1]:
            compact.append("")
        return "\n".join(compact)


# Type expressions


@dataclass(frozen=True)
class Named:
    name: str


@dataclass(frozen=True)
class Slice:
    elem: TypeExpr


@dataclass(frozen=True)
class Variadic:
    elem: TypeExpr


@dataclass(frozen=True)
class MapType:
    key: TypeExpr
    value: TypeExpr


@dataclass(frozen=True)
class Pointer:
    referent: TypeExpr


@dataclass(frozen=True)
class Channel:
    direction: ChanDir
    value: TypeExpr


@dataclass(frozen=True)
class FuncType:
    params: tuple[Field, ...] = ()
    results: tuple[Field, ...] = ()


@dataclass(frozen=True)
class InterfaceType:
    methods: tuple[Field, ...] = ()


@dataclass(frozen=True)
class Unknown:
    """Any type shape outside the supported set.

    ``node_type`` records the grammar node kind for diagnostics.
    """

    node_type: str = "unknown"


TypeExpr = Union[
    Named,
    Slice,
    Variadic,
    MapType,
    Pointer,
    Channel,
    FuncType,
    InterfaceType,
    Unknown,
]


@dataclass(frozen=True)
class Field:
    """A parameter, result, receiver, or interface member."""

    name: str = ""
    type: TypeExpr | None = None


# Initializer expressions


@dataclass(frozen=True)
class BasicLit:
    value: str


@dataclass(frozen=True)
class BinaryExpr:
    x: Expr
    op: str
    y: Expr


@dataclass(frozen=True)
class OpaqueExpr:
    node_type: str


Expr = Union[BasicLit, BinaryExpr, OpaqueExpr]


# Declarations


@dataclass(frozen=True)
class ValueSpec:
    """One line of a const/var declaration.

    A spec may bind several names that share one type and one list of
    initializer values.
    """

    names: tuple[Ident, ...]
    type: TypeExpr | None = None
    values: tuple[Expr, ...] = ()
    doc: CommentGroup | None = None


@dataclass(frozen=True)
class TypeSpec:
    name: Ident
    type: TypeExpr | None = None
    assign: bool = False
    doc: CommentGroup | None = None


@dataclass(frozen=True)
class GenDecl:
    """A const, var, or type declaration, grouped or not."""

    token: DeclToken
    specs: tuple[ValueSpec | TypeSpec, ...] = ()
    doc: CommentGroup | None = None


@dataclass(frozen=True)
class FuncDecl:
    name: Ident
    type: FuncType = field(default_factory=FuncType)
    recv: tuple[Field, ...] | None = None
    doc: CommentGroup | None = None


Decl = Union[GenDecl, FuncDecl]


@dataclass(frozen=True)
class SourceFile:
    path: str
    decls: tuple[Decl, ...] = ()


@dataclass(frozen=True)
class Unit:
    """The parsed files of one compilation unit, in load order."""

    name: str
    files: tuple[SourceFile, ...] = ()


__all__ = [
    "BasicLit",
    "BinaryExpr",
    "ChanDir",
    "Channel",
    "CommentGroup",
    "Decl",
    "DeclToken",
    "Expr",
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
    "TypeExpr",
    "TypeSpec",
    "Unit",
    "Unknown",
    "ValueSpec",
    "Variadic",
]
