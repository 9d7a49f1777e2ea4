"""Declaration matchers.

Each matcher takes a requested name and one parsed declaration and returns
a DocRecord when the declaration binds that name, or None otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from models.doc import BUILTIN_UNIT, DocRecord
from models.syntax import (
    BasicLit,
    BinaryExpr,
    FuncDecl,
    GenDecl,
    InterfaceType,
    Named,
    TypeSpec,
    ValueSpec,
)
from render.types import render_field, render_interface, render_signature

if TYPE_CHECKING:
    from models.syntax import CommentGroup, Decl, Expr, Ident


def _doc_text(own: CommentGroup | None, group: CommentGroup | None = None) -> str:
    if own is not None:
        return own.text()
    if group is not None:
        return group.text()
    return ""


def _position_text(ident: Ident) -> str:
    return str(ident.position) if ident.position is not None else ""


def _render_value(expr: Expr) -> str | None:
    """Render a literal or a binary expression over literals.

    A binary expression is rendered from its left operand on both sides of
    the operator: ``1 + 2`` renders as ``1 + 1``. Existing consumers depend
    on that output, so it is kept as is.
    """
    if isinstance(expr, BasicLit):
        return expr.value
    if isinstance(expr, BinaryExpr) and isinstance(expr.x, BasicLit):
        return f"{expr.x.value} {expr.op} {expr.x.value}"
    return None


def match_value_spec(
    name: str,
    spec: ValueSpec,
    token: str,
    group_doc: CommentGroup | None = None,
    *,
    unit_name: str = BUILTIN_UNIT,
) -> DocRecord | None:
    """Match a const/var spec.

    When a spec binds several names, the matched name is rendered with the
    spec's whole shared type and value list; ``const A, B = 1, 2`` looked up
    as ``B`` renders ``const B = 1, 2``.
    """
    for ident in spec.names:
        if ident.name != name:
            continue

        decl = f"{token} {name}"
        if isinstance(spec.type, Named):
            decl = f"{decl} {spec.type.name}"

        values = [text for text in map(_render_value, spec.values) if text is not None]
        if values:
            decl = f"{decl} = {', '.join(values)}"

        return DocRecord(
            name=name,
            declaration_text=decl,
            doc_text=_doc_text(spec.doc, group_doc),
            position=_position_text(ident),
            unit_name=unit_name,
            module_name=unit_name,
        )
    return None


def match_type_spec(
    name: str,
    spec: TypeSpec,
    token: str = "type",
    group_doc: CommentGroup | None = None,
    *,
    unit_name: str = BUILTIN_UNIT,
) -> DocRecord | None:
    """Match a type spec; only Named and interface underlying types render."""
    if spec.name.name != name:
        return None

    typ = ""
    if isinstance(spec.type, Named):
        typ = spec.type.name
    elif isinstance(spec.type, InterfaceType):
        typ = render_interface(spec.type)

    decl = f"{token} {name}"
    if typ:
        decl = f"{decl} = {typ}" if spec.assign else f"{decl} {typ}"

    return DocRecord(
        name=name,
        declaration_text=decl,
        doc_text=_doc_text(spec.doc, group_doc),
        position=_position_text(spec.name),
        unit_name=unit_name,
        module_name=unit_name,
    )


def match_func_decl(
    name: str,
    func: FuncDecl,
    *,
    unit_name: str = BUILTIN_UNIT,
) -> DocRecord | None:
    if func.name.name != name:
        return None

    decl = "func"
    receivers = [render_field(field) for field in func.recv or ()]
    if receivers:
        decl += " (" + ", ".join(receivers) + ")"
    decl += " " + name
    decl += render_signature(func.type)

    return DocRecord(
        name=name,
        declaration_text=decl,
        doc_text=_doc_text(func.doc),
        position=_position_text(func.name),
        unit_name=unit_name,
        module_name=unit_name,
    )


def match_declaration(
    name: str,
    decl: Decl,
    *,
    unit_name: str = BUILTIN_UNIT,
) -> DocRecord | None:
    """Apply the matcher for the declaration's kind.

    Grouped specs are tried in source order and the first match is returned.
    """
    if isinstance(decl, FuncDecl):
        return match_func_decl(name, decl, unit_name=unit_name)

    if not isinstance(decl, GenDecl):
        return None

    for spec in decl.specs:
        doc: DocRecord | None = None
        if decl.token in ("const", "var") and isinstance(spec, ValueSpec):
            doc = match_value_spec(name, spec, decl.token, decl.doc, unit_name=unit_name)
        elif decl.token == "type" and isinstance(spec, TypeSpec):
            doc = match_type_spec(name, spec, decl.token, decl.doc, unit_name=unit_name)
        if doc is not None:
            return doc
    return None


__all__ = [
    "match_declaration",
    "match_func_decl",
    "match_type_spec",
    "match_value_spec",
]
