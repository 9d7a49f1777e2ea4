"""Canonical text rendering for Go type expressions and fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from models.syntax import (
    Channel,
    FuncType,
    InterfaceType,
    MapType,
    Named,
    Pointer,
    Slice,
    Unknown,
    Variadic,
)

if TYPE_CHECKING:
    from models.syntax import Field, TypeExpr

logger = structlog.get_logger()

_CHAN_PREFIX = {
    "send": "chan<- ",
    "recv": "<-chan ",
    "both": "chan ",
}


def _kind(expr: TypeExpr) -> str:
    if isinstance(expr, Unknown):
        return expr.node_type
    return type(expr).__name__


def _named_text(expr: TypeExpr, context: str) -> str:
    """Return the identifier of a Named operand, or "" for anything else."""
    if isinstance(expr, Named):
        return expr.name
    logger.warning("unhandled_type_expression", kind=_kind(expr), context=context)
    return ""


def render_signature(func: FuncType) -> str:
    """Render parameters and results as ``(p1, p2) r`` or ``(p1) (r1, r2)``.

    Parameters are always parenthesized. A single result follows after a
    space without parentheses; two or more are parenthesized.
    """
    params = [render_field(param) for param in func.params]
    results = [render_field(result) for result in func.results]

    text = f"({', '.join(params)})"
    if len(results) == 1:
        text += " " + results[0]
    elif len(results) > 1:
        text += f" ({', '.join(results)})"
    return text


def render_interface(iface: InterfaceType) -> str:
    members = [render_field(method) for method in iface.methods]
    if not members:
        return "interface{}"
    body = "\n\t".join(members)
    return f"interface {{\n\t{body}\n}}"


def render_type(expr: TypeExpr) -> str:
    """Render a type expression to its canonical text.

    Rendering never fails: shapes outside the supported set produce "" and
    a warning event so the renderer can be extended.
    """
    if isinstance(expr, Named):
        return expr.name
    if isinstance(expr, Slice):
        return "[]" + _named_text(expr.elem, "slice element")
    if isinstance(expr, Variadic):
        return "..." + _named_text(expr.elem, "variadic element")
    if isinstance(expr, MapType):
        key = _named_text(expr.key, "map key")
        value = _named_text(expr.value, "map value")
        return f"map[{key}]{value}"
    if isinstance(expr, Pointer):
        return "*" + _named_text(expr.referent, "pointer referent")
    if isinstance(expr, Channel):
        return _CHAN_PREFIX[expr.direction] + _named_text(expr.value, "channel value")
    if isinstance(expr, FuncType):
        return render_signature(expr)
    if isinstance(expr, InterfaceType):
        return render_interface(expr)

    logger.warning("unhandled_type_expression", kind=_kind(expr), context="type")
    return ""


def render_field(field: Field) -> str:
    """Render a field as ``name type``, ``type``, or ``name``.

    Function-typed fields join the name directly to the signature, so an
    interface method reads ``Error() string`` and a func parameter reads
    ``f(int) string``.
    """
    if isinstance(field.type, FuncType):
        return field.name + render_signature(field.type)

    typ = render_type(field.type) if field.type is not None else ""
    if not field.name:
        return typ
    if not typ:
        return field.name
    return f"{field.name} {typ}"


__all__ = ["render_field", "render_interface", "render_signature", "render_type"]
