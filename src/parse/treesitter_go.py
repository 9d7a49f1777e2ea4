"""Tree-sitter based loader for Go declaration units."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
import tree_sitter_go
from tree_sitter import Language, Node, Parser

from config.settings import DEFAULT_UNIT_FILES
from core.errors import UnitNotFoundError, UnitParseError
from models.doc import BUILTIN_UNIT
from models.syntax import (
    BasicLit,
    BinaryExpr,
    Channel,
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
from parse.comments import CommentIndex

if TYPE_CHECKING:
    from collections.abc import Collection
    from pathlib import Path

    from models.syntax import ChanDir, CommentGroup, Decl, DeclToken, Expr, TypeExpr

logger = structlog.get_logger()

_PARSER: Parser | None = None

_LITERAL_TYPES = frozenset(
    {
        "int_literal",
        "float_literal",
        "imaginary_literal",
        "rune_literal",
        "interpreted_string_literal",
        "raw_string_literal",
    }
)

_METHOD_ELEMS = frozenset({"method_elem", "method_spec"})
_TYPE_ELEMS = frozenset({"type_elem", "constraint_elem"})


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with the Go language."""
    global _PARSER
    if _PARSER is None:
        _PARSER = Parser(Language(tree_sitter_go.language()))
    return _PARSER


def _text(node: Node | None) -> str:
    if node is None or not node.text:
        return ""
    return node.text.decode("utf8")


def _position(path: str, node: Node) -> Position:
    return Position(
        filename=path,
        line=node.start_point[0] + 1,
        column=node.start_point[1] + 1,
    )


def _ident(path: str, node: Node) -> Ident:
    return Ident(name=_text(node), position=_position(path, node))


def _named_children(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != "comment"]


# Types


def _channel_direction(node: Node) -> ChanDir:
    tokens = [child.type for child in node.children if not child.is_named]
    if tokens[:2] == ["chan", "<-"]:
        return "send"
    if tokens[:1] == ["<-"]:
        return "recv"
    return "both"


def _convert_type(node: Node | None) -> TypeExpr:
    """Map a grammar type node onto the supported type-expression shapes."""
    if node is None:
        return Unknown("missing")

    kind = node.type
    if kind in ("type_identifier", "identifier"):
        return Named(_text(node))
    if kind == "parenthesized_type":
        inner = _named_children(node)
        return _convert_type(inner[0] if inner else None)
    if kind == "slice_type":
        return Slice(_convert_type(node.child_by_field_name("element")))
    if kind == "pointer_type":
        inner = _named_children(node)
        return Pointer(_convert_type(inner[0] if inner else None))
    if kind == "map_type":
        return MapType(
            key=_convert_type(node.child_by_field_name("key")),
            value=_convert_type(node.child_by_field_name("value")),
        )
    if kind == "channel_type":
        return Channel(
            direction=_channel_direction(node),
            value=_convert_type(node.child_by_field_name("value")),
        )
    if kind == "function_type":
        return _convert_func_type(node)
    if kind == "interface_type":
        return _convert_interface(node)
    return Unknown(kind)


def _convert_parameters(node: Node | None) -> tuple[Field, ...]:
    """Convert a parameter list to fields, one per declaration.

    A declaration binding several names (``dst, src []Type``) keeps only
    its last name, as the Go field reader it mirrors does.
    """
    if node is None:
        return ()

    fields: list[Field] = []
    for child in _named_children(node):
        if child.type == "parameter_declaration":
            names = [n for n in child.children_by_field_name("name") if n.is_named]
            fields.append(
                Field(
                    name=_text(names[-1]) if names else "",
                    type=_convert_type(child.child_by_field_name("type")),
                )
            )
        elif child.type == "variadic_parameter_declaration":
            fields.append(
                Field(
                    name=_text(child.child_by_field_name("name")),
                    type=Variadic(_convert_type(child.child_by_field_name("type"))),
                )
            )
    return tuple(fields)


def _convert_results(node: Node | None) -> tuple[Field, ...]:
    if node is None:
        return ()
    if node.type == "parameter_list":
        return _convert_parameters(node)
    return (Field(type=_convert_type(node)),)


def _convert_func_type(node: Node) -> FuncType:
    return FuncType(
        params=_convert_parameters(node.child_by_field_name("parameters")),
        results=_convert_results(node.child_by_field_name("result")),
    )


def _convert_interface(node: Node) -> InterfaceType:
    methods: list[Field] = []
    for child in _named_children(node):
        if child.type in _METHOD_ELEMS:
            methods.append(
                Field(
                    name=_text(child.child_by_field_name("name")),
                    type=_convert_func_type(child),
                )
            )
        elif child.type in _TYPE_ELEMS:
            terms = _named_children(child)
            if len(terms) == 1:
                methods.append(Field(type=_convert_type(terms[0])))
            else:
                methods.append(Field(type=Unknown("type_union")))
        else:
            # Older grammars list embedded interface names directly.
            methods.append(Field(type=_convert_type(child)))
    return InterfaceType(methods=tuple(methods))


# Expressions


def _convert_expr(node: Node) -> Expr:
    if node.type in _LITERAL_TYPES:
        return BasicLit(_text(node))
    if node.type == "binary_expression":
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if left is None or right is None:
            return OpaqueExpr(node.type)
        return BinaryExpr(
            x=_convert_expr(left),
            op=_text(node.child_by_field_name("operator")),
            y=_convert_expr(right),
        )
    return OpaqueExpr(node.type)


# Declarations


class _DeclBuilder:
    """Converts the top-level declarations of one parsed file."""

    def __init__(self, path: str, root: Node) -> None:
        self._path = path
        self._root = root
        self._comments = CommentIndex(root)

    def _doc(self, node: Node) -> CommentGroup | None:
        return self._comments.lead_group(node)

    def build(self) -> tuple[Decl, ...]:
        decls: list[Decl] = []
        for node in self._root.named_children:
            decl: Decl | None = None
            if node.type == "const_declaration":
                decl = self._value_decl(node, "const", "const_spec")
            elif node.type == "var_declaration":
                decl = self._value_decl(node, "var", "var_spec")
            elif node.type == "type_declaration":
                decl = self._type_decl(node)
            elif node.type in ("function_declaration", "method_declaration"):
                decl = self._func_decl(node)
            if decl is not None:
                decls.append(decl)
        return tuple(decls)

    def _group_members(self, node: Node, kinds: Collection[str]) -> list[Node]:
        """Return member specs in order, looking through ``var_spec_list``."""
        members: list[Node] = []
        for child in node.named_children:
            if child.type in kinds:
                members.append(child)
            elif child.type.endswith("_spec_list"):
                members.extend(c for c in child.named_children if c.type in kinds)
        return members

    def _is_grouped(self, node: Node) -> bool:
        if any(child.type == "(" for child in node.children):
            return True
        return any(child.type.endswith("_spec_list") for child in node.named_children)

    def _value_decl(self, node: Node, token: DeclToken, spec_kind: str) -> GenDecl:
        grouped = self._is_grouped(node)
        specs: list[ValueSpec] = []
        for member in self._group_members(node, (spec_kind,)):
            names = tuple(
                _ident(self._path, n)
                for n in member.children_by_field_name("name")
                if n.type == "identifier"
            )
            type_node = member.child_by_field_name("type")
            value_list = member.child_by_field_name("value")
            values = (
                tuple(_convert_expr(v) for v in _named_children(value_list))
                if value_list is not None
                else ()
            )
            specs.append(
                ValueSpec(
                    names=names,
                    type=_convert_type(type_node) if type_node is not None else None,
                    values=values,
                    doc=self._doc(member) if grouped else None,
                )
            )
        return GenDecl(
            token=token,
            specs=tuple(specs),
            doc=self._doc(node),
        )

    def _type_decl(self, node: Node) -> GenDecl:
        grouped = self._is_grouped(node)
        specs: list[TypeSpec] = []
        for member in self._group_members(node, ("type_spec", "type_alias")):
            name_node = member.child_by_field_name("name")
            if name_node is None:
                continue
            type_node = member.child_by_field_name("type")
            specs.append(
                TypeSpec(
                    name=_ident(self._path, name_node),
                    type=_convert_type(type_node) if type_node is not None else None,
                    assign=member.type == "type_alias",
                    doc=self._doc(member) if grouped else None,
                )
            )
        return GenDecl(token="type", specs=tuple(specs), doc=self._doc(node))

    def _func_decl(self, node: Node) -> FuncDecl | None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        receiver = node.child_by_field_name("receiver")
        return FuncDecl(
            name=_ident(self._path, name_node),
            type=_convert_func_type(node),
            recv=_convert_parameters(receiver) if receiver is not None else None,
            doc=self._doc(node),
        )


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def parse_source(source_bytes: bytes, path: str) -> SourceFile:
    """Parse Go source into its top-level declarations.

    Args:
        source_bytes: File contents
        path: File name recorded in positions

    Raises:
        UnitParseError: If the source has syntax errors.
    """
    tree = _get_parser().parse(source_bytes)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root) or root
        line, column = bad.start_point[0] + 1, bad.start_point[1] + 1
        msg = f"{path}:{line}:{column}: syntax error"
        raise UnitParseError(msg)

    return SourceFile(path=path, decls=_DeclBuilder(path, root).build())


def load_unit(
    directory: Path,
    *,
    unit_name: str = BUILTIN_UNIT,
    include: Collection[str] | None = None,
) -> Unit:
    """Parse the source files of one unit directory.

    Args:
        directory: Directory holding the unit's ``.go`` files
        unit_name: Identifier of the unit
        include: File names that belong to the unit (default: builtin.go)

    Returns:
        Unit with one SourceFile per included file, ordered by file name.

    Raises:
        UnitNotFoundError: If the directory or its files cannot be read.
        UnitParseError: If a file has syntax errors.
    """
    wanted = set(include) if include is not None else set(DEFAULT_UNIT_FILES)

    if not directory.is_dir():
        msg = f"Unit directory does not exist: {directory}"
        raise UnitNotFoundError(msg)

    file_paths = sorted(
        path
        for path in directory.glob("*.go")
        if path.name in wanted and path.is_file()
    )
    if not file_paths:
        msg = f"No source files for unit '{unit_name}' in {directory}"
        raise UnitNotFoundError(msg)

    files: list[SourceFile] = []
    for file_path in file_paths:
        try:
            source_bytes = file_path.read_bytes()
        except OSError as exc:
            msg = f"Failed to read {file_path}: {exc}"
            raise UnitNotFoundError(msg) from exc
        files.append(parse_source(source_bytes, str(file_path)))

    logger.debug("unit_parsed", unit=unit_name, directory=str(directory), files=len(files))
    return Unit(name=unit_name, files=tuple(files))


__all__ = ["load_unit", "parse_source"]
