from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from config.settings import GodocConfig
from core.errors import UnitNotFoundError, UnitParseError
from models.syntax import (
    BasicLit,
    FuncDecl,
    GenDecl,
    Ident,
    Named,
    SourceFile,
    TypeSpec,
    Unit,
    ValueSpec,
)
from parse.treesitter_go import load_unit
from resolve.resolver import BuiltinResolver, find_builtin


def _synthetic_unit() -> Unit:
    first = SourceFile(
        path="a.go",
        decls=(
            GenDecl(
                token="var",
                specs=(ValueSpec(names=(Ident("Dup"),), values=(BasicLit("1"),)),),
            ),
            GenDecl(token="type", specs=(TypeSpec(name=Ident("T"), type=Named("int")),)),
        ),
    )
    second = SourceFile(
        path="b.go",
        decls=(FuncDecl(name=Ident("Dup")), FuncDecl(name=Ident("Later"))),
    )
    return Unit(name="builtin", files=(first, second))


def _fixture_resolver(unit_dir: Path) -> BuiltinResolver:
    return BuiltinResolver(lambda: load_unit(unit_dir))


def test_resolver_first_match_in_source_order_wins() -> None:
    resolver = BuiltinResolver(_synthetic_unit)

    doc = resolver.resolve("Dup")

    assert doc is not None
    assert doc.declaration_text == "var Dup = 1"


def test_resolver_searches_later_files() -> None:
    resolver = BuiltinResolver(_synthetic_unit)

    doc = resolver.resolve("Later")

    assert doc is not None
    assert doc.declaration_text == "func Later()"


def test_resolver_absent_name_returns_none_without_warnings() -> None:
    resolver = BuiltinResolver(_synthetic_unit)

    with capture_logs() as logs:
        doc = resolver.resolve("missing")

    assert doc is None
    assert [entry for entry in logs if entry["log_level"] != "debug"] == []


def test_resolver_loads_unit_on_every_call() -> None:
    calls: list[int] = []

    def load() -> Unit:
        calls.append(1)
        return _synthetic_unit()

    resolver = BuiltinResolver(load)
    resolver.resolve("T")
    resolver.resolve("T")

    assert len(calls) == 2


def test_resolver_propagates_load_failures() -> None:
    def load() -> Unit:
        msg = "unit is gone"
        raise UnitNotFoundError(msg)

    with pytest.raises(UnitNotFoundError):
        BuiltinResolver(load).resolve("len")


def test_resolver_uses_unit_name_from_unit() -> None:
    unit = Unit(
        name="unsafe",
        files=(SourceFile(path="unsafe.go", decls=(FuncDecl(name=Ident("Sizeof")),)),),
    )

    doc = BuiltinResolver(lambda: unit).resolve("Sizeof")

    assert doc is not None
    assert doc.unit_name == "unsafe"


def test_fixture_function_append(fixture_unit_dir: Path) -> None:
    doc = _fixture_resolver(fixture_unit_dir).resolve("append")

    assert doc is not None
    assert doc.name == "append"
    assert doc.declaration_text == "func append(slice []Type, elems ...Type) []Type"
    assert doc.doc_text == "append appends elements.\n"


def test_fixture_function_position(fixture_unit_dir: Path) -> None:
    source_path = fixture_unit_dir / "builtin.go"
    lines = source_path.read_text(encoding="utf-8").splitlines()
    line_no = lines.index("func append(slice []Type, elems ...Type) []Type") + 1

    doc = _fixture_resolver(fixture_unit_dir).resolve("append")

    assert doc is not None
    assert doc.position == f"{source_path}:{line_no}:6"


def test_fixture_error_interface(fixture_unit_dir: Path) -> None:
    doc = _fixture_resolver(fixture_unit_dir).resolve("error")

    assert doc is not None
    assert doc.declaration_text == "type error interface {\n\tError() string\n}"
    assert doc.doc_text == (
        "The error built-in interface type is the conventional interface for\n"
        "representing an error condition, with the nil value representing no error.\n"
    )


def test_fixture_constant_group_member(fixture_unit_dir: Path) -> None:
    doc = _fixture_resolver(fixture_unit_dir).resolve("Pi")

    assert doc is not None
    assert doc.declaration_text == "const Pi = 3"
    assert doc.doc_text == "Pi approximates pi.\n"


def test_fixture_variable_with_type_and_value(fixture_unit_dir: Path) -> None:
    doc = _fixture_resolver(fixture_unit_dir).resolve("Nil")

    assert doc is not None
    assert doc.declaration_text == "var Nil int = 0"
    assert doc.doc_text == "Nil is a typed variable.\n"


def test_fixture_method_with_receiver(fixture_unit_dir: Path) -> None:
    doc = _fixture_resolver(fixture_unit_dir).resolve("Read")

    assert doc is not None
    assert doc.declaration_text == "func (r Reader) Read(p []byte) (n int, err error)"


def test_fixture_absent_name(fixture_unit_dir: Path) -> None:
    with capture_logs() as logs:
        doc = _fixture_resolver(fixture_unit_dir).resolve("goroutine")

    assert doc is None
    assert [entry for entry in logs if entry["log_level"] != "debug"] == []


def test_fixture_duplicate_name_earlier_declaration_wins(fixture_unit_dir: Path) -> None:
    doc = _fixture_resolver(fixture_unit_dir).resolve("Dup")

    assert doc is not None
    assert doc.declaration_text == "var Dup int = 1"
    assert doc.doc_text == "Dup is declared first as a variable.\n"


def test_fixture_multi_name_spec_renders_shared_values(fixture_unit_dir: Path) -> None:
    doc = _fixture_resolver(fixture_unit_dir).resolve("Three")

    assert doc is not None
    assert doc.declaration_text == "const Three = 2, 3"
    assert doc.doc_text == "Pi group documentation.\n"


def test_fixture_binary_initializer_repeats_left_operand(fixture_unit_dir: Path) -> None:
    sum_doc = _fixture_resolver(fixture_unit_dir).resolve("Sum")
    no_doc = _fixture_resolver(fixture_unit_dir).resolve("No")

    assert sum_doc is not None
    assert sum_doc.declaration_text == "const Sum = 1 + 1"
    assert no_doc is not None
    assert no_doc.declaration_text == "const No = 0 != 0"
    assert no_doc.doc_text == "Yes and No are the two untyped boolean values.\n"


def test_fixture_unknown_parameter_type_degrades(fixture_unit_dir: Path) -> None:
    with capture_logs() as logs:
        doc = _fixture_resolver(fixture_unit_dir).resolve("wrapped")

    assert doc is not None
    assert doc.declaration_text == "func wrapped(ctx, n int)"
    warnings = [entry for entry in logs if entry["log_level"] == "warning"]
    assert len(warnings) == 1
    assert warnings[0]["event"] == "unhandled_type_expression"
    assert warnings[0]["kind"] == "qualified_type"


def test_find_builtin_with_config_goroot(fixture_goroot: Path) -> None:
    doc = find_builtin("len", config=GodocConfig(goroot=str(fixture_goroot)))

    assert doc is None


def test_find_builtin_explicit_goroot(fixture_goroot: Path) -> None:
    doc = find_builtin("copy", goroot=str(fixture_goroot))

    assert doc is not None
    assert doc.declaration_text == "func copy(src []Type) int"


def test_find_builtin_parse_error_is_fatal(tmp_path: Path) -> None:
    unit_dir = tmp_path / "src" / "builtin"
    unit_dir.mkdir(parents=True)
    (unit_dir / "builtin.go").write_text("package builtin\n\nfunc (\n", encoding="utf-8")

    with pytest.raises(UnitParseError):
        find_builtin("len", goroot=str(tmp_path))
