from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

import locate.goroot as goroot_module
from config.settings import GodocConfig
from core.errors import UnitNotFoundError
from locate.goroot import find_goroot, open_builtin_unit, unit_directory


def test_find_goroot_prefers_explicit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOROOT", "/from/env")

    assert find_goroot("/explicit") == Path("/explicit")


def test_find_goroot_uses_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOROOT", "/from/env")

    assert find_goroot() == Path("/from/env")


def test_find_goroot_asks_toolchain(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GOROOT", raising=False)
    monkeypatch.setattr(goroot_module.shutil, "which", lambda _name: "/usr/bin/go")

    def fake_run(cmd: list[str], **_kwargs: object) -> subprocess.CompletedProcess[str]:
        assert cmd == ["/usr/bin/go", "env", "GOROOT"]
        return subprocess.CompletedProcess(cmd, 0, stdout="/usr/lib/go\n", stderr="")

    monkeypatch.setattr(goroot_module.subprocess, "run", fake_run)

    assert find_goroot() == Path("/usr/lib/go")


def test_find_goroot_toolchain_failure_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GOROOT", raising=False)
    monkeypatch.setattr(goroot_module.shutil, "which", lambda _name: "/usr/bin/go")

    def fake_run(cmd: list[str], **_kwargs: object) -> subprocess.CompletedProcess[str]:
        raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr(goroot_module.subprocess, "run", fake_run)

    with pytest.raises(UnitNotFoundError):
        find_goroot()


def test_find_goroot_without_any_source_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GOROOT", raising=False)
    monkeypatch.setattr(goroot_module.shutil, "which", lambda _name: None)

    with pytest.raises(UnitNotFoundError, match="GOROOT"):
        find_goroot()


def test_unit_directory(fixture_goroot: Path) -> None:
    assert unit_directory(fixture_goroot) == fixture_goroot / "src" / "builtin"


def test_unit_directory_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(UnitNotFoundError, match="builtin"):
        unit_directory(tmp_path)


def test_open_builtin_unit_argument_overrides_config(
    fixture_goroot: Path, tmp_path: Path
) -> None:
    config = GodocConfig(goroot=str(tmp_path))

    unit = open_builtin_unit(config, goroot=str(fixture_goroot))

    assert unit.name == "builtin"
    assert len(unit.files) == 1


def test_open_builtin_unit_custom_unit(tmp_path: Path) -> None:
    unit_dir = tmp_path / "src" / "unsafe"
    unit_dir.mkdir(parents=True)
    (unit_dir / "unsafe.go").write_text("package unsafe\n\nfunc Sizeof(x ArbitraryType) uintptr\n")
    config = GodocConfig(goroot=str(tmp_path), unit_name="unsafe", unit_files=["unsafe.go"])

    unit = open_builtin_unit(config)

    assert unit.name == "unsafe"
    assert len(unit.files[0].decls) == 1
