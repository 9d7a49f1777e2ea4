"""Command-line interface for builtin-godoc."""

from __future__ import annotations

import argparse
import sys
from functools import partial
from pathlib import Path

from config.settings import ConfigError, GodocConfig, load_config
from core.errors import GodocError
from core.logging import configure_logging
from locate.goroot import find_goroot, open_builtin_unit, unit_directory
from resolve.resolver import BuiltinResolver
from utils import record_to_json


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--goroot",
        default=None,
        help="Go installation root (default: config, $GOROOT, then `go env GOROOT`)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a godoc.toml file (default: ./godoc.toml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Diagnostic log level (default: config log_level)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="godoc-builtin")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lookup_parser = subparsers.add_parser(
        "lookup", help="Show the declaration and doc comment of a builtin"
    )
    lookup_parser.add_argument("name", help="Builtin identifier (e.g. append)")
    lookup_parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print the documentation record as JSON",
    )
    _add_common_options(lookup_parser)

    locate_parser = subparsers.add_parser(
        "locate", help="Print the directory of the builtin unit"
    )
    _add_common_options(locate_parser)

    return parser


def _handle_lookup(
    config: GodocConfig, goroot: str | None, name: str, *, as_json: bool
) -> int:
    resolver = BuiltinResolver(partial(open_builtin_unit, config, goroot=goroot))
    try:
        record = resolver.resolve(name)
    except GodocError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if record is None:
        sys.stderr.write(f"no builtin named {name!r}\n")
        return 1

    if as_json:
        sys.stdout.write(record_to_json(record).decode("utf-8") + "\n")
    else:
        sys.stdout.write(record.to_text())
    return 0


def _handle_locate(config: GodocConfig, goroot: str | None) -> int:
    try:
        directory = unit_directory(find_goroot(goroot or config.goroot), config.unit_name)
    except GodocError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    sys.stdout.write(f"{directory}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config).expanduser() if args.config else None)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    configure_logging(level=args.log_level or config.log_level, fmt=config.log_format)

    if args.command == "lookup":
        return _handle_lookup(config, args.goroot, args.name, as_json=args.as_json)

    if args.command == "locate":
        return _handle_locate(config, args.goroot)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
