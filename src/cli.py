"""Command-line interface for jacbridge."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from report.io import ReportInputError, dumps_json, dumps_jsonl, load_diagnostics
from report.workspace import annotate_workspace, suppress_workspace
from resolve.paths import PathResolver
from rules.config import BridgeConfig, ConfigError, load_config


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Workspace root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jacbridge")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolution details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Check whether a module name resolves to a Jac file"
    )
    resolve_parser.add_argument("root", help="Workspace root")
    resolve_parser.add_argument("document", help="Referencing document path")
    resolve_parser.add_argument("module", help="Module name, e.g. util or pkg.sub")
    resolve_parser.add_argument(
        "--explain",
        action="store_true",
        help="Print every candidate path with its probe result",
    )

    annotate_parser = subparsers.add_parser(
        "annotate", help="Annotate imports of Jac modules in every Python file"
    )
    _add_common_paths(annotate_parser)
    annotate_parser.add_argument(
        "--out",
        default=None,
        help="Write JSONL annotations to this file (default: stdout)",
    )
    annotate_parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Glob pattern of files to skip (repeatable)",
    )

    suppress_parser = subparsers.add_parser(
        "suppress", help="Compute overrides for analyzer diagnostics"
    )
    suppress_parser.add_argument("root", help="Workspace root")
    suppress_parser.add_argument(
        "diagnostics", help="JSON file mapping relative paths to diagnostics"
    )
    suppress_parser.add_argument(
        "--out",
        default=None,
        help="Write JSON overrides to this file (default: stdout)",
    )

    return parser


def _emit(payload: bytes, out: str | None) -> None:
    if out is None:
        sys.stdout.write(payload.decode("utf-8"))
        return
    Path(out).expanduser().write_bytes(payload)


def _handle_resolve(
    root: Path, config: BridgeConfig, document: str, module: str, *, explain: bool
) -> int:
    resolver = PathResolver(source_dirs=config.source_dirs, extension=config.extension)
    document_path = Path(document).expanduser()
    if not document_path.is_absolute():
        document_path = root / document_path

    if explain:
        for candidate, result in resolver.explain(document_path, root, module):
            sys.stdout.write(f"{result.value}: {candidate}\n")

    found = asyncio.run(resolver.resolve(document_path, root, module))
    if not explain:
        sys.stdout.write(f"{module}: {'jac' if found else 'unresolved'}\n")
    return 0 if found else 1


def _handle_annotate(
    root: Path, config: BridgeConfig, out: str | None, exclude: list[str] | None
) -> int:
    records = asyncio.run(annotate_workspace(root, config, exclude_patterns=exclude))
    _emit(dumps_jsonl(records), out)
    return 0


def _handle_suppress(
    root: Path, config: BridgeConfig, diagnostics: str, out: str | None
) -> int:
    diagnostics_path = Path(diagnostics).expanduser().resolve()
    try:
        loaded = load_diagnostics(diagnostics_path)
    except ReportInputError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    overrides = asyncio.run(suppress_workspace(root, loaded, config))
    _emit(dumps_json(overrides), out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    root = Path(args.root).expanduser().resolve()
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if args.command == "resolve":
        return _handle_resolve(
            root, config, args.document, args.module, explain=args.explain
        )

    if args.command == "annotate":
        return _handle_annotate(root, config, args.out, args.exclude)

    if args.command == "suppress":
        return _handle_suppress(root, config, args.diagnostics, args.out)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
