"""Command-line interface for scriptmap-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from artifacts.write import analyze_project, load_analyses
from contract.validation import validate_artifacts
from rules.config import ConfigError, load_config
from verify.verify import verify_determinism


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project directory (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scriptmap")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a project")
    _add_common_paths(analyze_parser)
    analyze_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )
    analyze_parser.add_argument(
        "--name",
        default=None,
        help="Project name (default: directory name)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate artifacts")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat a missing schema_version as an error",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )
    verify_parser.add_argument(
        "--name",
        default=None,
        help="Project name the artifacts were generated with",
    )

    list_parser = subparsers.add_parser("list", help="List stored analyses")
    list_parser.add_argument(
        "store",
        nargs="?",
        default=".scriptmap",
        help="Directory of stored analyses (default: .scriptmap)",
    )

    return parser


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return (root / config.output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _handle_analyze(root: Path, out_dir: str | None, name: str | None) -> int:
    counts = analyze_project(root=root, out_dir=_resolve_output_dir(out_dir), name=name)
    sys.stdout.write(
        f"{counts['name']}: {counts['function_count']} function(s), "
        f"{counts['trigger_count']} trigger(s), "
        f"{counts['external_call_count']} external call(s), "
        f"complexity {counts['complexity']}\n"
    )
    return 0


def _handle_validate(root: Path, artifacts_dir: str | None, *, strict: bool) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir, strict_schema_version=strict)
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None, name: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(
            root=root,
            artifacts_dir=resolved_artifacts_dir,
            name=name,
        )
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
            ("changed field", result.changed_fields),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _handle_list(store: Path) -> int:
    try:
        analyses = load_analyses(store)
    except ValidationError as exc:
        sys.stderr.write(f"error: invalid stored analysis in {store}: {exc}\n")
        return 1

    console = Console(file=sys.stdout, force_terminal=False)
    if not analyses:
        console.print(f"No analyses found in {store}")
        return 0

    table = Table(show_header=True)
    table.add_column("name", overflow="fold")
    table.add_column("lines", justify="right")
    table.add_column("complexity")
    table.add_column("entry")
    table.add_column("functions", justify="right")
    table.add_column("apis", justify="right")
    table.add_column("warnings", justify="right")
    table.add_column("summary", overflow="fold")
    for analysis in analyses:
        table.add_row(
            analysis.name,
            str(analysis.lines_of_code),
            analysis.complexity,
            analysis.entry_mode,
            str(len(analysis.functions)),
            str(len(analysis.external_calls)),
            str(len(analysis.warnings)),
            analysis.functional_summary.brief,
        )
    console.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "list":
        return _handle_list(Path(args.store).expanduser().resolve())

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "analyze":
            return _handle_analyze(root, args.out_dir, args.name)

        if args.command == "validate":
            return _handle_validate(root, args.artifacts_dir, strict=args.strict)

        if args.command == "verify":
            return _handle_verify(root, args.artifacts_dir, args.name)
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
