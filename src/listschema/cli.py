"""CLI entry point for listschema."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from listschema import __version__, logger
from listschema.dsl import load_schema, parse_schema, serialize_schema
from listschema.exceptions import InputTooLargeError, PackageError
from listschema.logging import configure_logging
from listschema.processing import summarize_schema, validate_form_data
from listschema.settings import Settings, get_settings
from listschema.transformers import schema_stats, to_json_schema, to_simplified

if TYPE_CHECKING:
    from collections.abc import Callable

    from listschema.typing.models import DSLSchema


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="listschema")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at debug level")
    parser.add_argument(
        "--strict-visibility",
        action="store_true",
        dest="strict_visibility",
        help="Treat conditions on later fields as errors",
    )

    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser("check", help="Parse and validate a schema file")
    check_parser.add_argument("schema_path", type=Path)

    format_parser = subparsers.add_parser("format", help="Print a schema in canonical form")
    format_parser.add_argument("schema_path", type=Path)
    format_parser.add_argument("--write", action="store_true", help="Rewrite the file in place")

    export_parser = subparsers.add_parser("export", help="Export a schema as JSON")
    export_parser.add_argument("schema_path", type=Path)
    export_parser.add_argument("--output", type=Path, default=None, dest="output_path")
    export_parser.add_argument("--simplified", action="store_true", help="Export key, label, type and required only")

    data_parser = subparsers.add_parser("validate-data", help="Validate JSON rows against a schema")
    data_parser.add_argument("schema_path", type=Path)
    data_parser.add_argument("data_path", type=Path, help="JSON object or array of objects")

    stats_parser = subparsers.add_parser("stats", help="Print field statistics")
    stats_parser.add_argument("schema_path", type=Path)

    json_schema_parser = subparsers.add_parser("json-schema", help="Print the JSON Schema of a data row")
    json_schema_parser.add_argument("schema_path", type=Path)

    return parser


def read_schema_text(path: Path, settings: Settings) -> str:
    """Read a schema file, enforcing the configured size limit.

    Args:
        path (Path): Schema file path.
        settings (Settings): Runtime settings.

    Raises:
        InputTooLargeError: If the file exceeds `max_schema_bytes`.

    Returns:
        str: File content.
    """
    size = path.stat().st_size
    if size > settings.max_schema_bytes:
        raise InputTooLargeError(size=size, limit=settings.max_schema_bytes)
    return path.read_text(encoding="utf-8")


def _emit(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def _run_check(args: argparse.Namespace, settings: Settings) -> int:
    """Report parse issues, validation errors and warnings.

    Returns:
        int: 0 when the schema is valid, 1 otherwise.
    """
    result = parse_schema(read_schema_text(args.schema_path, settings))
    for issue in result.issues:
        sys.stdout.write(f"{args.schema_path}:{issue.line}: error: {issue.message}\n")

    summary = summarize_schema(result.dsl_schema, strict_visibility_order=settings.strict_visibility_order)
    for error in summary.errors:
        sys.stdout.write(f"{args.schema_path}: error: {error.field}: {error.message}\n")
    for warning in summary.warnings:
        sys.stdout.write(f"{args.schema_path}: warning: {warning.field}: {warning.message}\n")

    is_valid = result.ok and summary.is_valid
    logger.info(
        "Schema checked",
        extra={
            "schema_path": str(args.schema_path),
            "is_valid": is_valid,
            "issue_count": len(result.issues),
            "error_count": len(summary.errors),
            "warning_count": len(summary.warnings),
        },
    )
    if is_valid:
        sys.stdout.write(
            f"{args.schema_path}: ok ({summary.field_count} fields, "
            f"{summary.required_field_count} required, {summary.conditional_field_count} conditional)\n",
        )
        return 0
    return 1


def _load(args: argparse.Namespace, settings: Settings) -> DSLSchema:
    return load_schema(read_schema_text(args.schema_path, settings), settings=settings)


def _run_format(args: argparse.Namespace, settings: Settings) -> int:
    text = serialize_schema(_load(args, settings))
    if args.write:
        args.schema_path.write_text(text, encoding="utf-8")
        logger.info("Schema formatted", extra={"schema_path": str(args.schema_path)})
    else:
        sys.stdout.write(text)
    return 0


def _run_export(args: argparse.Namespace, settings: Settings) -> int:
    schema = _load(args, settings)
    payload = to_simplified(schema) if args.simplified else schema.model_dump(mode="json", by_alias=True)
    if args.output_path is None:
        _emit(payload)
        return 0
    args.output_path.parent.mkdir(parents=True, exist_ok=True)
    args.output_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Schema exported", extra={"output_path": str(args.output_path)})
    return 0


def _run_validate_data(args: argparse.Namespace, settings: Settings) -> int:
    schema = _load(args, settings)
    rows = json.loads(args.data_path.read_text(encoding="utf-8"))
    if isinstance(rows, dict):
        rows = [rows]
    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        logger.error("Data file must hold a JSON object or an array of objects", extra={"path": str(args.data_path)})
        return 1

    results = [validate_form_data(schema.fields, row) for row in rows]
    _emit(
        [
            {"row": index, **result.model_dump(mode="json", by_alias=True, exclude={"warnings"})}
            for index, result in enumerate(results)
        ],
    )
    invalid = sum(1 for result in results if not result.is_valid)
    logger.info("Data validated", extra={"row_count": len(results), "invalid_row_count": invalid})
    return 1 if invalid else 0


def _run_stats(args: argparse.Namespace, settings: Settings) -> int:
    _emit(schema_stats(_load(args, settings)).model_dump(mode="json", by_alias=True))
    return 0


def _run_json_schema(args: argparse.Namespace, settings: Settings) -> int:
    _emit(to_json_schema(_load(args, settings)).to_document())
    return 0


_COMMANDS: dict[str, Callable[[argparse.Namespace, Settings], int]] = {
    "check": _run_check,
    "format": _run_format,
    "export": _run_export,
    "validate-data": _run_validate_data,
    "stats": _run_stats,
    "json-schema": _run_json_schema,
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 for success, 1 for error, 130 when interrupted).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.strict_visibility:
        settings = settings.model_copy(update={"strict_visibility_order": True})
    configure_logging(settings=settings, level="DEBUG" if args.verbose else None, force=True)

    handler = _COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args, settings)
    except PackageError as exc:
        sys.stderr.write(f"error: {exc}\n")
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user", extra={"command": args.command})
        return 130
    except (OSError, ValueError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        logger.exception("Could not read input", extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
