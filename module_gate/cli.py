from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence


def _add_document_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Plugin/project descriptor (JSON or YAML) with a Modules list")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject unknown keys in module documents",
    )
    parser.add_argument(
        "--extra-platform",
        action="append",
        default=None,
        metavar="NAME",
        help="Register an additional platform name (repeatable)",
    )


def _add_request_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--platform", required=True, help="Target platform, e.g. Win64")
    parser.add_argument("--target-name", default=None, help="Target (program) name")
    parser.add_argument(
        "--developer-tools",
        action="store_true",
        help="Build with developer tools enabled",
    )
    parser.add_argument(
        "--cooked",
        action="store_true",
        help="Build requires cooked data",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="module-gate", add_help=True)
    parser.add_argument("--log-level", default="WARNING", help="Diagnostics log level (default: WARNING)")
    parser.add_argument("--log-file", default=None, help="Also write DEBUG diagnostics to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Report which modules are part of one build")
    _add_document_args(check)
    _add_request_flags(check)
    check.add_argument("--configuration", required=True, help="Target configuration, e.g. Development")
    check.add_argument("--target-type", required=True, help="Target type, e.g. Game or Program")
    check.add_argument(
        "--module",
        action="append",
        default=None,
        metavar="NAME",
        help="Only report this module (repeatable)",
    )

    matrix = sub.add_parser("matrix", help="Print module eligibility across target types and configurations")
    _add_document_args(matrix)
    _add_request_flags(matrix)
    matrix.add_argument("--csv", default=None, help="Also write the matrix to this CSV file")

    validate = sub.add_parser("validate", help="Report deprecated module settings")
    _add_document_args(validate)

    normalize = sub.add_parser("normalize", help="Decode and re-encode a descriptor document")
    _add_document_args(normalize)
    normalize.add_argument("--output", default=None, help="Write to this file instead of stdout")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)

    from .foundation.logging_utils import setup_logging

    try:
        setup_logging(args.log_level, log_file=args.log_file)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    from .app import commands

    try:
        if args.command == "check":
            return commands.run_check(
                args.path,
                platform=args.platform,
                configuration=args.configuration,
                target_type=args.target_type,
                target_name=args.target_name,
                developer_tools=args.developer_tools,
                cooked=args.cooked,
                strict=args.strict,
                out=sys.stdout,
                modules=args.module,
                extra_platforms=args.extra_platform,
            )

        if args.command == "matrix":
            return commands.run_matrix(
                args.path,
                platform=args.platform,
                target_name=args.target_name,
                developer_tools=args.developer_tools,
                cooked=args.cooked,
                strict=args.strict,
                csv_path=args.csv,
                out=sys.stdout,
                extra_platforms=args.extra_platform,
            )

        if args.command == "validate":
            return commands.run_validate(
                args.path,
                strict=args.strict,
                out=sys.stdout,
                extra_platforms=args.extra_platform,
            )

        if args.command == "normalize":
            return commands.run_normalize(
                args.path,
                output=args.output,
                strict=args.strict,
                out=sys.stdout,
                extra_platforms=args.extra_platform,
            )
    except (FileNotFoundError, TypeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    raise AssertionError(f"Unhandled command: {args.command}")


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
