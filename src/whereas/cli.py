"""
Command-line entry point.

    whereas PATH                 run a Resolution, printing each published line
    whereas PATH --dump yaml     print the parsed AST instead of running
    whereas PATH --report        print the analyzer report
    whereas PATH --dot [MODE]    print a Graphviz DOT graph

Exit status:
    0  success
    1  lexical or parse error
    2  runtime error
    3  the file could not be read
"""

import argparse
import logging
import sys
from enum import Enum
from typing import List, Optional

from whereas import __version__
from whereas.analyzer import ResolutionReport, analyze_resolution
from whereas.backends import DotMode, generate_dot
from whereas.errors import (
    EvaluationError,
    ParseErrorList,
    UnterminatedStringError,
    WhereasError,
)
from whereas.evaluator import run
from whereas.parser import parse_string
from whereas.serialization import resolution_to_json, resolution_to_yaml


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_RUNTIME_ERROR = 2
EXIT_UNREADABLE = 3


class DumpFormat(Enum):
    YAML = "yaml"
    JSON = "json"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="whereas",
        description="Run a Resolution written in legalistic English.",
    )
    parser.add_argument("path", help="Path to the Resolution source file")
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--dump",
        choices=[f.value for f in DumpFormat],
        help="Print the parsed AST in this format instead of running",
    )
    output.add_argument(
        "--report",
        action="store_true",
        help="Print the analyzer report instead of running",
    )
    output.add_argument(
        "--dot",
        nargs="?",
        const=DotMode.SIMPLE.value,
        choices=[m.value for m in DotMode],
        help="Print a Graphviz DOT graph instead of running (default mode: simple)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def format_report(report: ResolutionReport) -> str:
    """Render an analyzer report as plain text."""
    lines = [
        f"Whereas statements:  {report.total_whereas}",
        f"Resolved statements: {report.total_resolved}",
    ]
    for kind, count in sorted(report.statement_counts.items()):
        lines.append(f"  {kind}: {count}")
    lines.append(f"Declared: {', '.join(report.declared_names) or '(none)'}")
    for name, count in sorted(report.identifier_usage.items()):
        lines.append(f"  {name}: read by {count} expression(s)")
    lines.append(
        f"Expressions: {report.total_expressions} "
        f"(max depth {report.max_expression_depth}, "
        f"avg depth {report.avg_expression_depth:.2f}, "
        f"{report.total_expression_nodes} nodes)"
    )
    if report.warnings:
        lines.append(f"Warnings ({len(report.warnings)}):")
        lines.extend(f"  - {warning}" for warning in report.warnings)
    return "\n".join(lines)


def _print_error(exc: WhereasError) -> None:
    if isinstance(exc, ParseErrorList):
        for error in exc.errors:
            print(f"error: {error.message}", file=sys.stderr)
    elif isinstance(exc, UnterminatedStringError):
        print(f"error: {exc.message} after \"{exc.literal}", file=sys.stderr)
    else:
        print(f"error: {exc.message}", file=sys.stderr)


def _render(source: str, args: argparse.Namespace) -> str:
    resolution = parse_string(source)
    if args.dump == DumpFormat.JSON.value:
        return resolution_to_json(resolution)
    if args.dump == DumpFormat.YAML.value:
        return resolution_to_yaml(resolution).rstrip("\n")
    if args.report:
        return format_report(analyze_resolution(resolution))
    return generate_dot(resolution, mode=DotMode(args.dot))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        with open(args.path, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {args.path}: {e}", file=sys.stderr)
        return EXIT_UNREADABLE
    logger.info("read %d characters from %s", len(source), args.path)

    try:
        if args.dump or args.report or args.dot:
            print(_render(source, args))
        else:
            run(source, emit=print)
    except EvaluationError as e:
        _print_error(e)
        return EXIT_RUNTIME_ERROR
    except WhereasError as e:
        _print_error(e)
        return EXIT_PARSE_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
