"""Command-line driver: json-subset SUBSET SUPERSET."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence, TextIO

from . import __version__
from .engine import SubsetEngine
from .exceptions import JsonSubsetError, LoadError
from .jsonpath_utils import JSONPathMatcher
from .loader import load_config, load_json
from .models import CheckerConfig, CheckReport, LogLevel

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_ERROR = 2

DESCRIPTION = """\
Check if the first JSON is a subset of the second JSON.
Arrays are compared as sets (order is ignored).
Use "-" for either file to read it from standard input."""

EPILOG = """\
Exit codes:
  0  the first document is contained in the second
  1  the first document is not contained in the second
  2  usage, input or configuration error

Examples:
  json-subset expected.json response.json
  curl -s https://api.example.com/user | json-subset expected.json -
  json-subset --root '$.data' --summary expected.json response.json
"""

_LOG_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="json-subset",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG
    )

    parser.add_argument("subset", help="Path to the subset JSON file (or -)")
    parser.add_argument("superset", help="Path to the superset JSON file (or -)")

    parser.add_argument("-c", "--config", help="Path to YAML/JSON config file")
    parser.add_argument(
        "--root",
        metavar="JSONPATH",
        help="Check the first match of this JSONPath in both documents"
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="List each difference with its path after the report"
    )
    parser.add_argument("--report", help="Write a JSON report to this file")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def configure_logging(level: LogLevel, stream: TextIO):
    """Send package log records to ``stream`` at ``level``."""
    package_logger = logging.getLogger("jsonsubset")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(_LOG_LEVELS[level])
    package_logger.propagate = False


def format_summary(report: CheckReport) -> str:
    lines = ["Differences:"]
    for diff in report.diffs:
        lines.append(f"  {diff.path}: {diff.message}")
    return "\n".join(lines)


def run(
    args: argparse.Namespace,
    stdout: TextIO,
    stderr: TextIO,
    stdin: Optional[TextIO] = None
) -> int:
    """Run a parsed command line; returns the process exit code."""
    config = load_config(args.config) if args.config else CheckerConfig()
    configure_logging(LogLevel.DEBUG if args.verbose else config.log_level, stderr)

    if args.subset == "-" and args.superset == "-":
        raise JsonSubsetError("Only one of the documents can be read from stdin")

    subset = load_json(args.subset, stdin)
    superset = load_json(args.superset, stdin)

    if args.root:
        subset = JSONPathMatcher.select(subset, args.root, args.subset)
        superset = JSONPathMatcher.select(superset, args.root, args.superset)
        logger.debug("Narrowed both documents to %s", args.root)

    report = SubsetEngine(config).compare(subset, superset)
    report.root_expression = args.root

    if args.report:
        try:
            with open(args.report, "w", encoding="utf-8") as f:
                json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise JsonSubsetError(f"Failed to write report {args.report}: {e}")

    if report.is_contained:
        if not args.quiet:
            print("OK: First JSON is a subset of second JSON.", file=stdout)
        return EXIT_SUCCESS

    if not args.quiet:
        print("FAIL: First JSON is not a subset of second JSON.", file=stderr)
        print("", file=stderr)
        print(report.report, file=stderr)
        if args.summary:
            print("", file=stderr)
            print(format_summary(report), file=stderr)
    return EXIT_FAILURE


def main(
    argv: Optional[Sequence[str]] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    stdin: Optional[TextIO] = None
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(parser.format_usage().rstrip(), file=stderr)
        print(f"json-subset: error: {e}", file=stderr)
        print("", file=stderr)
        print(DESCRIPTION, file=stderr)
        return EXIT_ERROR

    try:
        return run(args, stdout, stderr, stdin)
    except LoadError as e:
        print(str(e), file=stderr)
        return EXIT_ERROR
    except JsonSubsetError as e:
        print(f"Error: {e}", file=stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
