"""
postgrls: PostgreSQL row level security linter.

Command line entrypoint.

Usage
-----
postgrls migrations/*.sql
postgrls --exclude schema_migrations,audit_log migrations/*.sql
cat schema.sql | postgrls --stdin
"""

import argparse
import logging
import sys
from typing import TextIO

from config.settings import get_settings, split_table_list
from orchestrator.root import (
    LinterError,
    LinterOptions,
    NoSourcesError,
    SourceFile,
    run_linter,
)
from report.output import write_findings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="postgrls",
        description="Report tables without row level security or policies in SQL scripts",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="SQL files to check",
    )
    parser.add_argument(
        "--exclude",
        default=None,
        help="Comma separated tables to skip (default: $POSTGRLS_EXCLUDE)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read SQL from standard input instead of files",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    return parser


def configure_logging(level: str, stream: TextIO) -> None:
    """Configure logging on stderr so stdout stays valid JSON."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=stream,
    )


def build_sources(args: argparse.Namespace, stdin: TextIO) -> list[SourceFile]:
    """Turn parsed arguments into sources."""
    if args.stdin:
        return [SourceFile(filename=get_settings().stdin_filename, stream=stdin)]
    return [SourceFile(filename=path) for path in args.files]


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """
    Run the linter and return the process exit code.

    0 when every table is protected, 1 when findings were printed,
    2 on usage, read or parse errors.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    settings = get_settings()
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else settings.log_level, stderr)

    if args.exclude is not None:
        excluded_tables = split_table_list(args.exclude)
    else:
        excluded_tables = settings.excluded_tables
    if excluded_tables:
        logger.debug(f"Excluded tables: {', '.join(excluded_tables)}")

    options = LinterOptions(
        sources=build_sources(args, stdin),
        excluded_tables=excluded_tables,
    )

    try:
        findings = run_linter(options)
    except NoSourcesError as e:
        parser.print_usage(stderr)
        print(f"{parser.prog}: error: {e}", file=stderr)
        return EXIT_ERROR
    except LinterError as e:
        print(f"{parser.prog}: error: {e}", file=stderr)
        return EXIT_ERROR

    if write_findings(findings, stdout, indent=settings.output_indent):
        return EXIT_FINDINGS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
