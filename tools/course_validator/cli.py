#!/usr/bin/env python3
"""CLI entry point for course validation.

This module provides the argument parser and main entry point that
wires the validate command to a course folder.

Usage:
    python -m course_validator content/courses/intro-python
    course-validator --verbose content/courses/intro-python
"""

from __future__ import annotations

import argparse
import logging
import sys

from course_validator import __version__
from course_validator.commands import cmd_validate
from course_validator.config import MERMAID_CLI_ENV, MERMAID_TIMEOUT_ENV
from course_validator.errors import CourseValidatorError
from course_validator.persistence import resolve_course_paths


def _configure_stdio_utf8() -> None:
    """Ensure the report glyphs (✓ ✗ ⚠) can be printed on Windows terminals.

    Windows consoles may default to a code page that can't handle Unicode.
    This reconfigures stdout/stderr to use UTF-8 if possible.
    """
    stdout = getattr(sys, "stdout", None)
    stderr = getattr(sys, "stderr", None)
    if hasattr(stdout, "reconfigure"):
        stdout.reconfigure(encoding="utf-8")  # type: ignore[attr-defined]
    if hasattr(stderr, "reconfigure"):
        stderr.reconfigure(encoding="utf-8")  # type: ignore[attr-defined]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        Configured ArgumentParser taking one course folder path
    """
    parser = argparse.ArgumentParser(
        prog="course-validator",
        description="Validate a course folder (manifest, lessons, quizzes, assets) before publishing.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  course-validator content/tenants/openclaw/courses/openclaw-security-hardening
  course-validator -v ./my-course

Environment:
  {MERMAID_CLI_ENV}      mermaid CLI command (default: mmdc)
  {MERMAID_TIMEOUT_ENV}  seconds per diagram (default: 30)
""",
    )
    parser.add_argument(
        "course_path",
        nargs="?",
        help="Path to the course folder, relative to the working directory.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug progress to stderr.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.set_defaults(handler=cmd_validate)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for errors or a bad course path)

    Handles:
        - Missing course path argument: usage on stderr
        - Unknown flags and other usage errors: argparse message, exit 1
        - CourseValidatorError: missing or non-directory course folder
    """
    _configure_stdio_utf8()
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code == 0:  # --help, --version
            raise
        return 1
    _configure_logging(args.verbose)

    if not args.course_path:
        parser.print_usage(sys.stderr)
        print(
            "  e.g. course-validator content/tenants/openclaw/courses/openclaw-security-hardening",
            file=sys.stderr,
        )
        return 1

    try:
        paths = resolve_course_paths(args.course_path)
        return int(args.handler(paths, args))
    except CourseValidatorError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1


def main_entry() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    raise SystemExit(main())
