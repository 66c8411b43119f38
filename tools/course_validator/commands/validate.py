"""Validate command for course folders.

This module provides the validate command that runs the full pipeline
against one course and prints the diagnostic report.
"""

from __future__ import annotations

import argparse
import asyncio

from course_validator.diagnostics import Diagnostics, render_report
from course_validator.persistence.course_paths import CoursePaths
from course_validator.validation import DiagramParser, MermaidCliParser, validate_course


def cmd_validate(
    paths: CoursePaths,
    _args: argparse.Namespace,
    diagram_parser: DiagramParser | None = None,
) -> int:
    """Validate a course folder.

    Args:
        paths: Resolved course paths
        _args: CLI arguments (unused)
        diagram_parser: Mermaid syntax checker (defaults to the mermaid CLI,
            configured from the environment)

    Returns:
        0 if no errors were found, 1 otherwise

    Output:
        "Validating course: {id}", one line per diagnostic, then a
        "Results: ..." summary line
    """
    parser = diagram_parser if diagram_parser is not None else MermaidCliParser.from_env()

    print(f"Validating course: {paths.course_id}")
    print()

    diagnostics = asyncio.run(validate_course(paths, Diagnostics(), parser))

    for line in render_report(diagnostics):
        print(line)
    return 0 if diagnostics.is_valid else 1
