"""Configuration constants for course validation.

This module centralizes the naming patterns, enumerations and limits used by
the validators. Adding a lesson type or quiz question type requires updating
only this file.
"""

from __future__ import annotations

import re
from typing import Final, FrozenSet

# -----------------------------------------------------------------------------
# Naming and Format Patterns
# -----------------------------------------------------------------------------

NAMING_CONVENTION_REGEX: Final[re.Pattern[str]] = re.compile(r"^[0-9]{2}_")
"""Module directories, module IDs and content files start with two digits and
an underscore (e.g. ``01_intro``)."""

NAMING_CONVENTION_LABEL: Final[str] = "##_Name"

HEX_COLOR_REGEX: Final[re.Pattern[str]] = re.compile(
    r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE
)
"""Valid manifest color: 3- or 6-digit hex, case-insensitive."""

EXTERNAL_URL_REGEX: Final[re.Pattern[str]] = re.compile(r"^https?://")

LESSON_ID_SEPARATOR: Final[str] = "|||"
"""Separates the module part from the file-name part of a lesson ID."""

COURSE_URL_PREFIX: Final[str] = "/courses/"
"""Public URL root; content paths look like ``/courses/{courseId}/...``."""


# -----------------------------------------------------------------------------
# Manifest Enumerations
# -----------------------------------------------------------------------------

MANIFEST_FILENAME: Final[str] = "manifest.json"
ASSETS_DIRNAME: Final[str] = "assets"

REQUIRED_MANIFEST_FIELDS: Final[tuple[str, ...]] = ("id", "title", "description", "modules")
"""Checked in this order; the aggregated error lists them in this order too."""

LESSON_TYPES: Final[tuple[str, ...]] = ("content", "quiz", "section")
"""Valid lesson types. ``section`` lessons are organizational only."""


# -----------------------------------------------------------------------------
# Quiz Enumerations
# -----------------------------------------------------------------------------

QUIZ_TYPE: Final[str] = "quiz"

QUESTION_TYPES: Final[tuple[str, ...]] = (
    "MULTIPLE_CHOICE",
    "MULTIPLE_RESPONSE",
    "MATCHING",
)
"""Valid quiz question types."""

MIN_ANSWERS_PER_QUESTION: Final[int] = 2
PASSING_SCORE_MIN: Final[int] = 0
PASSING_SCORE_MAX: Final[int] = 100


# -----------------------------------------------------------------------------
# Filesystem Sweep
# -----------------------------------------------------------------------------

SWEEP_EXTENSIONS: Final[FrozenSet[str]] = frozenset({".md", ".json"})
"""File types expected inside module directories."""


# -----------------------------------------------------------------------------
# Diagrams
# -----------------------------------------------------------------------------

DIAGRAM_LANGUAGE: Final[str] = "mermaid"

MERMAID_CLI_ENV: Final[str] = "COURSE_VALIDATOR_MERMAID_CLI"
MERMAID_TIMEOUT_ENV: Final[str] = "COURSE_VALIDATOR_MERMAID_TIMEOUT"

DEFAULT_MERMAID_CLI: Final[str] = "mmdc"
"""Command used to syntax-check mermaid blocks (@mermaid-js/mermaid-cli)."""

DIAGRAM_TIMEOUT_SECONDS: Final[float] = 30.0

MERMAID_SYNTAX_ERROR_MARKERS: Final[tuple[str, ...]] = (
    "Parse error",
    "Lexical error",
    "UnknownDiagramError",
    "No diagram type detected",
)
"""Substrings of mermaid parser failures. Any other non-zero CLI exit means
the CLI itself could not run (e.g. no headless Chrome)."""


# -----------------------------------------------------------------------------
# Report
# -----------------------------------------------------------------------------

SEVERITY_GLYPHS: Final[dict[str, str]] = {
    "pass": "✓",
    "error": "✗",
    "warning": "⚠",
}
