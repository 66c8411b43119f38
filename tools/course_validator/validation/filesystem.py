"""Filesystem sweep and directory structure checks.

The sweep walks module directories on disk independently of the manifest:
- Flags files the manifest never references (orphans)
- Flags unexpected file types and names that break the ##_Name convention
- Hands every non-empty markdown file to the content validator
"""

from __future__ import annotations

import logging
from pathlib import Path

from course_validator.config import ASSETS_DIRNAME, NAMING_CONVENTION_LABEL, SWEEP_EXTENSIONS
from course_validator.diagnostics import Diagnostics
from course_validator.models.common import follows_naming_convention
from course_validator.persistence.course_paths import (
    CoursePaths,
    module_directories,
    top_level_directories,
)
from course_validator.persistence.json_io import read_text
from course_validator.validation.diagrams import DiagramParser
from course_validator.validation.markdown import validate_markdown_content

logger = logging.getLogger(__name__)


def _check_orphan(relative_path: str, referenced: set[str], diagnostics: Diagnostics) -> None:
    if relative_path not in referenced:
        diagnostics.warn(f'Orphaned file: "{relative_path}" is not referenced in manifest')


async def _sweep_markdown_file(
    file_path: Path,
    relative_path: str,
    paths: CoursePaths,
    referenced: set[str],
    diagnostics: Diagnostics,
    diagram_parser: DiagramParser,
) -> None:
    content = read_text(file_path)
    trimmed = content.strip()

    if not trimmed:
        diagnostics.error(f'Markdown file "{relative_path}" is empty')
    else:
        if not trimmed.startswith("# "):
            diagnostics.warn(f'Markdown file "{relative_path}" does not start with a # heading')
        await validate_markdown_content(content, relative_path, paths, diagnostics, diagram_parser)

    _check_orphan(relative_path, referenced, diagnostics)


async def sweep_module_files(
    paths: CoursePaths,
    referenced: set[str],
    diagnostics: Diagnostics,
    diagram_parser: DiagramParser,
) -> None:
    """Check every file inside the ``##_Name`` module directories.

    Args:
        paths: Resolved course paths
        referenced: Course-relative paths referenced by the manifest
        diagnostics: Log to append findings to
        diagram_parser: Syntax checker for mermaid blocks in markdown files

    Behavior:
        - Entries other than .md/.json are warned about and skipped
        - .md files are checked for content and passed to the markdown validator
        - .md and .json files not in ``referenced`` are reported as orphans
        - .md and .json file names must follow the ##_Name convention
    """
    for module_dir in module_directories(paths.root):
        for entry in sorted(module_dir.iterdir(), key=lambda p: p.name):
            relative_path = f"{module_dir.name}/{entry.name}"
            extension = entry.suffix if entry.is_file() else ""

            if extension not in SWEEP_EXTENSIONS:
                diagnostics.warn(f"Unexpected file type in {module_dir.name}/: {entry.name}")
                continue

            logger.debug(f"Sweeping {relative_path}")
            if extension == ".md":
                await _sweep_markdown_file(
                    entry, relative_path, paths, referenced, diagnostics, diagram_parser
                )
            else:
                _check_orphan(relative_path, referenced, diagnostics)

            if not follows_naming_convention(entry.name):
                diagnostics.warn(
                    f'File "{relative_path}" does not follow {NAMING_CONVENTION_LABEL} pattern'
                )


def validate_directory_structure(paths: CoursePaths, diagnostics: Diagnostics) -> None:
    """Top-level layout: an assets/ folder and ##_Name module folders."""
    if not paths.assets.is_dir():
        diagnostics.warn(f"No {ASSETS_DIRNAME}/ directory found")
    else:
        diagnostics.pass_(f"{ASSETS_DIRNAME}/ directory exists")

    for directory in top_level_directories(paths.root):
        if directory.name == ASSETS_DIRNAME or directory.name.startswith("."):
            continue
        if not follows_naming_convention(directory.name):
            diagnostics.warn(
                f'Directory "{directory.name}" does not follow {NAMING_CONVENTION_LABEL} pattern'
            )
