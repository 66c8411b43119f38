"""Course validation pipeline.

Runs the validators in dependency order against one course folder:
manifest -> module/lesson graph -> filesystem sweep -> directory structure.
"""

from __future__ import annotations

import logging

from course_validator.diagnostics import Diagnostics
from course_validator.persistence.course_paths import CoursePaths
from course_validator.validation.diagrams import DiagramParser
from course_validator.validation.filesystem import sweep_module_files, validate_directory_structure
from course_validator.validation.lessons import validate_modules
from course_validator.validation.manifest import has_modules, validate_manifest

logger = logging.getLogger(__name__)


async def validate_course(
    paths: CoursePaths,
    diagnostics: Diagnostics,
    diagram_parser: DiagramParser,
) -> Diagnostics:
    """Validate a whole course folder.

    Args:
        paths: Resolved course paths
        diagnostics: Log to append findings to (one per run)
        diagram_parser: Syntax checker for mermaid blocks

    Returns:
        The same diagnostics log, for chaining

    Invariants:
        - Nothing past the manifest runs unless it parsed and has modules
    """
    manifest = validate_manifest(paths, diagnostics)
    if manifest is None or not has_modules(manifest):
        logger.debug("Stopping after manifest validation")
        return diagnostics

    referenced = validate_modules(manifest, paths, diagnostics)
    logger.debug(f"Manifest references {len(referenced)} files")

    await sweep_module_files(paths, referenced, diagnostics, diagram_parser)
    validate_directory_structure(paths, diagnostics)
    return diagnostics
