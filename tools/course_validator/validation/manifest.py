"""Manifest validation.

The manifest is the entry point of the course graph. Nothing else can be
checked without it, so a missing or unparsable manifest ends the run.
"""

from __future__ import annotations

import logging
from typing import Any

from course_validator.config import REQUIRED_MANIFEST_FIELDS
from course_validator.diagnostics import Diagnostics
from course_validator.errors import Err, MissingFileError
from course_validator.models.common import is_hex_color
from course_validator.persistence.course_paths import CoursePaths
from course_validator.persistence.json_io import read_json

logger = logging.getLogger(__name__)


def has_modules(manifest: dict[str, Any]) -> bool:
    """True if the manifest declares a non-empty module list."""
    modules = manifest.get("modules")
    return isinstance(modules, list) and len(modules) > 0


def validate_manifest(paths: CoursePaths, diagnostics: Diagnostics) -> dict[str, Any] | None:
    """Parse and structurally validate ``manifest.json``.

    Args:
        paths: Resolved course paths
        diagnostics: Log to append findings to

    Returns:
        The parsed manifest, or None if it is missing or not valid JSON.
        A manifest without modules is still returned; callers check
        has_modules() before walking the module graph.
    """
    result = read_json(paths.manifest)
    if isinstance(result, Err):
        if isinstance(result.error, MissingFileError):
            diagnostics.error("manifest.json not found")
        else:
            diagnostics.error(f"manifest.json is not valid JSON: {result.error}")
        return None

    manifest = result.value
    if not isinstance(manifest, dict):
        diagnostics.error("manifest.json is not valid JSON: root must be an object")
        return None
    diagnostics.pass_("manifest.json exists and is valid JSON")

    missing = [name for name in REQUIRED_MANIFEST_FIELDS if name not in manifest]
    if missing:
        diagnostics.error(f"Missing required manifest fields: {', '.join(missing)}")
    else:
        diagnostics.pass_("Required manifest fields present")

    manifest_id = manifest.get("id")
    if manifest_id:
        if manifest_id != paths.course_id:
            diagnostics.error(
                f'manifest.id "{manifest_id}" does not match folder name "{paths.course_id}"'
            )
        else:
            diagnostics.pass_(f'manifest.id matches folder name "{paths.course_id}"')

    color = manifest.get("color")
    if color:
        if is_hex_color(color):
            diagnostics.pass_(f'Color "{color}" is a valid hex color')
        else:
            diagnostics.error(f'Color "{color}" is not a valid hex color')

    if not has_modules(manifest):
        diagnostics.error("modules must be a non-empty array")
        return manifest

    diagnostics.pass_(f"{len(manifest['modules'])} modules found")
    logger.debug(f"Manifest for {paths.course_id} declares {len(manifest['modules'])} modules")
    return manifest
