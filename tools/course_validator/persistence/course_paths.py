"""Course folder path resolution.

This module locates the course folder and maps public content URLs
(``/courses/{courseId}/...``) onto files inside it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from course_validator.config import (
    ASSETS_DIRNAME,
    COURSE_URL_PREFIX,
    MANIFEST_FILENAME,
)
from course_validator.errors import CourseNotADirectoryError, CourseNotFoundError
from course_validator.models.common import follows_naming_convention


@dataclass(frozen=True, slots=True)
class CoursePaths:
    """Resolved paths of a course folder.

    Invariants:
        - root is an existing directory
        - course_id is the base name of root
        - manifest and assets may not exist; validators report that
    """
    root: Path
    course_id: str
    manifest: Path
    assets: Path

    @classmethod
    def for_root(cls, root: Path) -> "CoursePaths":
        return cls(
            root=root,
            course_id=root.name,
            manifest=root / MANIFEST_FILENAME,
            assets=root / ASSETS_DIRNAME,
        )


def resolve_course_paths(raw_path: str | Path, cwd: Path | None = None) -> CoursePaths:
    """Resolve a command-line course path relative to the working directory.

    Symlinks are not followed, so the course ID is the folder name as given.

    Args:
        raw_path: Course folder as given by the user
        cwd: Base directory (defaults to the process working directory)

    Returns:
        CoursePaths for the resolved folder

    Raises:
        CourseNotFoundError: If the path doesn't exist
        CourseNotADirectoryError: If the path is not a directory
    """
    base = cwd if cwd is not None else Path.cwd()
    resolved = Path(os.path.abspath(base / raw_path))
    if not resolved.exists():
        raise CourseNotFoundError(str(resolved))
    if not resolved.is_dir():
        raise CourseNotADirectoryError(str(resolved))
    return CoursePaths.for_root(resolved)


def course_prefix(course_id: str) -> str:
    """Public URL prefix of a course, e.g. ``/courses/intro-python/``."""
    return f"{COURSE_URL_PREFIX}{course_id}/"


def strip_course_prefix(content_path: str, course_id: str) -> str:
    """Turn ``/courses/{courseId}/01_a/x.md`` into ``01_a/x.md``.

    Paths without the prefix are returned unchanged.
    """
    prefix = course_prefix(course_id)
    if content_path.startswith(prefix):
        return content_path[len(prefix):]
    return content_path


def resolve_in_course(root: Path, relative_path: str) -> Path:
    """Join a course-relative path onto the course root.

    Leading slashes are dropped so the result always stays under root.
    """
    return root / relative_path.lstrip("/")


def top_level_directories(root: Path) -> list[Path]:
    """Directories directly under root, sorted by name."""
    return sorted((entry for entry in root.iterdir() if entry.is_dir()), key=lambda p: p.name)


def module_directories(root: Path) -> list[Path]:
    """Top-level directories following the ``##_Name`` convention."""
    return [entry for entry in top_level_directories(root) if follows_naming_convention(entry.name)]
