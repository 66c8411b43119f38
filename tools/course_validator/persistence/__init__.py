"""Persistence layer for course folders.

This module exports file I/O and path components:
- JSON reading into Ok/Err results
- CoursePaths resolution and content URL mapping
"""

from course_validator.persistence.course_paths import (
    CoursePaths,
    course_prefix,
    module_directories,
    resolve_course_paths,
    resolve_in_course,
    strip_course_prefix,
    top_level_directories,
)
from course_validator.persistence.json_io import read_json, read_text

__all__ = [
    # JSON I/O
    "read_json",
    "read_text",
    # Course Paths
    "CoursePaths",
    "course_prefix",
    "module_directories",
    "resolve_course_paths",
    "resolve_in_course",
    "strip_course_prefix",
    "top_level_directories",
]
