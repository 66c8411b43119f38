"""Module and lesson graph validation.

Walks the module -> lesson tree declared in the manifest in one pass:
- Module and lesson ID uniqueness
- 1-based index sequencing for modules and for lessons within a module
- Lesson ID composition ({moduleId}|||{fileName}) and moduleId back-references
- markdownPath / quizPath conventions and on-disk existence

Validation is best effort: a bad record is reported and the walk continues.
The return value is the set of course-relative paths the manifest references,
used later to detect orphaned files.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from course_validator.config import LESSON_ID_SEPARATOR, LESSON_TYPES, NAMING_CONVENTION_LABEL
from course_validator.diagnostics import Diagnostics
from course_validator.models.common import (
    as_object,
    follows_naming_convention,
    format_sequence,
    id_key,
    is_sequential,
)
from course_validator.persistence.course_paths import (
    CoursePaths,
    course_prefix,
    resolve_in_course,
    strip_course_prefix,
)
from course_validator.validation.quiz import validate_quiz_file

logger = logging.getLogger(__name__)

QuizValidator = Callable[..., None]


def _field_summary(entry: dict[str, Any], names: tuple[str, ...]) -> str:
    """Compact JSON of the named fields that are present, e.g. ``{"id": "01_a"}``."""
    present = {name: entry[name] for name in names if entry.get(name) is not None}
    return json.dumps(present, default=str)


def _all_indexed(entries: list[dict[str, Any]]) -> bool:
    return all("index" in entry for entry in entries)


def _check_module_indices(modules: list[dict[str, Any]], diagnostics: Diagnostics) -> None:
    if not _all_indexed(modules):
        diagnostics.warn("Module indices not present; will be inferred from array position")
        return

    indices = [module["index"] for module in modules]
    expected = list(range(1, len(modules) + 1))
    if is_sequential(indices):
        diagnostics.pass_("Module indices are sequential (1-based)")
    else:
        diagnostics.error(
            f"Module indices are not sequential. "
            f"Expected {format_sequence(expected)}, got {format_sequence(indices)}"
        )


def _check_lesson_indices(
    module_id: Any, lessons: list[dict[str, Any]], diagnostics: Diagnostics
) -> None:
    """Lessons are only checked when every lesson declares an index."""
    if not _all_indexed(lessons):
        return

    indices = [lesson["index"] for lesson in lessons]
    if not is_sequential(indices):
        expected = list(range(1, len(lessons) + 1))
        diagnostics.error(
            f'Lesson indices in module "{module_id}" are not sequential. '
            f"Expected {format_sequence(expected)}, got {format_sequence(indices)}"
        )


def _check_content_path(
    lesson: dict[str, Any],
    field_name: str,
    label: str,
    paths: CoursePaths,
    manifest_id: Any,
    referenced: set[str],
    diagnostics: Diagnostics,
) -> str | None:
    """Validate a markdownPath/quizPath and record it as referenced.

    Returns:
        The course-relative path if the file exists, else None
    """
    lesson_id = lesson["id"]
    raw_path = lesson.get(field_name)
    if not raw_path:
        diagnostics.error(f'{label} lesson "{lesson_id}" missing {field_name}')
        return None

    content_path = str(raw_path)
    course_id = str(manifest_id)
    if not content_path.startswith(course_prefix(course_id)):
        diagnostics.error(
            f'Lesson "{lesson_id}" {field_name} does not follow /courses/{{courseId}}/... pattern'
        )

    relative = strip_course_prefix(content_path, course_id)
    referenced.add(relative)
    if not resolve_in_course(paths.root, relative).is_file():
        diagnostics.error(f'Lesson "{lesson_id}": {field_name} file not found: {relative}')
        return None
    return relative


def validate_lesson(
    module_id: Any,
    lesson: dict[str, Any],
    paths: CoursePaths,
    manifest_id: Any,
    seen_lesson_ids: set[Any],
    referenced: set[str],
    diagnostics: Diagnostics,
    quiz_validator: QuizValidator = validate_quiz_file,
) -> None:
    """Validate one lesson entry of a module.

    Args:
        module_id: ID of the owning module
        lesson: Lesson object from the manifest
        paths: Resolved course paths
        manifest_id: Course ID declared by the manifest
        seen_lesson_ids: Lesson IDs seen so far across all modules (updated)
        referenced: Referenced course-relative paths (updated)
        diagnostics: Log to append findings to
        quiz_validator: Called as quiz_validator(path, diagnostics, lesson_id=...)
            for every existing quiz file
    """
    lesson_id = lesson.get("id")
    if not lesson_id or not lesson.get("title") or not lesson.get("type"):
        summary = _field_summary(lesson, ("id", "title", "type"))
        diagnostics.error(f"Lesson missing required fields (id, title, type): {summary}")
        return

    key = id_key(lesson_id)
    if key in seen_lesson_ids:
        diagnostics.error(f'Duplicate lesson ID: "{lesson_id}"')
    seen_lesson_ids.add(key)

    declared_module = lesson.get("moduleId")
    if declared_module and declared_module != module_id:
        diagnostics.error(
            f'Lesson "{lesson_id}" has moduleId "{declared_module}" but is in module "{module_id}"'
        )

    lesson_id_text = str(lesson_id)
    if LESSON_ID_SEPARATOR not in lesson_id_text:
        diagnostics.error(
            f'Lesson ID "{lesson_id}" does not use {{moduleId}}{LESSON_ID_SEPARATOR}{{fileName}} format'
        )
    else:
        id_module_part = lesson_id_text.split(LESSON_ID_SEPARATOR, 1)[0]
        if id_module_part != module_id:
            diagnostics.error(
                f'Lesson ID "{lesson_id}": module part does not match parent module "{module_id}"'
            )

    lesson_type = lesson["type"]
    if lesson_type not in LESSON_TYPES:
        diagnostics.error(
            f'Lesson "{lesson_id}" has invalid type "{lesson_type}". '
            f"Expected: {', '.join(LESSON_TYPES)}"
        )

    if lesson_type == "content":
        _check_content_path(
            lesson, "markdownPath", "Content", paths, manifest_id, referenced, diagnostics
        )
    elif lesson_type == "quiz":
        relative = _check_content_path(
            lesson, "quizPath", "Quiz", paths, manifest_id, referenced, diagnostics
        )
        if relative is not None:
            quiz_validator(resolve_in_course(paths.root, relative), diagnostics, lesson_id=lesson_id_text)


def validate_modules(
    manifest: dict[str, Any],
    paths: CoursePaths,
    diagnostics: Diagnostics,
    quiz_validator: QuizValidator = validate_quiz_file,
) -> set[str]:
    """Validate every module and lesson declared in the manifest.

    Args:
        manifest: Parsed manifest with a non-empty module list
        paths: Resolved course paths
        diagnostics: Log to append findings to
        quiz_validator: Deep validator for referenced quiz files

    Returns:
        Course-relative paths of every markdownPath/quizPath, whether or not
        the file exists
    """
    modules = [as_object(module) for module in manifest["modules"]]
    manifest_id = manifest.get("id")
    seen_module_ids: set[Any] = set()
    seen_lesson_ids: set[Any] = set()
    referenced: set[str] = set()

    _check_module_indices(modules, diagnostics)

    for module in modules:
        module_id = module.get("id")
        if not module_id or not module.get("title"):
            summary = _field_summary(module, ("id", "title"))
            diagnostics.error(f"Module missing required fields (id, title): {summary}")
            continue

        key = id_key(module_id)
        if key in seen_module_ids:
            diagnostics.error(f'Duplicate module ID: "{module_id}"')
        seen_module_ids.add(key)

        if not resolve_in_course(paths.root, str(module_id)).exists():
            diagnostics.error(f"Module directory not found: {module_id}/")

        if not follows_naming_convention(module_id):
            diagnostics.warn(
                f'Module ID "{module_id}" does not follow {NAMING_CONVENTION_LABEL} pattern'
            )

        lessons = module.get("lessons")
        if not isinstance(lessons, list) or len(lessons) == 0:
            diagnostics.warn(f'Module "{module_id}" has no lessons')
            continue
        lessons = [as_object(lesson) for lesson in lessons]

        _check_lesson_indices(module_id, lessons, diagnostics)

        logger.debug(f"Module {module_id}: {len(lessons)} lessons")
        for lesson in lessons:
            validate_lesson(
                module_id,
                lesson,
                paths,
                manifest_id,
                seen_lesson_ids,
                referenced,
                diagnostics,
                quiz_validator,
            )

    diagnostics.pass_(f"All {len(seen_lesson_ids)} lesson IDs are unique")
    return referenced
