"""Validation layer for course folders.

This module exports validation components:
- Manifest and module/lesson graph validation
- Quiz file validation
- Markdown content and diagram validation
- Filesystem sweep (orphans, naming) and directory structure checks
- The validate_course pipeline tying them together
"""

from course_validator.validation.course import validate_course
from course_validator.validation.diagrams import DiagramParser, MermaidCliParser, diagram_type
from course_validator.validation.filesystem import sweep_module_files, validate_directory_structure
from course_validator.validation.lessons import validate_lesson, validate_modules
from course_validator.validation.manifest import has_modules, validate_manifest
from course_validator.validation.markdown import validate_markdown_content
from course_validator.validation.quiz import validate_question, validate_quiz_file

__all__ = [
    # Pipeline
    "validate_course",
    # Manifest graph
    "has_modules",
    "validate_manifest",
    "validate_lesson",
    "validate_modules",
    # Quiz
    "validate_question",
    "validate_quiz_file",
    # Markdown
    "validate_markdown_content",
    "DiagramParser",
    "MermaidCliParser",
    "diagram_type",
    # Filesystem
    "sweep_module_files",
    "validate_directory_structure",
]
