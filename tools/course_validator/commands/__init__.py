"""CLI commands for course validation.

This module exports all command handlers:
- validate: Full course validation with a console report
"""

from course_validator.commands.validate import cmd_validate

__all__ = [
    "cmd_validate",
]
