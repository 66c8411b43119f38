"""Typed error hierarchy with explicit failure states.

This module provides a consistent Result/Error pattern for the validator:
- All domain errors extend CourseValidatorError and carry structured context
- File reads return Ok/Err so validators can turn failures into diagnostics
- Only CLI-boundary errors (bad course path) are raised out of main()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Result Type
# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    """Failed result containing an error.

    Invariants:
        - error is always a CourseValidatorError subclass
    """
    error: "CourseValidatorError"


Result = Union[Ok[T], Err]
"""Discriminated union for operation results. Check with isinstance(result, Ok)."""


# -----------------------------------------------------------------------------
# Error Hierarchy
# -----------------------------------------------------------------------------

class CourseValidatorError(RuntimeError):
    """Base error for all validator operations.

    Never raise a raw CourseValidatorError; always use a specific subclass.
    """
    pass


class CourseNotFoundError(CourseValidatorError):
    """The course folder given on the command line does not exist.

    Attributes:
        path: The resolved path that was expected to exist
    """
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Course folder not found: {path}")


class CourseNotADirectoryError(CourseValidatorError):
    """The course path exists but is a file."""
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path is not a directory: {path}")


class MissingFileError(CourseValidatorError):
    """A file referenced by the course does not exist on disk.

    Attributes:
        path: The path that was expected to exist
    """
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class InvalidJsonError(CourseValidatorError):
    """JSON parsing failed.

    Attributes:
        path: The file that failed to parse
        detail: Parser error message
    """
    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(detail)


class DiagramSyntaxError(CourseValidatorError):
    """The diagram parser rejected a diagram block.

    Attributes:
        detail: Full (possibly multi-line) parser message
    """
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)

    @property
    def first_line(self) -> str:
        """First line of the parser message, for single-line reports."""
        return self.detail.split("\n")[0]


class DiagramParserUnavailableError(CourseValidatorError):
    """The diagram parser could not run (not installed, timed out)."""
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)
