"""Common predicates shared across validators.

This module defines the naming and format checks used by both the manifest
graph validator and the filesystem sweep.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from course_validator.config import HEX_COLOR_REGEX, NAMING_CONVENTION_REGEX


def follows_naming_convention(value: Any) -> bool:
    """Check if a module ID, directory or file name starts with ``##_``.

    Args:
        value: The raw name to check

    Returns:
        True if the name starts with two digits and an underscore

    Example:
        >>> follows_naming_convention("01_intro")
        True
        >>> follows_naming_convention("intro")
        False
    """
    return isinstance(value, str) and bool(NAMING_CONVENTION_REGEX.match(value))


def is_hex_color(value: Any) -> bool:
    """Check if a value is a 3- or 6-digit hex color such as ``#0af`` or ``#00AAFF``."""
    return isinstance(value, str) and bool(HEX_COLOR_REGEX.match(value))


def is_number(value: Any) -> bool:
    """Check if a JSON value is a number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequential(indices: list[Any]) -> bool:
    """Check that declared indices are exactly ``[1..N]`` in order."""
    expected = list(range(1, len(indices) + 1))
    return all(is_number(value) for value in indices) and indices == expected


def format_sequence(values: list[Any]) -> str:
    """Format a sequence for messages, e.g. ``[1,2,3]``."""
    return "[" + ",".join(str(value) for value in values) + "]"


def as_object(value: Any) -> dict[str, Any]:
    """Treat non-object JSON values as objects with no fields."""
    return value if isinstance(value, dict) else {}


def id_key(value: Any) -> Any:
    """Key for ID sets; unhashable JSON values (lists, objects) use their repr."""
    return value if isinstance(value, Hashable) else repr(value)
