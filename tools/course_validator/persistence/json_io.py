"""JSON and text file reading for course content.

Reads never raise for content problems: a missing file or malformed JSON comes
back as an Err so that validators can turn it into a diagnostic and move on.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from course_validator.errors import Err, InvalidJsonError, MissingFileError, Ok, Result

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Result[Any]:
    """Read and parse a UTF-8 JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Ok with the parsed value, or Err carrying:
        - MissingFileError if the file doesn't exist
        - InvalidJsonError if it can't be decoded or parsed
    """
    if not path.is_file():
        return Err(MissingFileError(str(path)))

    logger.debug(f"Reading {path}")
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return Err(InvalidJsonError(str(path), str(exc)))

    try:
        return Ok(json.loads(raw))
    except json.JSONDecodeError as exc:
        return Err(InvalidJsonError(str(path), str(exc)))


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, dropping a leading BOM and replacing undecodable bytes."""
    return path.read_text(encoding="utf-8-sig", errors="replace")
