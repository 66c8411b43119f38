"""Diagram syntax checking.

Mermaid blocks are checked by the mermaid CLI (``mmdc`` from
@mermaid-js/mermaid-cli), run as a subprocess. Any object with an async
``parse(text)`` method can stand in for it, which is how tests run without
Node.js installed.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import shlex
import tempfile
from pathlib import Path
from typing import Protocol, Sequence

from course_validator.config import (
    DEFAULT_MERMAID_CLI,
    DIAGRAM_TIMEOUT_SECONDS,
    MERMAID_CLI_ENV,
    MERMAID_SYNTAX_ERROR_MARKERS,
    MERMAID_TIMEOUT_ENV,
)
from course_validator.errors import DiagramParserUnavailableError, DiagramSyntaxError

logger = logging.getLogger(__name__)

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


class DiagramParser(Protocol):
    """Syntax checker for one diagram block.

    ``parse`` returns None on success and raises DiagramSyntaxError with a
    (possibly multi-line) message when the diagram is invalid. It raises
    DiagramParserUnavailableError when the check itself could not run.
    """

    async def parse(self, text: str) -> None: ...


def diagram_type(text: str) -> str:
    """First token of the diagram's first line, e.g. ``flowchart`` or ``sequenceDiagram``."""
    stripped = text.strip()
    first_line = stripped.split("\n")[0].strip() if stripped else ""
    return re.split(r"[\s{]", first_line, maxsplit=1)[0]


class MermaidCliParser:
    """Check mermaid syntax by rendering the block with the mermaid CLI.

    Attributes:
        command: CLI invocation, e.g. ``["mmdc"]`` or
            ``["npx", "-y", "@mermaid-js/mermaid-cli"]``
        timeout: Seconds to wait for one diagram before giving up
    """

    def __init__(
        self,
        command: Sequence[str] = (DEFAULT_MERMAID_CLI,),
        timeout: float = DIAGRAM_TIMEOUT_SECONDS,
    ) -> None:
        self.command = list(command)
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> "MermaidCliParser":
        """Build a parser from COURSE_VALIDATOR_MERMAID_CLI / _TIMEOUT."""
        command = shlex.split(os.environ.get(MERMAID_CLI_ENV, DEFAULT_MERMAID_CLI))
        raw_timeout = os.environ.get(MERMAID_TIMEOUT_ENV)
        timeout = float(raw_timeout) if raw_timeout else DIAGRAM_TIMEOUT_SECONDS
        return cls(command=command, timeout=timeout)

    async def parse(self, text: str) -> None:
        """Render ``text`` to a throwaway SVG and classify a non-zero exit.

        Raises:
            DiagramSyntaxError: If the CLI reported a mermaid parser error
            DiagramParserUnavailableError: If the CLI is missing, cannot be
                started, timed out or failed for any other reason
        """
        with tempfile.TemporaryDirectory(prefix="course-validator-") as workdir:
            source = Path(workdir) / "diagram.mmd"
            target = Path(workdir) / "diagram.svg"
            source.write_text(text, encoding="utf-8")
            cmd = [*self.command, "--quiet", "-i", str(source), "-o", str(target)]
            logger.debug(f"Running {' '.join(cmd)}")

            try:
                process = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except FileNotFoundError as exc:
                raise DiagramParserUnavailableError(
                    f"{self.command[0]} not found. Is @mermaid-js/mermaid-cli installed?"
                ) from exc
            except OSError as exc:
                raise DiagramParserUnavailableError(
                    f"{self.command[0]} could not be started: {exc}"
                ) from exc

            try:
                _, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
            except asyncio.TimeoutError as exc:
                process.kill()
                await process.wait()
                raise DiagramParserUnavailableError(
                    f"{self.command[0]} timed out after {self.timeout:g}s"
                ) from exc

        if process.returncode != 0:
            stderr_text = _ANSI_ESCAPE.sub("", stderr.decode("utf-8", errors="replace")).strip()
            logger.debug(f"mermaid CLI stderr: {stderr_text}")
            message = _error_message(stderr_text, process.returncode)
            if any(marker in stderr_text for marker in MERMAID_SYNTAX_ERROR_MARKERS):
                raise DiagramSyntaxError(message)
            raise DiagramParserUnavailableError(
                f"{self.command[0]} failed: {message.splitlines()[0]}"
            )


def _error_message(stderr_text: str, returncode: int | None) -> str:
    """Drop the CLI's generic prefix lines and keep the parser message."""
    lines = [line.strip() for line in stderr_text.splitlines() if line.strip()]
    for index, line in enumerate(lines):
        if any(marker in line for marker in MERMAID_SYNTAX_ERROR_MARKERS) or "error" in line.lower():
            message = line.removeprefix("Error: ").strip()
            return "\n".join([message, *lines[index + 1:]])
    if lines:
        return "\n".join(lines)
    return f"mermaid CLI exited with code {returncode}"
