"""Markdown content validation.

Checks one markdown file's heading hierarchy, image references and embedded
mermaid diagrams. Diagram checks are awaited one at a time so diagnostics
follow the order of the blocks in the source.
"""

from __future__ import annotations

import logging

from course_validator.config import COURSE_URL_PREFIX, DIAGRAM_LANGUAGE, EXTERNAL_URL_REGEX
from course_validator.diagnostics import Diagnostics
from course_validator.errors import DiagramParserUnavailableError, DiagramSyntaxError
from course_validator.models.markdown import (
    Heading,
    Image,
    Node,
    code_blocks,
    headings,
    images,
    parse_markdown,
)
from course_validator.persistence.course_paths import (
    CoursePaths,
    resolve_in_course,
    strip_course_prefix,
)
from course_validator.validation.diagrams import DiagramParser, diagram_type

logger = logging.getLogger(__name__)


def check_headings(relative_path: str, found: list[Heading], diagnostics: Diagnostics) -> None:
    """Heading hierarchy: H1 first, no empty headings, no skipped levels."""
    if not found:
        return

    if found[0].level != 1:
        diagnostics.warn(f'"{relative_path}" first heading is H{found[0].level}, expected H1')

    for heading in found:
        if heading.is_empty:
            diagnostics.error(f'"{relative_path}" contains an empty H{heading.level} heading')

    for previous, current in zip(found, found[1:]):
        if current.level > previous.level + 1:
            diagnostics.warn(
                f'"{relative_path}" skips heading level: H{previous.level} → H{current.level}'
            )


def check_images(
    relative_path: str,
    found: list[Image],
    paths: CoursePaths,
    diagnostics: Diagnostics,
) -> None:
    """External images are warned about; ``/courses/...`` images must exist."""
    for image in found:
        if EXTERNAL_URL_REGEX.match(image.href):
            diagnostics.warn(f'"{relative_path}" references external image: {image.href}')
        elif image.href.startswith(COURSE_URL_PREFIX):
            asset_relative = strip_course_prefix(image.href, paths.course_id)
            if not resolve_in_course(paths.root, asset_relative).exists():
                diagnostics.error(
                    f'"{relative_path}" references missing image: {image.href} '
                    f"(expected at {asset_relative})"
                )


async def check_diagrams(
    relative_path: str,
    nodes: list[Node],
    diagram_parser: DiagramParser,
    diagnostics: Diagnostics,
) -> None:
    """Syntax-check every mermaid block, strictly in document order."""
    blocks = code_blocks(nodes, DIAGRAM_LANGUAGE)
    for number, block in enumerate(blocks, start=1):
        label = f'"{relative_path}" {DIAGRAM_LANGUAGE} diagram {number}'
        try:
            await diagram_parser.parse(block.text)
        except DiagramSyntaxError as exc:
            diagnostics.error(f"{label} has syntax error: {exc.first_line}")
        except DiagramParserUnavailableError as exc:
            diagnostics.warn(f"{label} was not checked: {exc}")
        else:
            diagnostics.pass_(f"{label} is valid ({diagram_type(block.text)})")


async def validate_markdown_content(
    content: str,
    relative_path: str,
    paths: CoursePaths,
    diagnostics: Diagnostics,
    diagram_parser: DiagramParser,
) -> None:
    """Validate the structure of one markdown file.

    Args:
        content: Raw file content
        relative_path: Course-relative path used in messages (e.g. ``01_a/01_b.md``)
        paths: Resolved course paths, for resolving image references
        diagnostics: Log to append findings to
        diagram_parser: Syntax checker for mermaid blocks
    """
    nodes = parse_markdown(content)
    logger.debug(f"{relative_path}: {len(nodes)} top-level blocks")

    check_headings(relative_path, headings(nodes), diagnostics)
    check_images(relative_path, images(nodes), paths, diagnostics)
    await check_diagrams(relative_path, nodes, diagram_parser, diagnostics)
