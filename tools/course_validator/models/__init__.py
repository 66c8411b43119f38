"""Domain models for course content.

This module exports:
- Markdown node variants and the mistune-backed tokenizer
- Common naming and format predicates
"""

from course_validator.models.common import (
    as_object,
    follows_naming_convention,
    format_sequence,
    id_key,
    is_hex_color,
    is_number,
    is_sequential,
)
from course_validator.models.markdown import (
    CodeBlock,
    Container,
    Heading,
    Image,
    Node,
    code_blocks,
    headings,
    images,
    parse_markdown,
    walk,
)

__all__ = [
    # Common
    "as_object",
    "follows_naming_convention",
    "format_sequence",
    "id_key",
    "is_hex_color",
    "is_number",
    "is_sequential",
    # Markdown
    "CodeBlock",
    "Container",
    "Heading",
    "Image",
    "Node",
    "code_blocks",
    "headings",
    "images",
    "parse_markdown",
    "walk",
]
