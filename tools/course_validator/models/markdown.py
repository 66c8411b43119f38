"""Markdown block tree used by the content validator.

Markdown is tokenized with mistune's AST renderer and converted into a closed
set of node variants:
- Heading: level and plain text
- Image: href and alt text
- CodeBlock: fenced or indented code with its language tag
- Container: anything with nested tokens (paragraphs, emphasis, links,
  lists, list items, block quotes)

Leaves that none of the validators care about (text, breaks, raw HTML) are
dropped during conversion. Text is only kept inside headings and images.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union
from urllib.parse import unquote

import mistune

_parse_ast = mistune.create_markdown(renderer="ast")


# -----------------------------------------------------------------------------
# Node Variants
# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Heading:
    """ATX or setext heading.

    Invariants:
        - level is between 1 and 6
        - children holds inline nodes such as images
    """
    level: int
    text: str
    children: list["Node"] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """No visible text and no inline image."""
        if self.text.strip():
            return False
        return not any(isinstance(node, Image) for node in walk(self.children))


@dataclass(frozen=True, slots=True)
class Image:
    href: str
    alt: str


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Code block. ``lang`` is the first word of the fence info string, or ""."""
    lang: str
    text: str


@dataclass(frozen=True, slots=True)
class Container:
    """Any token with children, e.g. ``paragraph``, ``list_item``, ``emphasis``."""
    kind: str
    children: list["Node"] = field(default_factory=list)


Node = Union[Heading, Image, CodeBlock, Container]
"""Discriminated union for markdown nodes. Check with isinstance()."""


# -----------------------------------------------------------------------------
# Conversion
# -----------------------------------------------------------------------------

def _plain_text(tokens: list[dict[str, Any]]) -> str:
    """Concatenate the raw text of inline tokens."""
    parts: list[str] = []
    for token in tokens:
        if "raw" in token:
            parts.append(str(token["raw"]))
        if token.get("children"):
            parts.append(_plain_text(token["children"]))
    return "".join(parts)


def _convert(token: dict[str, Any]) -> Node | None:
    kind = token.get("type", "")
    attrs = token.get("attrs") or {}
    children = token.get("children") or []

    if kind == "heading":
        return Heading(
            level=int(attrs.get("level", 1)),
            text=_plain_text(children),
            children=convert_tokens(children),
        )
    if kind == "image":
        return Image(href=unquote(str(attrs.get("url", ""))), alt=_plain_text(children))
    if kind == "block_code":
        info = str(attrs.get("info") or "").strip()
        lang = info.split()[0] if info else ""
        return CodeBlock(lang=lang, text=str(token.get("raw", "")))
    if children:
        return Container(kind=kind, children=convert_tokens(children))
    return None


def convert_tokens(tokens: list[dict[str, Any]]) -> list[Node]:
    """Convert mistune AST tokens into markdown nodes, dropping plain leaves."""
    nodes: list[Node] = []
    for token in tokens:
        node = _convert(token)
        if node is not None:
            nodes.append(node)
    return nodes


def parse_markdown(content: str) -> list[Node]:
    """Tokenize markdown content into top-level block nodes.

    Args:
        content: Raw markdown text

    Returns:
        Top-level nodes in document order
    """
    tokens = _parse_ast(content)
    return convert_tokens(tokens)


# -----------------------------------------------------------------------------
# Traversal
# -----------------------------------------------------------------------------

def walk(nodes: list[Node]) -> Iterator[Node]:
    """Yield every node depth-first, in document order, using an explicit stack."""
    stack: list[Node] = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, (Container, Heading)):
            stack.extend(reversed(node.children))


def headings(nodes: list[Node]) -> list[Heading]:
    """Top-level headings in document order."""
    return [node for node in nodes if isinstance(node, Heading)]


def images(nodes: list[Node]) -> list[Image]:
    """Every image at any depth, in document order."""
    return [node for node in walk(nodes) if isinstance(node, Image)]


def code_blocks(nodes: list[Node], lang: str) -> list[CodeBlock]:
    """Every code block tagged with ``lang`` at any depth, in document order."""
    return [node for node in walk(nodes) if isinstance(node, CodeBlock) and node.lang == lang]
