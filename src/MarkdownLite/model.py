from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Block:
    """Base class for block-level nodes."""


@dataclass(frozen=True)
class InlineElement:
    """Base class for inline nodes."""


InlineSequence = Tuple[InlineElement, ...]


@dataclass(frozen=True)
class Document:
    blocks: Tuple[Block, ...] = ()


@dataclass(frozen=True)
class Header(Block):
    level: int
    inline: InlineSequence


@dataclass(frozen=True)
class ThematicBreak(Block):
    """Horizontal rule / thematic break."""


@dataclass(frozen=True)
class ListBlock(Block):
    items: Tuple[InlineSequence, ...]
    ordered: bool


@dataclass(frozen=True)
class CodeBlock(Block):
    lines: Tuple[str, ...]


@dataclass(frozen=True)
class Paragraph(Block):
    """One inline sequence per physical source line."""

    lines: Tuple[InlineSequence, ...]


@dataclass(frozen=True)
class InlineText(InlineElement):
    text: str


@dataclass(frozen=True)
class InlineBold(InlineElement):
    children: InlineSequence


@dataclass(frozen=True)
class InlineItalic(InlineElement):
    children: InlineSequence


@dataclass(frozen=True)
class InlineLink(InlineElement):
    text: str
    url: str
