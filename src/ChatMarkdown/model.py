from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class Block:
    """Base class for block-level nodes."""


@dataclass
class Document:
    blocks: List[Block] = field(default_factory=list)


@dataclass
class CodeBlock(Block):
    language: str | None
    raw: str


@dataclass
class Heading(Block):
    level: int
    inline: List["InlineElement"]


@dataclass
class HorizontalRule(Block):
    """Horizontal rule / thematic break."""


@dataclass
class Blockquote(Block):
    depth: int
    children: List[Block] = field(default_factory=list)


@dataclass
class TaskItem:
    checked: bool
    inline: List["InlineElement"]


@dataclass
class TaskList(Block):
    items: List[TaskItem]


@dataclass
class UnorderedList(Block):
    items: List[List["InlineElement"]]


@dataclass
class Paragraph(Block):
    """One inline sequence per source line; lines are joined by forced breaks."""

    lines: List[List["InlineElement"]]


@dataclass
class InlineElement:
    """Base class for inline nodes."""


@dataclass
class InlineText(InlineElement):
    text: str


@dataclass
class InlineSpan(InlineElement):
    """Inline node wrapping nested children."""

    children: List[InlineElement]


@dataclass
class InlineBold(InlineSpan):
    pass


@dataclass
class InlineItalic(InlineSpan):
    pass


@dataclass
class InlineBoldItalic(InlineSpan):
    pass


@dataclass
class InlineStrike(InlineSpan):
    pass
