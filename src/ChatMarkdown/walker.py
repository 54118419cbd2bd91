from __future__ import annotations

from typing import Iterable, Iterator, List

from .model import (
    Block,
    Blockquote,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    InlineBold,
    InlineBoldItalic,
    InlineElement,
    InlineItalic,
    InlineSpan,
    InlineStrike,
    InlineText,
    Paragraph,
    TaskList,
    UnorderedList,
)

INDENT = "  "

_SPAN_NAMES = {
    InlineBold: "bold",
    InlineItalic: "italic",
    InlineBoldItalic: "bold-italic",
    InlineStrike: "strike",
}


def iter_blocks(blocks: Iterable[Block], depth: int = 0) -> Iterator[tuple[Block, int]]:
    """Yield ``(block, quote_depth)`` pairs depth-first, descending into quotes."""
    for block in blocks:
        yield block, depth
        if isinstance(block, Blockquote):
            yield from iter_blocks(block.children, block.depth)


def iter_inline(inlines: Iterable[InlineElement]) -> Iterator[InlineElement]:
    for inline in inlines:
        yield inline
        if isinstance(inline, InlineSpan):
            yield from iter_inline(inline.children)


def inline_to_text(inlines: Iterable[InlineElement]) -> str:
    return "".join(inline.text for inline in iter_inline(inlines) if isinstance(inline, InlineText))


def document_to_text(doc: Document) -> str:
    """Marker-free text of the whole document, one block per paragraph."""
    parts: list[str] = []
    for block, _ in iter_blocks(doc.blocks):
        if isinstance(block, Heading):
            parts.append(inline_to_text(block.inline))
        elif isinstance(block, Paragraph):
            parts.append("\n".join(inline_to_text(line) for line in block.lines))
        elif isinstance(block, UnorderedList):
            parts.append("\n".join(inline_to_text(item) for item in block.items))
        elif isinstance(block, TaskList):
            parts.append("\n".join(inline_to_text(item.inline) for item in block.items))
        elif isinstance(block, CodeBlock):
            parts.append(block.raw)
    return "\n\n".join(parts)


def outline(doc: Document) -> str:
    """Render the tree as indented text, one node per line."""
    lines: List[str] = []
    for block in doc.blocks:
        _outline_block(block, 0, lines)
    return "\n".join(lines)


def _outline_block(block: Block, level: int, out: List[str]) -> None:
    pad = INDENT * level
    if isinstance(block, CodeBlock):
        out.append(f"{pad}code[{block.language or ''}] {block.raw!r}")
    elif isinstance(block, Heading):
        out.append(f"{pad}h{block.level} {_outline_inline(block.inline)}")
    elif isinstance(block, HorizontalRule):
        out.append(f"{pad}rule")
    elif isinstance(block, Blockquote):
        out.append(f"{pad}quote depth={block.depth}")
        for child in block.children:
            _outline_block(child, level + 1, out)
    elif isinstance(block, TaskList):
        out.append(f"{pad}tasks")
        for item in block.items:
            mark = "x" if item.checked else " "
            out.append(f"{pad}{INDENT}[{mark}] {_outline_inline(item.inline)}")
    elif isinstance(block, UnorderedList):
        out.append(f"{pad}list")
        for item in block.items:
            out.append(f"{pad}{INDENT}- {_outline_inline(item)}")
    elif isinstance(block, Paragraph):
        out.append(f"{pad}paragraph")
        for line in block.lines:
            out.append(f"{pad}{INDENT}{_outline_inline(line)}")


def _outline_inline(inlines: Iterable[InlineElement]) -> str:
    parts: list[str] = []
    for inline in inlines:
        if isinstance(inline, InlineText):
            parts.append(repr(inline.text))
        elif isinstance(inline, InlineSpan):
            parts.append(f"{_SPAN_NAMES[type(inline)]}({_outline_inline(inline.children)})")
    return " ".join(parts)
