from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Sequence

from .inline_parser import format_inline
from .model import (
    Block,
    Blockquote,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Paragraph,
    TaskItem,
    TaskList,
    UnorderedList,
)

FENCE = "```"
RULE_MARKERS = {"---", "___", "***"}
# Deeper quote markers are kept as literal text; the node tree stays shallow
# enough for recursive walks and comparisons.
MAX_QUOTE_DEPTH = 32

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)")
_QUOTE_PREFIX_RE = re.compile(r"^>\s?")
_TASK_RE = re.compile(r"^- \[(x| )\] (.*)", re.IGNORECASE)
_BULLET_RE = re.compile(r"^(\*|-)\s+(.*)")


@dataclass(frozen=True)
class BlockRule:
    """A block kind: a start predicate and a consumer of its line group.

    ``consume`` receives the lines and the index of the starting line and
    returns the produced block plus the index of the first line it did not
    take.
    """

    name: str
    matches: Callable[[str], bool]
    consume: Callable[[Sequence[str], int], tuple[Block, int]]


def segment(text: str) -> Document:
    """Split text into block nodes, trying the block rules in priority order."""
    if not text:
        return Document(blocks=[])
    # Lines keep a trailing "\r" so code blocks stay byte-exact; it is dropped
    # wherever a line is classified or formatted.
    lines = text.split("\n")
    blocks: List[Block] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if _is_blank(line):
            i += 1
            continue
        rule = _rule_for(line)
        if rule is None:
            block, i = _consume_paragraph(lines, i)
        else:
            block, i = rule.consume(lines, i)
        blocks.append(block)
    return Document(blocks=blocks)


def parse_markdown(text: str) -> Document:
    return segment(text)


def parse_quote_body(lines: Sequence[str], depth: int) -> Blockquote:
    """Build a blockquote from lines already stripped of ``depth - 1`` markers.

    A contiguous run of lines that still start with ``>`` becomes a nested
    quote one level deeper; other lines form paragraphs split on blank lines.
    Nesting stops at ``MAX_QUOTE_DEPTH``: further markers stay literal text.
    """
    root = Blockquote(depth=depth, children=[])
    # Open quotes, innermost last, each with its pending paragraph lines
    stack: list[tuple[Blockquote, list[str]]] = [(root, [])]
    for line in lines:
        target = depth
        while target < MAX_QUOTE_DEPTH and line.startswith(">"):
            line = _strip_quote_marker(line)
            target += 1
        while stack[-1][0].depth > target:
            _flush_paragraph(*stack.pop())
        while stack[-1][0].depth < target:
            parent, pending = stack[-1]
            _flush_paragraph(parent, pending)
            nested = Blockquote(depth=parent.depth + 1, children=[])
            parent.children.append(nested)
            stack.append((nested, []))
        quote, pending = stack[-1]
        if _is_blank(line):
            _flush_paragraph(quote, pending)
        else:
            pending.append(line)
    while stack:
        _flush_paragraph(*stack.pop())
    return root


def is_task_line(line: str) -> bool:
    return _TASK_RE.match(line) is not None


def is_bullet_line(line: str) -> bool:
    return _BULLET_RE.match(line) is not None and not is_task_line(line)


def _is_blank(line: str) -> bool:
    return not line.strip()


def _is_fence(line: str) -> bool:
    return line.startswith(FENCE)


def _is_heading(line: str) -> bool:
    return _HEADING_RE.match(line) is not None


def _is_rule(line: str) -> bool:
    return line.strip() in RULE_MARKERS


def _is_quote(line: str) -> bool:
    return line.startswith(">")


def _chomp(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


def _strip_quote_marker(line: str) -> str:
    return _QUOTE_PREFIX_RE.sub("", line, count=1)


def _consume_fence(lines: Sequence[str], index: int) -> tuple[Block, int]:
    language = lines[index][len(FENCE) :].strip() or None
    code_lines: list[str] = []
    i = index + 1
    while i < len(lines) and not _is_fence(lines[i]):
        code_lines.append(lines[i])
        i += 1
    if i < len(lines) and code_lines:
        # The last line break belongs to the closing fence
        code_lines[-1] = _chomp(code_lines[-1])
    # Skip the closing fence; an unterminated fence runs to the end.
    return CodeBlock(language=language, raw="\n".join(code_lines)), i + 1


def _consume_heading(lines: Sequence[str], index: int) -> tuple[Block, int]:
    match = _HEADING_RE.match(_chomp(lines[index]))
    level = len(match.group(1))
    return Heading(level=level, inline=format_inline(match.group(2))), index + 1


def _consume_rule(lines: Sequence[str], index: int) -> tuple[Block, int]:
    return HorizontalRule(), index + 1


def _consume_quote(lines: Sequence[str], index: int) -> tuple[Block, int]:
    quote_lines: list[str] = []
    i = index
    while i < len(lines) and _is_quote(lines[i]):
        quote_lines.append(_strip_quote_marker(_chomp(lines[i])))
        i += 1
    return parse_quote_body(quote_lines, depth=1), i


def _consume_tasks(lines: Sequence[str], index: int) -> tuple[Block, int]:
    items: list[TaskItem] = []
    i = index
    while i < len(lines):
        match = _TASK_RE.match(_chomp(lines[i]))
        if not match or _claimed_before(lines[i], "task"):
            break
        items.append(TaskItem(checked=match.group(1).lower() == "x", inline=format_inline(match.group(2))))
        i += 1
    return TaskList(items=items), i


def _consume_bullets(lines: Sequence[str], index: int) -> tuple[Block, int]:
    items: list = []
    i = index
    while i < len(lines):
        line = lines[i]
        match = _BULLET_RE.match(_chomp(line))
        if not match or _claimed_before(line, "bullet"):
            break
        items.append(format_inline(match.group(2)))
        i += 1
    return UnorderedList(items=items), i


def _consume_paragraph(lines: Sequence[str], index: int) -> tuple[Block, int]:
    # The first line is taken unconditionally: no block rule claimed it.
    p_lines = [lines[index]]
    i = index + 1
    while i < len(lines) and not _is_blank(lines[i]) and _rule_for(lines[i]) is None:
        p_lines.append(lines[i])
        i += 1
    return Paragraph(lines=[format_inline(_chomp(line)) for line in p_lines]), i


def _flush_paragraph(quote: Blockquote, pending: list[str]) -> None:
    if pending:
        quote.children.append(Paragraph(lines=[format_inline(line) for line in pending]))
        pending.clear()


BLOCK_RULES: tuple[BlockRule, ...] = (
    BlockRule("fence", _is_fence, _consume_fence),
    BlockRule("heading", _is_heading, _consume_heading),
    BlockRule("rule", _is_rule, _consume_rule),
    BlockRule("quote", _is_quote, _consume_quote),
    BlockRule("task", is_task_line, _consume_tasks),
    BlockRule("bullet", is_bullet_line, _consume_bullets),
)


def _rule_for(line: str) -> BlockRule | None:
    line = _chomp(line)
    for rule in BLOCK_RULES:
        if rule.matches(line):
            return rule
    return None


def _claimed_before(line: str, name: str) -> bool:
    """True if a rule with higher priority than ``name`` claims the line."""
    line = _chomp(line)
    for rule in BLOCK_RULES:
        if rule.name == name:
            return False
        if rule.matches(line):
            return True
    return False
