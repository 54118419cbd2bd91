from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK
from docx.shared import Cm, Pt

from . import docx_format
from .config import RenderConfig
from .highlight import Highlighter, Token, pygments_highlighter
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
    InlineStrike,
    InlineText,
    Paragraph,
    TaskList,
    UnorderedList,
)

logger = logging.getLogger(__name__)

CHECKED_BOX = "☑"
UNCHECKED_BOX = "☐"
BULLET = "•"


@dataclass
class RenderState:
    config: RenderConfig
    highlighter: Highlighter | None = None
    quote_depth: int = 0

    @property
    def indent_cm(self) -> float:
        return self.quote_depth * self.config.quote_indent_cm


@dataclass(frozen=True)
class _RunFlags:
    bold: bool = False
    italic: bool = False
    strike: bool = False


def render_document(
    doc: Document,
    output_path: str | Path,
    config: RenderConfig | None = None,
    highlighter: Highlighter | None = None,
) -> None:
    """Write the document tree to a .docx file.

    When no highlighter is passed and highlighting is enabled in the config,
    a Pygments highlighter is used.
    """
    output_path = Path(output_path)
    config = config or RenderConfig()
    if highlighter is None and config.highlight:
        highlighter = pygments_highlighter(config.pygments_style)
    state = RenderState(config=config, highlighter=highlighter)
    docx = DocxDocument()

    for block in doc.blocks:
        _dispatch_block(docx, block, state)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    docx.save(output_path)


def _dispatch_block(docx: DocxDocument, block: Block, state: RenderState) -> None:
    if isinstance(block, Heading):
        _render_heading(docx, block, state)
    elif isinstance(block, Paragraph):
        _render_paragraph(docx, block, state)
    elif isinstance(block, UnorderedList):
        _render_unordered_list(docx, block, state)
    elif isinstance(block, TaskList):
        _render_task_list(docx, block, state)
    elif isinstance(block, CodeBlock):
        _render_code_block(docx, block, state)
    elif isinstance(block, Blockquote):
        _render_blockquote(docx, block, state)
    elif isinstance(block, HorizontalRule):
        _render_horizontal_rule(docx, state)


def _render_heading(docx: DocxDocument, heading: Heading, state: RenderState) -> None:
    paragraph = docx.add_paragraph()
    _add_inline_runs(paragraph, heading.inline, state)
    docx_format.apply_heading_format(paragraph, heading.level, state.config, left_indent_cm=state.indent_cm)


def _render_paragraph(docx: DocxDocument, block: Paragraph, state: RenderState) -> None:
    paragraph = docx.add_paragraph()
    for idx, line in enumerate(block.lines):
        if idx > 0:
            # Lines of one paragraph are separated by a forced break
            paragraph.add_run().add_break(WD_BREAK.LINE)
        _add_inline_runs(paragraph, line, state)
    docx_format.apply_body_paragraph_format(paragraph, left_indent_cm=state.indent_cm)


def _render_unordered_list(docx: DocxDocument, block: UnorderedList, state: RenderState) -> None:
    for item in block.items:
        paragraph = docx.add_paragraph()
        run = paragraph.add_run(f"{BULLET} ")
        docx_format.set_run_font(run, state.config)
        _add_inline_runs(paragraph, item, state)
        _apply_list_item_format(paragraph, state)


def _render_task_list(docx: DocxDocument, block: TaskList, state: RenderState) -> None:
    for item in block.items:
        paragraph = docx.add_paragraph()
        run = paragraph.add_run(f"{CHECKED_BOX if item.checked else UNCHECKED_BOX} ")
        docx_format.set_run_font(run, state.config)
        # Done items are struck through and muted
        _add_inline_runs(paragraph, item.inline, state, _RunFlags(strike=item.checked))
        if item.checked:
            for item_run in paragraph.runs[1:]:
                item_run.font.color.rgb = docx_format.MUTED_COLOR
        _apply_list_item_format(paragraph, state)


def _apply_list_item_format(paragraph, state: RenderState) -> None:
    docx_format.apply_body_paragraph_format(paragraph, left_indent_cm=state.indent_cm + state.config.list_indent_cm)
    paragraph.paragraph_format.space_after = Pt(0)
    paragraph.paragraph_format.first_line_indent = Cm(-state.config.list_indent_cm / 2)


def _render_code_block(docx: DocxDocument, block: CodeBlock, state: RenderState) -> None:
    caption = docx.add_paragraph(block.language or "code")
    docx_format.apply_caption_format(caption, state.config, left_indent_cm=state.indent_cm)

    paragraph = docx.add_paragraph()
    tokens = _highlight(block, state)
    if tokens is None:
        _add_code_text(paragraph, block.raw, state)
    else:
        for token in tokens:
            for run in _add_code_text(paragraph, token.text, state):
                if token.style.color:
                    run.font.color.rgb = docx_format.hex_to_rgb(token.style.color)
                run.bold = token.style.bold
                run.italic = token.style.italic
    docx_format.apply_code_format(paragraph, left_indent_cm=state.indent_cm)


def _highlight(block: CodeBlock, state: RenderState) -> List[Token] | None:
    if state.highlighter is None:
        return None
    try:
        return state.highlighter(block.language, block.raw)
    except Exception:
        logger.warning("Highlighting failed for %r block; rendering plain text", block.language, exc_info=True)
        return None


def _add_code_text(paragraph, text: str, state: RenderState) -> list:
    """Add text as monospace runs, turning newlines into line breaks."""
    runs = []
    for idx, part in enumerate(text.split("\n")):
        if idx > 0:
            paragraph.add_run().add_break(WD_BREAK.LINE)
        if part:
            run = paragraph.add_run(part)
            docx_format.set_run_font(run, state.config, code=True)
            runs.append(run)
    return runs


def _render_blockquote(docx: DocxDocument, block: Blockquote, state: RenderState) -> None:
    outer_depth = state.quote_depth
    state.quote_depth = block.depth
    start = len(docx.paragraphs)
    try:
        for child in block.children:
            _dispatch_block(docx, child, state)
    finally:
        state.quote_depth = outer_depth
    # Runs coloured by a nested quote or the highlighter keep their colour
    for paragraph in docx.paragraphs[start:]:
        for run in paragraph.runs:
            if run.font.color.rgb is None:
                run.font.color.rgb = docx_format.QUOTE_COLOR


def _render_horizontal_rule(docx: DocxDocument, state: RenderState) -> None:
    paragraph = docx.add_paragraph()
    run = paragraph.add_run("─" * state.config.rule_width)
    docx_format.set_run_font(run, state.config)
    run.font.color.rgb = docx_format.MUTED_COLOR
    docx_format.apply_body_paragraph_format(paragraph, left_indent_cm=state.indent_cm)
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER


def _add_inline_runs(
    paragraph,
    inlines: Iterable[InlineElement],
    state: RenderState,
    flags: _RunFlags = _RunFlags(),
) -> None:
    for inline in inlines:
        if isinstance(inline, InlineText):
            run = paragraph.add_run(inline.text)
            docx_format.set_run_font(run, state.config, bold=flags.bold, italic=flags.italic, strike=flags.strike)
        elif isinstance(inline, InlineBoldItalic):
            _add_inline_runs(paragraph, inline.children, state, _RunFlags(True, True, flags.strike))
        elif isinstance(inline, InlineBold):
            _add_inline_runs(paragraph, inline.children, state, _RunFlags(True, flags.italic, flags.strike))
        elif isinstance(inline, InlineItalic):
            _add_inline_runs(paragraph, inline.children, state, _RunFlags(flags.bold, True, flags.strike))
        elif isinstance(inline, InlineStrike):
            _add_inline_runs(paragraph, inline.children, state, _RunFlags(flags.bold, flags.italic, True))
