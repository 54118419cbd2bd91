from __future__ import annotations

from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Cm, Pt, RGBColor

from .config import RenderConfig

LINE_SPACING = 1.15
BLOCK_SPACING_PT = 6
QUOTE_COLOR = RGBColor(0x59, 0x59, 0x59)
MUTED_COLOR = RGBColor(0x80, 0x80, 0x80)


def set_run_font(
    run,
    config: RenderConfig,
    bold: bool = False,
    italic: bool = False,
    strike: bool = False,
    code: bool = False,
) -> None:
    run.font.name = config.code_font_name if code else config.font_name
    run.font.size = Pt(config.code_font_size_pt if code else config.font_size_pt)
    run.bold = bold
    run.italic = italic
    run.font.strike = strike


def apply_body_paragraph_format(paragraph, left_indent_cm: float = 0.0) -> None:
    """Format normal text: left aligned, compact spacing."""
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(0)
    paragraph.paragraph_format.space_after = Pt(BLOCK_SPACING_PT)
    paragraph.paragraph_format.line_spacing = LINE_SPACING
    paragraph.paragraph_format.first_line_indent = Cm(0)
    paragraph.paragraph_format.left_indent = Cm(left_indent_cm)


def apply_heading_format(paragraph, level: int, config: RenderConfig, left_indent_cm: float = 0.0) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(BLOCK_SPACING_PT * 2 if level <= 2 else BLOCK_SPACING_PT)
    paragraph.paragraph_format.space_after = Pt(BLOCK_SPACING_PT)
    paragraph.paragraph_format.first_line_indent = Cm(0)
    paragraph.paragraph_format.left_indent = Cm(left_indent_cm)
    paragraph.paragraph_format.keep_with_next = True
    for run in paragraph.runs:
        run.font.size = Pt(config.heading_size(level))
        run.bold = True


def apply_code_format(paragraph, left_indent_cm: float = 0.0) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(0)
    paragraph.paragraph_format.space_after = Pt(BLOCK_SPACING_PT)
    paragraph.paragraph_format.line_spacing = 1.0
    paragraph.paragraph_format.first_line_indent = Cm(0)
    paragraph.paragraph_format.left_indent = Cm(left_indent_cm + 0.3)


def apply_caption_format(paragraph, config: RenderConfig, left_indent_cm: float = 0.0) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(BLOCK_SPACING_PT)
    paragraph.paragraph_format.space_after = Pt(0)
    paragraph.paragraph_format.first_line_indent = Cm(0)
    paragraph.paragraph_format.left_indent = Cm(left_indent_cm)
    paragraph.paragraph_format.keep_with_next = True
    for run in paragraph.runs:
        set_run_font(run, config, code=True)
        run.font.color.rgb = MUTED_COLOR


def hex_to_rgb(value: str) -> RGBColor:
    """Convert a Pygments colour (``"008000"`` or ``"#008000"``) to RGBColor."""
    return RGBColor.from_string(value.lstrip("#").upper())
