import logging
from pathlib import Path

from docx import Document as DocxReader
from docx.shared import RGBColor

from ChatMarkdown import docx_format
from ChatMarkdown.block_parser import segment
from ChatMarkdown.config import RenderConfig
from ChatMarkdown.highlight import Token, TokenStyle
from ChatMarkdown.model import CodeBlock, Document, Heading, InlineText, Paragraph
from ChatMarkdown.renderer_docx import render_document

SAMPLE = """# Release notes

Some **bold** and *italic* text
on two lines.

- [x] shipped
- [ ] pending
- plain bullet

> quoted
>> nested

---

```js
const a = 1;
```
"""


def _paragraph_texts(path: Path) -> list[str]:
    return [p.text for p in DocxReader(path).paragraphs]


def test_render_creates_docx(tmp_path: Path):
    doc = Document(
        blocks=[
            Heading(level=1, inline=[InlineText("Introduction")]),
            Paragraph(lines=[[InlineText("Example paragraph.")]]),
        ]
    )
    output_file = tmp_path / "out" / "report.docx"
    render_document(doc, output_file)
    assert output_file.exists()
    assert output_file.stat().st_size > 0


def test_render_all_block_kinds(tmp_path: Path):
    out = tmp_path / "sample.docx"
    render_document(segment(SAMPLE), out, config=RenderConfig(highlight=False))
    texts = _paragraph_texts(out)
    assert texts[0] == "Release notes"
    assert "Some bold and italic text\non two lines." in texts
    assert "☑ shipped" in texts
    assert "☐ pending" in texts
    assert "• plain bullet" in texts
    assert "quoted" in texts
    assert "nested" in texts
    assert "js" in texts
    assert "const a = 1;" in texts


def test_inline_flags_and_task_strike(tmp_path: Path):
    out = tmp_path / "inline.docx"
    render_document(segment("Some **bold** and *italic*\n\n- [x] shipped"), out)
    paragraphs = DocxReader(out).paragraphs
    runs = {run.text: run for run in paragraphs[0].runs}
    assert runs["bold"].bold
    assert runs["italic"].italic
    done = paragraphs[1].runs[-1]
    assert done.text == "shipped"
    assert done.font.strike


def test_heading_size_follows_level(tmp_path: Path):
    config = RenderConfig(heading_sizes_pt=[30.0, 20.0])
    out = tmp_path / "headings.docx"
    render_document(segment("# One\n## Two"), out, config=config)
    paragraphs = DocxReader(out).paragraphs
    assert paragraphs[0].runs[0].font.size.pt == 30.0
    assert paragraphs[1].runs[0].font.size.pt == 20.0


def test_quote_indent_grows_with_depth(tmp_path: Path):
    out = tmp_path / "quote.docx"
    render_document(segment("> outer\n>> inner"), out)
    paragraphs = DocxReader(out).paragraphs
    outer, inner = paragraphs[0], paragraphs[1]
    assert inner.paragraph_format.left_indent > outer.paragraph_format.left_indent
    assert outer.runs[0].font.color.rgb == docx_format.QUOTE_COLOR


def test_code_block_uses_highlighter_tokens(tmp_path: Path):
    def highlighter(language, raw):
        assert language == "js"
        return [
            Token("Token.Keyword", "const", TokenStyle(color="ff0000", bold=True)),
            Token("Token.Text", " a = 1;"),
        ]

    out = tmp_path / "code.docx"
    render_document(Document(blocks=[CodeBlock(language="js", raw="const a = 1;")]), out, highlighter=highlighter)
    code = DocxReader(out).paragraphs[1]
    assert code.text == "const a = 1;"
    keyword = code.runs[0]
    assert keyword.font.color.rgb == RGBColor(0xFF, 0x00, 0x00)
    assert keyword.bold


def test_failing_highlighter_falls_back_to_plain_text(tmp_path: Path, caplog):
    def highlighter(language, raw):
        raise RuntimeError("highlighter offline")

    out = tmp_path / "fallback.docx"
    block = CodeBlock(language="py", raw="x = 1\ny = 2")
    with caplog.at_level(logging.WARNING):
        render_document(Document(blocks=[block]), out, highlighter=highlighter)
    assert _paragraph_texts(out)[1] == "x = 1\ny = 2"
    assert "Highlighting failed" in caplog.text


def test_pygments_highlighting_colours_runs(tmp_path: Path):
    out = tmp_path / "pygments.docx"
    render_document(segment("```python\ndef f():\n    return 1\n```"), out)
    code = DocxReader(out).paragraphs[1]
    assert code.text == "def f():\n    return 1"
    assert any(run.font.color.rgb is not None for run in code.runs)
