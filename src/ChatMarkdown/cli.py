from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import block_parser, renderer_docx, walker
from .config import load_config


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")


def read_message(path: Path) -> str:
    """Read a saved chat message; exports from some clients start with a BOM."""
    return path.read_text(encoding="utf-8-sig")


def resolve_output_path(input_path: Path, output: str | None) -> Path:
    if not output:
        return input_path.with_suffix(".docx")
    out_path = Path(output)
    if out_path.is_dir():
        return out_path / f"{input_path.stem}.docx"
    return out_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ChatMarkdown",
        description="Structure chat-model Markdown output and render it to DOCX.",
    )
    parser.add_argument("input", type=str, help="Path to the message text file")
    parser.add_argument("-o", "--output", type=str, help="Output DOCX path")
    parser.add_argument("--config", type=str, help="Path to a YAML render config")
    parser.add_argument("--tree", action="store_true", help="Print the parsed node tree instead of rendering")
    parser.add_argument("--no-highlight", action="store_true", help="Render code blocks without syntax colours")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    logging.info("Reading %s", input_path)
    text = read_message(input_path)
    logging.debug("Message length: %d chars", len(text))

    document = block_parser.segment(text)
    logging.debug("Parsed %d top-level blocks", len(document.blocks))

    if args.tree:
        print(walker.outline(document))
        return

    config = load_config(Path(args.config).expanduser() if args.config else None)
    if args.no_highlight:
        config.highlight = False

    output_path = resolve_output_path(input_path, args.output)
    logging.info("Rendering DOCX to %s", output_path)
    renderer_docx.render_document(document, output_path=output_path, config=config)

    logging.info("Done. Saved to %s", output_path)


if __name__ == "__main__":
    main()
