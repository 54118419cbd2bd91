"""Syntax highlighting collaborator for code blocks.

A highlighter is any callable ``(language, raw) -> list[Token] | None``. The
renderer treats ``None`` or an exception as "no highlighting available" and
falls back to plain monospace text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from pygments import lex
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "default"


@dataclass(frozen=True)
class TokenStyle:
    color: str | None = None
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class Token:
    token_type: str
    text: str
    style: TokenStyle = TokenStyle()


Highlighter = Callable[[Optional[str], str], Optional[List[Token]]]


def pygments_highlighter(style_name: str = DEFAULT_STYLE) -> Highlighter:
    """Build a highlighter backed by Pygments lexers and the given style."""
    try:
        style = get_style_by_name(style_name)
    except ClassNotFound:
        logger.warning("Unknown Pygments style %r, using %r", style_name, DEFAULT_STYLE)
        style = get_style_by_name(DEFAULT_STYLE)

    style_cache: dict = {}

    def token_style(ttype) -> TokenStyle:
        cached = style_cache.get(ttype)
        if cached is None:
            info = style.style_for_token(ttype)
            cached = TokenStyle(
                color=info.get("color") or None,
                bold=bool(info.get("bold")),
                italic=bool(info.get("italic")),
            )
            style_cache[ttype] = cached
        return cached

    def highlight(language: str | None, raw: str) -> List[Token] | None:
        if not raw:
            return None
        lexer = _lexer_for_language(language)
        return [Token(str(ttype), value, token_style(ttype)) for ttype, value in lex(raw, lexer) if value]

    return highlight


def _lexer_for_language(language: str | None):
    # Keep the raw text verbatim: no newline stripping or trailing newline.
    options = {"stripnl": False, "ensurenl": False}
    if not language:
        return TextLexer(**options)
    try:
        return get_lexer_by_name(language.lower(), **options)
    except ClassNotFound:
        logger.debug("No lexer for %r, highlighting as plain text", language)
        return TextLexer(**options)
