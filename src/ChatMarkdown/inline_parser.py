from __future__ import annotations

import re
from typing import List

from .model import (
    InlineBold,
    InlineBoldItalic,
    InlineElement,
    InlineItalic,
    InlineStrike,
    InlineText,
)

# Alternatives are ordered longest marker first; the leftmost match wins and,
# at equal position, the earlier alternative wins.
_MARKER_RE = re.compile(
    r"(\*\*\*|___)(.+?)\1"
    r"|(\*\*|__)(.+?)\3"
    r"|(\*|_)(.+?)\5"
    r"|(~~)(.+?)\7"
)

_SPAN_TYPES = (
    (2, InlineBoldItalic),
    (4, InlineBold),
    (6, InlineItalic),
    (8, InlineStrike),
)


def format_inline(text: str) -> List[InlineElement]:
    """Split a single line into plain text and nested emphasis spans.

    Unmatched markers are kept as literal text. The inner text of every
    matched span is formatted again, so markers of another kind may nest
    inside it.
    """
    result: List[InlineElement] = []
    last = 0
    for match in _MARKER_RE.finditer(text):
        if match.start() > last:
            result.append(InlineText(text[last : match.start()]))
        for group, span_type in _SPAN_TYPES:
            inner = match.group(group)
            if inner is not None:
                result.append(span_type(children=format_inline(inner)))
                break
        last = match.end()
    if last < len(text):
        result.append(InlineText(text[last:]))
    return result
