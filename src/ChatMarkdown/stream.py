"""Re-parse helper for text that arrives chunk by chunk."""

from __future__ import annotations

from .block_parser import segment
from .model import Document


class MessageStream:
    """Accumulates streamed text and re-segments the whole prefix on every chunk.

    No parse state is carried between chunks, so ``document`` always equals
    ``segment(text)``.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._document = segment(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def document(self) -> Document:
        return self._document

    def feed(self, chunk: str) -> Document:
        self._text += chunk
        self._document = segment(self._text)
        return self._document

    def reset(self) -> None:
        self._text = ""
        self._document = Document(blocks=[])
