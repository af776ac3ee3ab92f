"""Helper for assembling HTML documents with headings in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List


class DocumentBuilder:
    """Accumulates headings and filler paragraphs into one HTML string."""

    def __init__(self) -> None:
        self._parts: List[str] = []

    def heading(self, tag: str, text: str, attrs: str = "") -> "DocumentBuilder":
        """Append ``<tag attrs>text</tag>``; ``attrs`` should start with a space."""
        self._parts.append(f"<{tag}{attrs}>{text}</{tag}>")
        return self

    def paragraph(self, text: str) -> "DocumentBuilder":
        self._parts.append(f"<p>{text}</p>")
        return self

    def filler(self, length: int) -> "DocumentBuilder":
        """Append a paragraph holding exactly ``length`` characters of text."""
        return self.paragraph("x" * length)

    def raw(self, markup: str) -> "DocumentBuilder":
        self._parts.append(textwrap.dedent(markup).strip("\n"))
        return self

    def build(self) -> str:
        return "".join(self._parts)

    def write(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.build(), encoding="utf-8")
        return path


__all__ = ["DocumentBuilder"]
