"""Detection and removal of the ``[contents ...]`` shortcode."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


@dataclass
class ShortcodeMatch:
    """Document split around the last shortcode occurrence."""

    before: str
    params: str
    after: str


class ShortcodeProcessor:
    """Finds the shortcode that marks where the table of contents goes.

    ``[[contents]]`` is an escaped shortcode and is left alone.
    """

    def __init__(self, name: str = "contents") -> None:
        self.name = name
        tag = re.escape(name)
        self._locate = re.compile(rf"^(.*)(?<!\[)\[{tag}((?:\s[^\]]*)?)\](.*)$", re.DOTALL)
        self._any = re.compile(rf"(?<!\[)\[{tag}(?:\s[^\]]*)?\]")

    def find(self, content: str) -> Optional[ShortcodeMatch]:
        if f"[{self.name}" not in content:
            return None
        match = self._locate.match(content)
        if match is None:
            return None
        return ShortcodeMatch(before=match.group(1), params=match.group(2).strip(), after=match.group(3))

    def strip(self, content: str) -> str:
        """Remove every shortcode occurrence, e.g. for excerpts and feeds."""
        return self._any.sub("", content)


__all__ = ["ShortcodeMatch", "ShortcodeProcessor"]
