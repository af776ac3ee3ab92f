"""Anchor slug generation with per-run uniqueness."""

from __future__ import annotations

import html
import re
from typing import Callable, Optional, Set

from .constants import MAX_ANCHOR_LENGTH, TRANSLITERATION_TABLE
from .markup import strip_tags

AnchorHook = Callable[[str], str]

_TRAILING_NUMBER = re.compile(r"-\d$")


class AnchorRegistry:
    """Slugs already issued during one extraction run."""

    def __init__(self) -> None:
        self._issued: Set[str] = set()

    def __contains__(self, anchor: object) -> bool:
        return anchor in self._issued

    def __len__(self) -> int:
        return len(self._issued)

    def add(self, anchor: str) -> None:
        self._issued.add(anchor)


class AnchorSlugger:
    """Turns heading text into unique, URL-safe, length-bounded anchors.

    ``spec`` lists extra literal characters kept in anchors. ``before`` runs on
    the tag-stripped text, ``after`` on the sanitised slug before the
    uniqueness check.
    """

    def __init__(
        self,
        spec: str = "",
        registry: Optional[AnchorRegistry] = None,
        *,
        before: Optional[AnchorHook] = None,
        after: Optional[AnchorHook] = None,
    ) -> None:
        self.registry = registry if registry is not None else AnchorRegistry()
        self._before = before
        self._after = after
        self._unsafe = re.compile(rf"[^a-zA-Z0-9_{re.escape(spec)}\-]+")

    def slug(self, text: str) -> str:
        """Return a registered anchor for ``text``; never the same one twice."""
        return self.unique(self.sanitise(text))

    def sanitise(self, text: str) -> str:
        anchor = strip_tags(text)
        if self._before is not None:
            anchor = self._before(anchor)
        anchor = html.unescape(anchor)
        anchor = anchor.translate(TRANSLITERATION_TABLE)
        anchor = self._unsafe.sub("-", anchor)
        anchor = anchor.strip("-").lower()
        anchor = anchor[:MAX_ANCHOR_LENGTH]
        if self._after is not None:
            anchor = self._after(anchor)
        return anchor

    def unique(self, anchor: str) -> str:
        """Suffix ``anchor`` with ``-2``, ``-3``... until unused, then register it."""
        tried: Set[str] = set()
        while anchor in self.registry:
            tried.add(anchor)
            last = anchor[-1:]
            candidate = _with_suffix(anchor, int(last) + 1 if last.isdigit() else 2)
            if candidate in tried:
                # truncation at the length limit can make the digit walk revisit a slug
                candidate = self._first_free(anchor)
            anchor = candidate
        self.registry.add(anchor)
        return anchor

    def _first_free(self, anchor: str) -> str:
        number = 2
        while _with_suffix(anchor, number) in self.registry:
            number += 1
        return _with_suffix(anchor, number)


def _with_suffix(anchor: str, number: int) -> str:
    suffix = f"-{number}"
    base = _TRAILING_NUMBER.sub("", anchor)
    return base[: MAX_ANCHOR_LENGTH - len(suffix)] + suffix


__all__ = ["AnchorHook", "AnchorRegistry", "AnchorSlugger"]
