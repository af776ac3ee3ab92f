"""Selector specification parsing ("h2 h3|h4 .note embed as_table=...")."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple, Union

from ..logging import get_logger
from ..models import ClassSelector, SelectorFlags, SelectorSpec, TagSelector
from .constants import EMBED_MARKER, NO_TO_MENU_MARKER

SelectorInput = Union[str, Sequence[str], None]

_AS_TABLE_PATTERN = re.compile(r'as_table="([^"]+)"')
_TOKEN_SPLIT = re.compile(r"[ ,|]+")
_TAG_NAME = re.compile(r"[A-Za-z][A-Za-z0-9:-]*")
_CLASS_NAME = re.compile(r"-?[A-Za-z_][A-Za-z0-9_-]*")

LOGGER = get_logger("selectors")


class SelectorError(ValueError):
    """Raised for selector tokens that are not valid tag or class names."""


@dataclass(frozen=True)
class SelectorSet:
    """Ordered, de-duplicated selectors plus the text used for ``a|b`` grouping."""

    selectors: Tuple[SelectorSpec, ...]
    spec_text: str
    flags: SelectorFlags = field(default_factory=SelectorFlags)

    def __bool__(self) -> bool:
        return bool(self.selectors)

    def __len__(self) -> int:
        return len(self.selectors)

    def present_in(self, document: str) -> "SelectorSet":
        """Drop selectors that cannot match anywhere in ``document``."""
        kept = []
        for selector in self.selectors:
            if _selector_pattern(selector).search(document):
                kept.append(selector)
            else:
                LOGGER.debug("Selector %s not present in document; skipping", selector.text)
        return replace(self, selectors=tuple(kept))


def parse_selectors(spec: SelectorInput, defaults: Sequence[str] = ()) -> SelectorSet:
    """Parse a selector specification, falling back to ``defaults`` when it names no selectors.

    ``spec`` may be a free-form string (space, comma or pipe separated) or a
    sequence of tokens. The ``embed``/``no_to_menu`` markers and the
    ``as_table="Title|Description"`` option are returned as flags.
    """
    text = _join(spec)
    as_table: Optional[Tuple[str, str]] = None

    table_match = _AS_TABLE_PATTERN.search(text)
    if table_match:
        captions = table_match.group(1).split("|")
        title = captions[0].strip()
        description = captions[1].strip() if len(captions) > 1 else ""
        as_table = (title, description)
        text = text[: table_match.start()] + text[table_match.end():]

    embed = False
    no_to_menu = False
    tokens: List[str] = []
    for token in _TOKEN_SPLIT.split(text):
        token = token.strip()
        if not token:
            continue
        if token == EMBED_MARKER:
            embed = True
        elif token == NO_TO_MENU_MARKER:
            no_to_menu = True
        else:
            tokens.append(token)

    if not tokens:
        text = _join(defaults)
        tokens = [token for token in _TOKEN_SPLIT.split(text) if token.strip()]

    selectors: List[SelectorSpec] = []
    for token in tokens:
        selector = parse_token(token.strip())
        if selector not in selectors:
            selectors.append(selector)

    flags = SelectorFlags(embed=embed, no_to_menu=no_to_menu, as_table=as_table)
    return SelectorSet(selectors=tuple(selectors), spec_text=text, flags=flags)


def parse_token(token: str) -> SelectorSpec:
    """Return the selector for a single ``tag`` or ``.class`` token."""
    if token.startswith("."):
        name = token[1:]
        if not _CLASS_NAME.fullmatch(name):
            raise SelectorError(f"Invalid class selector: {token!r}")
        return ClassSelector(name=name, text=token)
    if not _TAG_NAME.fullmatch(token):
        raise SelectorError(f"Invalid tag selector: {token!r}")
    return TagSelector(name=token.lower(), text=token)


def _join(spec: SelectorInput) -> str:
    if spec is None:
        return ""
    if isinstance(spec, str):
        return spec
    return " ".join(str(item) for item in spec)


def _selector_pattern(selector: SelectorSpec) -> "re.Pattern[str]":
    if isinstance(selector, ClassSelector):
        return re.compile(r"(?<![\w-])class=['\"][^'\"]*" + re.escape(selector.name), re.IGNORECASE)
    return re.compile("<" + re.escape(selector.name), re.IGNORECASE)


__all__ = ["SelectorError", "SelectorInput", "SelectorSet", "parse_selectors", "parse_token"]
