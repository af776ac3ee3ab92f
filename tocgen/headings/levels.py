"""Nesting level resolution for ordered selectors."""

from __future__ import annotations

import re
from typing import Dict, Optional, Sequence

from ..models import LevelMap, SelectorSpec


def resolve_levels(selectors: Sequence[SelectorSpec], spec_text: str = "") -> LevelMap:
    """Assign each selector a zero-based nesting level.

    Levels follow selector order. A selector written as ``prev|this`` in
    ``spec_text`` shares the level of the selector before it. Any level that
    is neither the previous level nor one deeper is pulled back to previous + 1,
    so the sequence is always renderable as nested lists.
    """
    levels: Dict[SelectorSpec, int] = {
        selector: index for index, selector in enumerate(selectors)
    }

    previous: Optional[SelectorSpec] = None
    for selector in levels:
        if previous is not None and _is_grouped(previous, selector, spec_text):
            levels[selector] = levels[previous]
        previous = selector

    previous_level = 0
    for selector, level in levels.items():
        if level not in (previous_level, previous_level + 1):
            level = previous_level + 1
            levels[selector] = level
        previous_level = level

    return levels


def _is_grouped(previous: SelectorSpec, selector: SelectorSpec, spec_text: str) -> bool:
    # whole tokens only: "h2|h3" must not match inside "h2|h30"
    pattern = rf"(?<![\w.-]){re.escape(previous.text)}\|{re.escape(selector.text)}(?![\w-])"
    return re.search(pattern, spec_text, re.IGNORECASE) is not None


def level_for(levels: LevelMap, selector: SelectorSpec) -> int:
    """Level of ``selector``; selectors missing from the map sit at the top level."""
    return levels.get(selector, 0)


__all__ = ["level_for", "resolve_levels"]
