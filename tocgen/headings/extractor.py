"""Regex-based discovery of heading-like elements.

Matching is pattern based, not a real HTML parse: the first
closing tag with the same name ends a heading, so nested same-name elements
inside a heading are cut short. :func:`find_headings` is the only seam the
rest of the pipeline depends on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..models import ClassSelector, HeadingMatch, SelectorSpec, TagSelector

_FLAGS = re.IGNORECASE | re.DOTALL


@dataclass(frozen=True)
class HeadingRule:
    """Compiled matching rule for one selector set."""

    pattern: "re.Pattern[str]"
    tags: Dict[str, TagSelector]
    classes: Dict[str, ClassSelector]

    def selector_for(self, match: "re.Match[str]") -> SelectorSpec:
        tag = match.groupdict().get("tag")
        if tag is not None:
            return self.tags[tag.lower()]
        return self.classes[match.group("class_name").lower()]


def build_rule(selectors: Sequence[SelectorSpec]) -> HeadingRule:
    """Combine tag and class selectors into one alternation pattern."""
    tags = {s.name: s for s in selectors if isinstance(s, TagSelector)}
    classes = {s.name.lower(): s for s in selectors if isinstance(s, ClassSelector)}
    if not tags and not classes:
        raise ValueError("build_rule() needs at least one selector")

    branches: List[str] = []
    if tags:
        tag_names = "|".join(re.escape(name) for name in tags)
        branches.append(
            rf"<(?P<tag>{tag_names})(?P<tag_attrs>(?:\s[^>]*)?)>"
            r"(?P<tag_inner>.*?)</(?P=tag)\s*>"
        )
    if classes:
        class_names = "|".join(re.escape(s.name) for s in classes.values())
        branches.append(
            r"<(?P<class_tag>[^\s>/]+)"
            r"(?P<class_attrs>\s[^>]*?(?<![\w-])class=[\"'][^>\"']*?"
            rf"(?<![\w-])(?P<class_name>{class_names})(?![\w-])"
            r"[^>]*)>"
            r"(?P<class_inner>.*?)</(?P=class_tag)\s*>"
        )
    return HeadingRule(pattern=re.compile("|".join(branches), _FLAGS), tags=tags, classes=classes)


def find_headings(document: str, rule: HeadingRule) -> List[HeadingMatch]:
    """Scan ``document`` once, left to right, and return every heading in order."""
    headings: List[HeadingMatch] = []
    for position, match in enumerate(rule.pattern.finditer(document), start=1):
        if match.groupdict().get("tag") is not None:
            tag, attrs, inner = match.group("tag", "tag_attrs", "tag_inner")
        else:
            tag, attrs, inner = match.group("class_tag", "class_attrs", "class_inner")
        headings.append(
            HeadingMatch(
                full_match=match.group(0),
                tag=tag,
                attrs=attrs,
                selector=rule.selector_for(match),
                inner=inner,
                position=position,
                start=match.start(),
                end=match.end(),
            )
        )
    return headings


__all__ = ["HeadingRule", "build_rule", "find_headings"]
