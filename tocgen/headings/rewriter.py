"""Rewrites discovered headings in place and derives TOC entries from them."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from ..config import TocConfig
from ..logging import get_logger
from ..models import HeadingMatch, LevelMap, TocEntry
from .constants import MENU_ANCHOR, TOC_UNSAFE_TAGS
from .levels import level_for
from .markup import remove_tags, strip_tags
from .slugger import AnchorSlugger

ANCHOR_LINK_CLASS = "tocgen-anchlink"
ANCHOR_ELEMENT_CLASS = "tocgen-anchor"
GOTOP_CLASS = "tocgen-gotop"

_EXISTING_ANCHOR_LINK = re.compile(
    rf'^\s*<a rel="nofollow" class="{ANCHOR_LINK_CLASS}" href="#[^"]*">.*?</a> ?', re.DOTALL
)
_ID_ATTRIBUTE = re.compile(r"""(?<![\w-])\s*id=(['"]).*?\1\s*""", re.IGNORECASE | re.DOTALL)
# links and elements this module writes; left out of back-to-top distances
_OWN_MARKUP = re.compile(
    rf'<a rel="nofollow" class="{GOTOP_CLASS}" href="[^"]*">.*?</a>'
    rf'|<a rel="nofollow" class="{ANCHOR_LINK_CLASS}" href="#[^"]*">.*?</a> ?'
    rf'|<a class="{ANCHOR_ELEMENT_CLASS}" name="[^"]*"></a>\n',
    re.DOTALL,
)
_OPENING_TAG = re.compile(r"<[^>]*>")
_DESCRIPTION = re.compile(r"\s*<p>(.+?)</p>", re.IGNORECASE)

LOGGER = get_logger("rewriter")


class DocumentRewriter:
    """Attaches anchors to headings and splices the result into the document.

    One instance serves a single extraction run: its slugger's registry and
    the offset of the previous heading are per-run state.
    """

    def __init__(self, config: TocConfig, slugger: Optional[AnchorSlugger] = None) -> None:
        self.config = config
        self.slugger = slugger or AnchorSlugger(config.spec)
        self._previous_start: Optional[int] = None
        attr_name = config.anchor_attr_name.strip()
        self._anchor_attr = (
            re.compile(
                rf"""(?<![\w-])\s*({re.escape(attr_name)})=(['"])(.*?)\2\s*""",
                re.IGNORECASE | re.DOTALL,
            )
            if attr_name
            else None
        )

    def rewrite(
        self, document: str, headings: Sequence[HeadingMatch], levels: LevelMap
    ) -> Tuple[str, List[TocEntry]]:
        """Return the rewritten document and one entry per heading, in order."""
        parts: List[str] = []
        entries: List[TocEntry] = []
        cursor = 0
        for heading in headings:
            parts.append(document[cursor:heading.start])
            entry, element = self.rewrite_heading(document, heading, level_for(levels, heading.selector))
            entries.append(entry)
            parts.append(element)
            cursor = heading.end
        parts.append(document[cursor:])
        LOGGER.debug("Rewrote %d heading(s)", len(entries))
        return "".join(parts), entries

    def rewrite_heading(
        self, document: str, heading: HeadingMatch, level: int
    ) -> Tuple[TocEntry, str]:
        inner = _EXISTING_ANCHOR_LINK.sub("", heading.inner, count=1)
        attrs, anchor = self._resolve_anchor(heading.attrs, inner)

        entry = TocEntry(
            anchor=anchor,
            text=self.display_text(inner),
            level=level,
            tag=heading.tag,
            position=heading.position,
            description=self._description(document, heading),
        )

        if self.config.anchor_link:
            inner = (
                f'<a rel="nofollow" class="{ANCHOR_LINK_CLASS}" href="#{anchor}">'
                f"{self.config.anchor_link}</a> {inner}"
            )

        # text before the heading may already carry markup from an earlier run
        prefix_end = heading.start
        if self.config.anchor_type == "a":
            anchor_element = f'<a class="{ANCHOR_ELEMENT_CLASS}" name="{anchor}"></a>\n'
            if document.endswith(anchor_element, 0, prefix_end):
                prefix_end -= len(anchor_element)
                anchor_element = ""
            element = f"{anchor_element}<{heading.tag}{attrs}>{inner}</{heading.tag}>"
        else:
            attrs = _normalise_attrs(_ID_ATTRIBUTE.sub(" ", attrs))
            element = f'<{heading.tag} id="{anchor}"{attrs}>{inner}</{heading.tag}>'

        return entry, self._back_to_top(document, heading, prefix_end) + element

    def display_text(self, inner: str) -> str:
        """Heading markup as shown in the TOC, filtered by the ``leave_tags`` policy."""
        policy = self.config.leave_tags
        if policy == "all":
            text = remove_tags(inner, TOC_UNSAFE_TAGS)
        elif policy == "none":
            text = strip_tags(inner)
        else:
            text = strip_tags(inner, allowed=set(policy))
        return text.strip()

    def _resolve_anchor(self, attrs: str, inner: str) -> Tuple[str, str]:
        if self._anchor_attr is not None:
            match = self._anchor_attr.search(attrs)
            if match and match.group(3).strip():
                if match.group(1).lower() in ("id", "name"):
                    attrs = _normalise_attrs(attrs[: match.start()] + " " + attrs[match.end():])
                return attrs, self.slugger.slug(match.group(3))
        return attrs, self.slugger.slug(inner)

    def _description(self, document: str, heading: HeadingMatch) -> str:
        if self.config.as_table is None:
            return ""
        match = _DESCRIPTION.match(document, heading.end)
        return match.group(1) if match else ""

    def _back_to_top(self, document: str, heading: HeadingMatch, prefix_end: int) -> str:
        """Link back to the menu, unless the previous heading is too close.

        Distance is the number of characters between the starts of the two
        headings, a rough proxy for section length. Markup written by an
        earlier run (back-to-top links, glyph links, anchor elements and the
        previous heading's ``id``) is not counted, so rerunning on rewritten
        output never adds links.
        """
        if not self.config.to_menu_enabled:
            return ""

        distance = self._section_length(document, heading.start)
        self._previous_start = heading.start
        if distance < self.config.tomenu_simcount:
            return ""

        link = (
            f'<a rel="nofollow" class="{GOTOP_CLASS}" '
            f'href="{self.config.page_url}#{MENU_ANCHOR}">{self.config.to_menu}</a>'
        )
        if document.endswith(link, 0, prefix_end):
            return ""
        return link

    def _section_length(self, document: str, end: int) -> int:
        start = self._previous_start or 0
        section = document[start:end]
        length = len(section) - sum(len(m.group(0)) for m in _OWN_MARKUP.finditer(section))
        if self._previous_start is not None:
            opening = _OPENING_TAG.match(section)
            if opening is not None:
                length -= sum(len(m.group(0)) for m in _ID_ATTRIBUTE.finditer(opening.group(0)))
        return length


def _normalise_attrs(attrs: str) -> str:
    stripped = attrs.strip()
    return f" {stripped}" if stripped else ""


__all__ = [
    "ANCHOR_ELEMENT_CLASS",
    "ANCHOR_LINK_CLASS",
    "GOTOP_CLASS",
    "DocumentRewriter",
]
