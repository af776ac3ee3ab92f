"""Table-of-contents pipeline: selectors -> levels -> headings -> anchors -> markup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .config import TocConfig
from .headings.extractor import build_rule, find_headings
from .headings.levels import resolve_levels
from .headings.markup import strip_tags
from .headings.rewriter import DocumentRewriter
from .headings.selectors import SelectorInput, SelectorSet, parse_selectors
from .headings.slugger import AnchorHook, AnchorRegistry, AnchorSlugger
from .logging import get_logger
from .models import NoTocReason, NoTocResult, SelectorFlags, TocEntry, TocResult
from .render.shortcode import ShortcodeProcessor
from .render.toc import ContentsHook, EntryHook, TableOfContentsRenderer

LOGGER = get_logger("contents")

ExtractionResult = Union[TocResult, NoTocResult]


def apply_flags(config: TocConfig, flags: SelectorFlags) -> TocConfig:
    """Return ``config`` adjusted by the markers found in a selector specification."""
    changes = {}
    if flags.embed:
        changes["embed"] = True
    if flags.no_to_menu:
        changes["to_menu"] = ""
    if flags.as_table is not None:
        changes["as_table"] = flags.as_table
    return config.with_overrides(**changes) if changes else config


def extract_headings(
    document: str,
    selectors: Union[SelectorSet, SelectorInput] = None,
    config: Optional[TocConfig] = None,
    *,
    anchor_before: Optional[AnchorHook] = None,
    anchor_after: Optional[AnchorHook] = None,
) -> ExtractionResult:
    """Find headings in ``document``, anchor them, and return the rewritten text with TOC entries.

    Returns :class:`NoTocResult` (with the document untouched) when the text
    is shorter than ``min_length``, no selector occurs in the document, or
    fewer than ``min_found`` headings match. All anchor bookkeeping is local
    to this call.
    """
    config = config or TocConfig()
    text_length = len(strip_tags(document))
    if text_length < config.min_length:
        LOGGER.debug("Text length %d below min_length %d", text_length, config.min_length)
        return NoTocResult(NoTocReason.TEXT_TOO_SHORT, document)

    selector_set = (
        selectors
        if isinstance(selectors, SelectorSet)
        else parse_selectors(selectors, config.selectors)
    )
    flags = selector_set.flags
    config = apply_flags(config, flags)

    selector_set = selector_set.present_in(document)
    if not selector_set:
        LOGGER.debug("None of the selectors occur in the document")
        return NoTocResult(NoTocReason.NO_SELECTORS, document, flags)

    levels = resolve_levels(selector_set.selectors, selector_set.spec_text)
    headings = find_headings(document, build_rule(selector_set.selectors))
    if len(headings) < config.min_found:
        LOGGER.debug("Found %d heading(s), min_found is %d", len(headings), config.min_found)
        return NoTocResult(NoTocReason.TOO_FEW_HEADINGS, document, flags)

    slugger = AnchorSlugger(
        config.spec, AnchorRegistry(), before=anchor_before, after=anchor_after
    )
    rewritten, entries = DocumentRewriter(config, slugger).rewrite(document, headings, levels)
    return TocResult(document=rewritten, entries=entries, flags=flags)


@dataclass
class ContentsOutcome:
    """Result of :meth:`TableOfContents.make_contents`."""

    content: str
    toc: str
    entries: List[TocEntry] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.toc)


class TableOfContents:
    """Builds tables of contents for documents with one fixed configuration.

    The instance keeps no per-document state, so one object can serve many
    documents (also from several threads). Per-call markers such as
    ``no_to_menu`` adjust a copy of the configuration only.
    """

    def __init__(
        self,
        config: Optional[TocConfig] = None,
        *,
        anchor_before: Optional[AnchorHook] = None,
        anchor_after: Optional[AnchorHook] = None,
        entry_html: Optional[EntryHook] = None,
        contents_html: Optional[ContentsHook] = None,
    ) -> None:
        self.config = config or TocConfig()
        self._anchor_before = anchor_before
        self._anchor_after = anchor_after
        self.renderer = TableOfContentsRenderer(entry_html=entry_html, contents_html=contents_html)
        self.shortcodes = ShortcodeProcessor(self.config.shortcode)

    def make_contents(
        self, content: str, params: SelectorInput = "", *, page_url: Optional[str] = None
    ) -> ContentsOutcome:
        """Anchor the headings of ``content`` and render its table of contents.

        ``params`` holds selectors and markers (``"h2 h3 .note embed"``); the
        configured selectors apply when it names none. ``page_url`` is the
        address of the page being rendered, used for microdata.
        """
        result = extract_headings(
            content,
            params,
            self.config,
            anchor_before=self._anchor_before,
            anchor_after=self._anchor_after,
        )
        if not result:
            return ContentsOutcome(content=content, toc="")

        config = apply_flags(self.config, result.flags)
        toc = self.renderer.render(result.entries, config, page_url=page_url)
        return ContentsOutcome(content=result.document, toc=toc, entries=result.entries)

    def apply_shortcode(self, content: str, *, page_url: Optional[str] = None) -> str:
        """Replace the ``[contents ...]`` shortcode with the table of contents.

        Only the text after the shortcode is scanned and rewritten.
        """
        located = self.shortcodes.find(content)
        if located is None:
            return content

        outcome = self.make_contents(located.after, located.params, page_url=page_url)
        return located.before + outcome.toc + outcome.content

    def strip_shortcode(self, content: str) -> str:
        return self.shortcodes.strip(content)


__all__ = [
    "ContentsOutcome",
    "ExtractionResult",
    "TableOfContents",
    "apply_flags",
    "extract_headings",
]
