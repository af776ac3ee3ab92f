"""HTML rendering of the table of contents (list or table)."""

from __future__ import annotations

import html
import re
from typing import Callable, Optional, Sequence

from ..config import TocConfig, parse_margin
from ..headings.constants import MENU_ANCHOR
from ..headings.markup import strip_tags
from ..models import TocEntry

EntryHook = Callable[[str, TocEntry], str]
ContentsHook = Callable[[str], str]

_WHITESPACE_RUN = re.compile(r"[\n\t ]+")

_ITEM_LIST_ATTRS = ' itemscope itemtype="https://schema.org/ItemList"'
_LIST_ITEM_ATTRS = ' itemprop="itemListElement" itemscope itemtype="https://schema.org/ListItem"'


class TableOfContentsRenderer:
    """Turns ordered TOC entries into the menu markup.

    ``entry_html`` may rewrite each rendered row, ``contents_html`` the whole
    block before the optional script is appended.
    """

    def __init__(
        self,
        *,
        entry_html: Optional[EntryHook] = None,
        contents_html: Optional[ContentsHook] = None,
    ) -> None:
        self._entry_hook = entry_html
        self._contents_hook = contents_html

    def render(
        self, entries: Sequence[TocEntry], config: TocConfig, *, page_url: Optional[str] = None
    ) -> str:
        if not entries:
            return ""
        item_page_url = page_url if page_url is not None else config.page_url
        rows = "".join(
            f"\t{self._render_entry(entry, config, item_page_url)}\n" for entry in entries
        )

        if config.as_table is not None:
            head_title, head_description = config.as_table
            block = (
                f'<table id="{MENU_ANCHOR}" class="tocgen"{self._item_list(config)}>\n'
                f"{self._item_name(config)}"
                "<thead>\n"
                f"\t<tr><th>{html.escape(head_title)}</th>"
                f"<th>{html.escape(head_description)}</th></tr>\n"
                "</thead>\n"
                f"<tbody>\n{rows}</tbody>\n"
                "</table>"
            )
        else:
            block = (
                f'<ul id="{MENU_ANCHOR}" class="tocgen"{self._item_list(config)}>\n'
                f"{self._item_name(config)}{rows}</ul>"
            )
            if config.title and not config.embed:
                block = (
                    '<div class="tocgen-wrap">\n'
                    f'<div class="tocgen-wrap__title">{config.title}</div>\n'
                    f"{block}\n"
                    "</div>"
                )

        if self._contents_hook is not None:
            block = self._contents_hook(block)
        if config.js:
            block += f"\n<script>{_WHITESPACE_RUN.sub(' ', config.js)}</script>"
        return block

    def _render_entry(self, entry: TocEntry, config: TocConfig, page_url: str) -> str:
        link = f'<a rel="nofollow" href="{config.page_url}#{entry.anchor}">{entry.text}</a>'
        microdata = self._entry_microdata(entry, config, page_url)

        if config.as_table is not None:
            row = (
                f"<tr><td{_LIST_ITEM_ATTRS if config.markup else ''}>{link}{microdata}</td>"
                f"<td>{entry.description}</td></tr>"
            )
        else:
            attrs = self._level_attrs(entry.level, config)
            if config.markup:
                attrs += _LIST_ITEM_ATTRS
            row = f"<li{attrs}>{link}{microdata}</li>"

        if self._entry_hook is not None:
            row = self._entry_hook(row, entry)
        return row

    @staticmethod
    def _level_attrs(level: int, config: TocConfig) -> str:
        if level <= 0:
            return ' class="tocgen__top"'
        attrs = f' class="tocgen__sub tocgen__sub_{level}"'
        margin = parse_margin(config.margin)
        if margin is not None:
            amount, unit = margin
            attrs += f' style="margin-left:{_format_number(amount * level)}{unit};"'
        return attrs

    @staticmethod
    def _entry_microdata(entry: TocEntry, config: TocConfig, page_url: str) -> str:
        if not config.markup:
            return ""
        item = html.escape(f"{page_url}#{entry.anchor}")
        name = html.escape(strip_tags(entry.text).strip())
        return (
            f'<meta itemprop="item" content="{item}" />'
            f'<meta itemprop="name" content="{name}" />'
            f'<meta itemprop="position" content="{int(entry.position)}" />'
        )

    @staticmethod
    def _item_list(config: TocConfig) -> str:
        return _ITEM_LIST_ATTRS if config.markup else ""

    @staticmethod
    def _item_name(config: TocConfig) -> str:
        if not config.markup:
            return ""
        title = html.escape(strip_tags(config.title).strip())
        return f'<meta itemprop="name" content="{title}" />\n'


def _format_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else f"{value:g}"


__all__ = ["ContentsHook", "EntryHook", "TableOfContentsRenderer"]
