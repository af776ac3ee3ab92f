"""Rendering of the table of contents and shortcode handling."""

from .shortcode import ShortcodeMatch, ShortcodeProcessor
from .toc import TableOfContentsRenderer

__all__ = ["ShortcodeMatch", "ShortcodeProcessor", "TableOfContentsRenderer"]
