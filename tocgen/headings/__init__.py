"""Heading discovery, level resolution and anchor generation."""

from .extractor import HeadingRule, build_rule, find_headings
from .levels import resolve_levels
from .rewriter import DocumentRewriter
from .selectors import SelectorError, SelectorSet, parse_selectors
from .slugger import AnchorRegistry, AnchorSlugger

__all__ = [
    "AnchorRegistry",
    "AnchorSlugger",
    "DocumentRewriter",
    "HeadingRule",
    "SelectorError",
    "SelectorSet",
    "build_rule",
    "find_headings",
    "parse_selectors",
    "resolve_levels",
]
