"""Heading anchors and tables of contents for HTML documents."""

from .config import ConfigError, TocConfig, config_from_mapping, load_config
from .contents import ContentsOutcome, TableOfContents, extract_headings
from .headings.selectors import SelectorError
from .models import NoTocReason, NoTocResult, TocEntry, TocResult

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "ContentsOutcome",
    "NoTocReason",
    "NoTocResult",
    "SelectorError",
    "TableOfContents",
    "TocConfig",
    "TocEntry",
    "TocResult",
    "config_from_mapping",
    "extract_headings",
    "load_config",
]
