"""Core data models shared across tocgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class TagSelector:
    """Matches elements by tag name (``h2``)."""

    name: str
    text: str = field(default="", compare=False)

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class ClassSelector:
    """Matches elements whose ``class`` attribute holds ``name`` (``.note``)."""

    name: str
    text: str = field(default="", compare=False)

    @property
    def key(self) -> str:
        return self.name


SelectorSpec = Union[TagSelector, ClassSelector]
LevelMap = Dict[SelectorSpec, int]


@dataclass(frozen=True)
class SelectorFlags:
    """Side-channel markers parsed out of a selector specification."""

    embed: bool = False
    no_to_menu: bool = False
    as_table: Optional[Tuple[str, str]] = None


@dataclass
class HeadingMatch:
    """One heading-like element found in the scanned document."""

    full_match: str
    tag: str
    attrs: str
    selector: SelectorSpec
    inner: str
    position: int
    start: int
    end: int

    @property
    def selector_key(self) -> str:
        return self.selector.key


@dataclass
class TocEntry:
    """Row of the table of contents derived from a processed heading."""

    anchor: str
    text: str
    level: int
    tag: str
    position: int
    description: str = ""


class NoTocReason(str, Enum):
    TEXT_TOO_SHORT = "text_too_short"
    NO_SELECTORS = "no_selectors"
    TOO_FEW_HEADINGS = "too_few_headings"


@dataclass
class TocResult:
    """Rewritten document plus the ordered table-of-contents entries."""

    document: str
    entries: List[TocEntry]
    flags: SelectorFlags = field(default_factory=SelectorFlags)

    found = True

    def __bool__(self) -> bool:
        return True


@dataclass
class NoTocResult:
    """Explicit "no table of contents" outcome; the document is untouched."""

    reason: NoTocReason
    document: str
    flags: SelectorFlags = field(default_factory=SelectorFlags)

    found = False

    def __bool__(self) -> bool:
        return False
