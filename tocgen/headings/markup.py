"""Pattern-based tag stripping used on heading text."""

from __future__ import annotations

import re
from typing import Collection, Optional

_TAG_PATTERN = re.compile(r"<(/?)([A-Za-z][A-Za-z0-9:-]*)?[^>]*>", re.DOTALL)
_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)


def strip_tags(text: str, allowed: Optional[Collection[str]] = None) -> str:
    """Remove markup tags, keeping those named in ``allowed`` (lowercase names)."""
    text = _COMMENT_PATTERN.sub("", text)
    if not allowed:
        return _TAG_PATTERN.sub("", text)

    def _keep_allowed(match: re.Match[str]) -> str:
        name = (match.group(2) or "").lower()
        return match.group(0) if name in allowed else ""

    return _TAG_PATTERN.sub(_keep_allowed, text)


def remove_tags(text: str, names: Collection[str]) -> str:
    """Remove only the tags named in ``names``; their inner text stays."""

    def _drop_named(match: re.Match[str]) -> str:
        name = (match.group(2) or "").lower()
        return "" if name in names else match.group(0)

    return _TAG_PATTERN.sub(_drop_named, text)


__all__ = ["remove_tags", "strip_tags"]
