from __future__ import annotations

import pytest

from tests._fixtures.document_builder import DocumentBuilder
from tocgen.config import TocConfig


@pytest.fixture
def doc() -> DocumentBuilder:
    """Provide a fresh HTML document builder."""
    return DocumentBuilder()


@pytest.fixture
def relaxed_config() -> TocConfig:
    """Configuration without length gating or back-to-top links."""
    return TocConfig(min_length=0, to_menu="")
