"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from tocgen.config import TocConfig
from tocgen.contents import TableOfContents
from tocgen.service import create_app

DOCUMENT = "<h2>Intro</h2><p>Hello</p><h3>Details</h3>"


class _RecordingFactory:
    def __init__(self) -> None:
        self.configs: list[TocConfig] = []

    def __call__(self, config: TocConfig) -> TableOfContents:
        self.configs.append(config)
        return TableOfContents(config)


@pytest.fixture
def factory() -> _RecordingFactory:
    return _RecordingFactory()


@pytest.fixture
def client(factory: _RecordingFactory) -> TestClient:
    app = create_app(factory, base_config=TocConfig(min_length=0))
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_contents_endpoint(client: TestClient) -> None:
    response = client.post("/contents", json={"content": DOCUMENT, "params": "h2 h3 embed"})

    assert response.status_code == 200
    data = response.json()
    assert data["found"] is True
    assert data["toc"].startswith('<ul id="tocmenu" class="tocgen">')
    assert '<h3 id="details">Details</h3>' in data["content"]
    assert [(e["anchor"], e["level"]) for e in data["entries"]] == [("intro", 0), ("details", 1)]


def test_contents_endpoint_without_toc(client: TestClient) -> None:
    response = client.post("/contents", json={"content": "<p>plain</p>"})

    data = response.json()
    assert data == {"found": False, "toc": "", "content": "<p>plain</p>", "entries": []}


def test_options_override_base_config(client: TestClient, factory: _RecordingFactory) -> None:
    response = client.post(
        "/contents",
        json={"content": DOCUMENT, "options": {"min_length": 1000}},
    )

    assert response.json()["found"] is False
    assert factory.configs[-1].min_length == 1000


def test_contents_endpoint_passes_page_url(client: TestClient) -> None:
    response = client.post(
        "/contents",
        json={
            "content": DOCUMENT,
            "page_url": "https://example.com/post",
            "options": {"markup": True},
        },
    )
    assert 'content="https://example.com/post#intro"' in response.json()["toc"]


def test_shortcode_endpoint(client: TestClient) -> None:
    response = client.post(
        "/shortcode", json={"content": "<p>Lead</p>[contents h2 embed]" + DOCUMENT}
    )

    assert response.status_code == 200
    content = response.json()["content"]
    assert content.startswith('<p>Lead</p><ul id="tocmenu" class="tocgen">')
    assert '<h2 id="intro">Intro</h2>' in content


def test_invalid_options_return_400(client: TestClient) -> None:
    response = client.post(
        "/contents", json={"content": DOCUMENT, "options": {"anchor_type": "span"}}
    )
    assert response.status_code == 400
    assert "anchor_type" in response.json()["detail"]


def test_invalid_selector_returns_400(client: TestClient) -> None:
    response = client.post("/contents", json={"content": DOCUMENT, "params": "h2 #x"})
    assert response.status_code == 400
    assert "Invalid tag selector" in response.json()["detail"]
