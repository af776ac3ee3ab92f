"""FastAPI application exposing tocgen over HTTP."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError, TocConfig, config_from_mapping
from ..contents import TableOfContents
from ..headings.selectors import SelectorError


class ContentsRequest(BaseModel):
    content: str
    params: str = ""
    page_url: Optional[str] = None
    options: Dict[str, Any] = Field(default_factory=dict)


class EntryModel(BaseModel):
    anchor: str
    text: str
    level: int
    tag: str
    position: int
    description: str = ""


class ContentsResponse(BaseModel):
    found: bool
    toc: str
    content: str
    entries: List[EntryModel] = Field(default_factory=list)


class ShortcodeRequest(BaseModel):
    content: str
    page_url: Optional[str] = None
    options: Dict[str, Any] = Field(default_factory=dict)


class ShortcodeResponse(BaseModel):
    content: str


class HealthResponse(BaseModel):
    status: str


def _default_contents(config: TocConfig) -> TableOfContents:
    return TableOfContents(config)


def create_app(
    contents_factory: Callable[[TocConfig], TableOfContents] = _default_contents,
    *,
    base_config: Optional[TocConfig] = None,
) -> FastAPI:
    """Create the FastAPI application; ``options`` in requests override ``base_config``."""

    app = FastAPI(title="tocgen", version="1.0.0")
    defaults = base_config or TocConfig()

    def _contents_for(options: Dict[str, Any]) -> TableOfContents:
        config = config_from_mapping(options, base=defaults) if options else defaults
        return contents_factory(config)

    async def get_factory() -> Callable[[Dict[str, Any]], TableOfContents]:
        return _contents_for

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/contents", response_model=ContentsResponse)
    def make_contents(
        payload: ContentsRequest,
        factory: Callable[[Dict[str, Any]], TableOfContents] = Depends(get_factory),
    ) -> ContentsResponse:
        # sync handler, runs in the threadpool
        outcome = factory(payload.options).make_contents(
            payload.content, payload.params, page_url=payload.page_url
        )
        return ContentsResponse(
            found=outcome.found,
            toc=outcome.toc,
            content=outcome.content,
            entries=[EntryModel(**vars(entry)) for entry in outcome.entries],
        )

    @app.post("/shortcode", response_model=ShortcodeResponse)
    def apply_shortcode(
        payload: ShortcodeRequest,
        factory: Callable[[Dict[str, Any]], TableOfContents] = Depends(get_factory),
    ) -> ShortcodeResponse:
        contents = factory(payload.options)
        return ShortcodeResponse(content=contents.apply_shortcode(payload.content, page_url=payload.page_url))

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(SelectorError)
    async def selector_error_handler(_: Any, exc: SelectorError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
