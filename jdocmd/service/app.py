"""FastAPI application exposing the parser and batch driver over HTTP."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..documenter import Documenter, DocumentationRun
from ..parsing import parse
from ..render import MarkdownRenderer


class SourceRequest(BaseModel):
    source: str
    filename: Optional[str] = None


class ParamModel(BaseModel):
    name: str
    var_type: str
    desc: str


class MethodModel(BaseModel):
    name: str
    privacy: str
    description: str
    return_type: str
    return_desc: str
    parameters: List[ParamModel]


class ClassModel(BaseModel):
    class_name: str
    access: str
    package_name: str
    description: str
    dependencies: List[str]
    methods: List[MethodModel]
    kind: str


class RenderResponse(BaseModel):
    class_name: str
    file_name: str
    markdown: str


class GenerateRequest(BaseModel):
    path: str
    destination: Optional[str] = None


class GenerateResponse(BaseModel):
    written: List[str]
    failures: Dict[str, str]


class HealthResponse(BaseModel):
    status: str


def _default_documenter() -> Documenter:
    return Documenter()


def create_app(
    documenter_factory: Callable[[], Documenter] = _default_documenter,
    renderer: MarkdownRenderer | None = None,
) -> FastAPI:
    """Create the FastAPI application exposing jdocmd operations."""
    app = FastAPI(title="jdocmd Service", version="1.0.0")
    markdown_renderer = renderer or MarkdownRenderer()

    async def get_documenter() -> Documenter:
        return documenter_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/parse", response_model=ClassModel)
    async def parse_source(payload: SourceRequest) -> ClassModel:
        record = parse(payload.source, filename=payload.filename)
        return ClassModel(**record.to_dict())

    @app.post("/render", response_model=RenderResponse)
    async def render_source(payload: SourceRequest) -> RenderResponse:
        record = parse(payload.source, filename=payload.filename)
        return RenderResponse(
            class_name=record.class_name,
            file_name=markdown_renderer.output_name(record),
            markdown=markdown_renderer.render(record),
        )

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        documenter: Documenter = Depends(get_documenter),
    ) -> GenerateResponse:
        def _run() -> DocumentationRun:
            return documenter.run(payload.path, payload.destination)

        loop = asyncio.get_running_loop()
        run = await loop.run_in_executor(None, _run)
        return GenerateResponse(
            written=[str(path) for path in run.written],
            failures=dict(run.failures),
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
