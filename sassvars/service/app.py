"""FastAPI application entrypoint for sassvars service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..compiler import CompileOptions
from ..errors import CompileError, ExtractionError
from ..extractor import ExtractOptions, Extractor
from ..render import render


class ExtractRequest(BaseModel):
    path: Optional[str] = None
    data: Optional[str] = None
    include_paths: List[str] = Field(default_factory=list)
    plugins: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)


class ExtractResponse(BaseModel):
    css: str
    vars: Any


class HealthResponse(BaseModel):
    status: str


def _default_extractor() -> Extractor:
    return Extractor()


def create_app(
    extractor_factory: Callable[[], Extractor] = _default_extractor,
) -> FastAPI:
    """Create the FastAPI application exposing variable extraction."""

    app = FastAPI(title="sassvars", version="1.0.0")

    async def get_extractor() -> Extractor:
        return extractor_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/extract", response_model=ExtractResponse)
    async def extract_variables(
        payload: ExtractRequest,
        extractor: Extractor = Depends(get_extractor),
    ) -> ExtractResponse:
        if payload.path is None and payload.data is None:
            raise ValueError("Request requires 'path' or 'data'")
        if payload.path is not None and payload.data is None and not Path(payload.path).is_file():
            raise FileNotFoundError(f"Entry stylesheet not found: {payload.path}")

        compile_options = CompileOptions(
            file=payload.path,
            data=payload.data,
            include_paths=list(payload.include_paths),
        )
        extract_options = ExtractOptions(plugins=list(payload.plugins))

        def _run_render() -> Any:
            return render(compile_options, extract_options, extractor=extractor)

        loop = asyncio.get_running_loop()
        rendered = await loop.run_in_executor(None, _run_render)
        return ExtractResponse(css=rendered.css, vars=rendered.vars)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ExtractionError)
    async def extraction_error_handler(_: Any, exc: ExtractionError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(CompileError)
    async def compile_error_handler(_: Any, exc: CompileError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    uvicorn.run(create_app(), host=host, port=port)
