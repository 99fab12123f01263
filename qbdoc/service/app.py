"""FastAPI application serving generated documentation."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..generator import ControllerNotFoundError, DocumentGenerator
from ..logging import service_log_level


class HealthResponse(BaseModel):
    status: str


def _default_generator() -> DocumentGenerator:
    return DocumentGenerator()


def create_app(
    project: str | Path = ".",
    generator_factory: Callable[[], DocumentGenerator] = _default_generator,
) -> FastAPI:
    """Create the FastAPI application exposing the generated document."""

    app = FastAPI(title="qbdoc", version="1.0.0")
    project_path = Path(project)

    async def get_generator() -> DocumentGenerator:
        # Fresh generator per request so edits to the project show up on reload.
        return generator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/docs/api.json")
    async def document(
        generator: DocumentGenerator = Depends(get_generator),
    ) -> Dict[str, Any]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, generator.generate, project_path)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ControllerNotFoundError)
    async def controller_not_found_handler(_: Any, exc: ControllerNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    project: str | Path = ".", host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app(project)
    uvicorn.run(app, host=host, port=port, log_level=service_log_level())
