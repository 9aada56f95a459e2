"""FastAPI application entrypoint."""
from __future__ import annotations

import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api import interpretations, specifications
from .config import ModelerSettings, get_settings
from .observability.log_config import configure_logging
from .observability.otel import configure_telemetry


def create_app(settings: ModelerSettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Event Model Modeler",
        version="0.1.0",
        openapi_version="3.1.0",
        docs_url="/docs",
        redoc_url=None,
    )
    app.state.settings = settings

    configure_logging(settings)
    configure_telemetry(settings)

    @app.exception_handler(Exception)
    async def _generic_exception_handler(request: Request, exc: Exception):  # pragma: no cover - fallback
        return JSONResponse(
            status_code=500,
            content={
                "error": "InternalServerError",
                "message": str(exc),
                "remediation": "Check the service logs for the failing request",
            },
        )

    app.include_router(interpretations.router)
    app.include_router(specifications.router)

    @app.get("/healthz")
    async def healthcheck():
        return {"status": "ok", "environment": settings.environment}

    # Mounted last so API routes take precedence over static files.
    if os.path.isdir(settings.static.public_dir):
        app.mount("/", StaticFiles(directory=settings.static.public_dir, html=True), name="public")

    return app


app = create_app()


__all__ = ["app", "create_app"]
