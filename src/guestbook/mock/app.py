"""
FastAPI Application Factory for the mock visitor data source.

This module builds the single-route HTTP service the guestbook session
bootstraps from. It is responsible for:
1.  **Payload**: Loading the static JSON array once (packaged sample or the
    file named by ``GUESTBOOK_MOCK_DATA``).
2.  **Middleware**: Permissive cross-origin headers on every response, plus a
    per-request log line (method, endpoint, origin).
3.  **Exception Handling**: Global handler so errors return structured JSON.
4.  **Routing**: ``GET /`` (visitors) and ``GET /health``.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`) so tests can spin up
separate app instances with their own payloads.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from guestbook import __version__
from guestbook.core.settings import get_logger, load_settings

logger = get_logger("guestbook.mock")

#: Sample payload shipped with the package.
DEFAULT_DATA_PATH = Path(__file__).with_name("data.json")

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}


def load_payload(path: Path | None = None) -> list[dict[str, Any]]:
    """
    Read the mock visitors from ``path`` (or the configured / packaged file).

    Raises
    ------
    ValueError
        If the file does not hold a JSON array of objects.
    """
    source = path or load_settings().mock_data or DEFAULT_DATA_PATH
    with open(source, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{source} must contain a JSON array of objects")
    return data


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """ASGI lifespan: announce the payload size on startup."""
    logger.info("Mock server serving %d visitors", len(app.state.visitors))
    yield
    logger.info("Mock server shutting down")


def create_app(payload: list[dict[str, Any]] | None = None) -> FastAPI:
    """
    Construct and configure the mock data source application.

    Parameters
    ----------
    payload:
        Visitors to serve from ``GET /``. When omitted, :func:`load_payload`
        supplies them.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    app = FastAPI(
        title="Guestbook Mock Server",
        description="Static visitor data for the guestbook session client",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.visitors = list(payload) if payload is not None else load_payload()

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    # Answers CORS preflights; the http middleware below covers plain requests.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_and_allow_any_origin(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.info(
            "method: %s | endpoint: %s | source: %s",
            request.method,
            request.url.path,
            request.headers.get("origin"),
        )
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    # -----------------------------------------------------------------------
    # Global Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler so unhandled exceptions return structured JSON."""
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
            headers=CORS_HEADERS,
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    @app.get("/", tags=["Visitors"])
    async def list_visitors(request: Request) -> list[dict[str, Any]]:
        """Return the static visitor list."""
        visitors: list[dict[str, Any]] = request.app.state.visitors
        return visitors

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness probe."""
        return {
            "status": "ok",
            "environment": load_settings().environment,
            "version": __version__,
        }

    return app


__all__ = ["CORS_HEADERS", "DEFAULT_DATA_PATH", "create_app", "load_payload"]
