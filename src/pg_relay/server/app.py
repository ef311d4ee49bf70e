"""FastAPI application exposing the query relay over HTTP.

Composition root: builds the connection pool from the resolved
configuration, hands it to QueryRelay and closes it on shutdown.

Run with: uvicorn --factory pg_relay.server.app:create_app
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import sentry_sdk
import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pg_relay.__about__ import __version__
from pg_relay.core.config import load_config, resolve_config
from pg_relay.core.exceptions import NetworkError, RelayError
from pg_relay.core.logging import get_logger, setup_logging
from pg_relay.core.monitoring import setup_sentry
from pg_relay.core.pool import create_pool
from pg_relay.core.relay import QueryRelay
from pg_relay.server.routes import QUERY_PATH, router

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from psycopg_pool import ConnectionPool

    from pg_relay.core.config import ResolvedConfig

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "Malformed request: " + "; ".join(parts)


def create_app(
    config: ResolvedConfig | None = None,
    pool: ConnectionPool | None = None,
) -> FastAPI:
    """Build the application.

    When a pool is supplied the caller owns it; otherwise one is built
    from the configuration at startup and closed at shutdown.
    """
    if config is None:
        config = resolve_config(load_config())
        setup_logging(json_logs=config.json_logs)
        setup_sentry(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log = get_logger("pg_relay.server")
        owned_pool: ConnectionPool | None = None
        if pool is None:
            log.info("connecting to database", database_url=config.redacted_database_url)
            owned_pool = create_pool(config)
            owned_pool.open(wait=False)
            app.state.relay = QueryRelay(owned_pool)
        log.info("server ready", version=__version__)

        yield

        log.info("shutting down")
        if owned_pool is not None:
            owned_pool.close()

    app = FastAPI(
        title="pg-relay",
        description="Executes submitted SQL against PostgreSQL and returns rows as JSON",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    if pool is not None:
        app.state.relay = QueryRelay(pool)

    @app.middleware("http")
    async def cors_and_request_context(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        log = get_logger("pg_relay.server")
        with structlog.contextvars.bound_contextvars(request_id=uuid.uuid4().hex[:12]):
            log.info("received request", method=request.method, path=request.url.path)
            if request.method == "OPTIONS" and request.url.path == QUERY_PATH:
                response = Response(status_code=200)
            else:
                response = await call_next(request)
            response.headers.update(CORS_HEADERS)
            return response

    @app.exception_handler(RequestValidationError)
    async def malformed_request(
        request: Request, exc: RequestValidationError
    ) -> PlainTextResponse:
        message = describe_validation_error(exc)
        get_logger("pg_relay.server").warning("malformed request", error=message)
        return PlainTextResponse(message, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        return PlainTextResponse(
            str(exc.detail), status_code=exc.status_code, headers=exc.headers
        )

    @app.exception_handler(RelayError)
    async def relay_error(request: Request, exc: RelayError) -> PlainTextResponse:
        if isinstance(exc, NetworkError):
            sentry_sdk.capture_exception(exc)
        return PlainTextResponse(
            f"Database Error: {exc.message}", status_code=exc.status_code
        )

    app.include_router(router)
    return app
