from __future__ import annotations

from typing import Annotated

import typer
import uvicorn

from pg_relay.cli.commands._shared import get_config, is_verbose
from pg_relay.core.logging import get_logger, setup_logging
from pg_relay.core.monitoring import setup_sentry
from pg_relay.server.app import create_app


def serve_command(
    ctx: typer.Context,
    host: Annotated[
        str | None,
        typer.Option("--host", "-H", help="Interface to bind"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port to listen on"),
    ] = None,
) -> None:
    """Run the HTTP relay server (POST /query)."""
    verbose = is_verbose(ctx)
    config = get_config(ctx, host=host, port=port)
    setup_logging(verbose, json_logs=config.json_logs)
    sentry_enabled = setup_sentry(config)

    log = get_logger("pg_relay.cli")
    log.info(
        "starting server",
        host=config.host,
        port=config.port,
        database_url=config.redacted_database_url,
        sentry=sentry_enabled,
    )
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="debug" if verbose else "info",
    )
