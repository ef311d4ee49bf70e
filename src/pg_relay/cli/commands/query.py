from __future__ import annotations

from typing import Annotated

import sentry_sdk
import typer

from pg_relay.cli.commands._shared import get_config
from pg_relay.core.exceptions import InputError
from pg_relay.core.exit_codes import ExitCode
from pg_relay.core.monitoring import setup_sentry
from pg_relay.core.pool import create_pool
from pg_relay.core.query_source import read_query_text, stdin_is_terminal
from pg_relay.core.relay import QueryRelay
from pg_relay.formatters.json import JSONFormatter


def query_command(
    ctx: typer.Context,
    file: Annotated[
        str | None,
        typer.Argument(help="SQL file to execute, or - for stdin"),
    ] = None,
    execute: Annotated[
        str | None,
        typer.Option("--execute", "-e", help="Execute inline SQL query"),
    ] = None,
    compact: Annotated[
        bool,
        typer.Option("--compact", help="Compact JSON output (no indentation)"),
    ] = False,
) -> None:
    """Execute a SQL query through the relay and print the rows as JSON."""
    if execute is None and file is None and stdin_is_terminal():
        typer.echo(ctx.get_help())
        raise typer.Exit()

    try:
        sql = read_query_text(execute, file)
    except InputError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(ExitCode.INPUT_ERROR) from exc

    config = get_config(ctx)
    setup_sentry(config)
    with (
        sentry_sdk.start_transaction(op="cli", name="query"),
        create_pool(config, min_size=1, max_size=1) as pool,
    ):
        result = QueryRelay(pool).execute_query(sql)

    for line in JSONFormatter(compact=compact).format(result):
        typer.echo(line)
