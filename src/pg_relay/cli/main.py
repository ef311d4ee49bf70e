"""pg-relay main entry point and command registration."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Annotated

import sentry_sdk
import typer

from pg_relay.__about__ import __version__
from pg_relay.cli.commands.query import query_command
from pg_relay.cli.commands.serve import serve_command
from pg_relay.core.exceptions import RelayError
from pg_relay.core.logging import setup_logging

app = typer.Typer(
    help="pg-relay - run SQL against PostgreSQL over HTTP",
    no_args_is_help=True,
)

app.command("serve")(serve_command)
app.command("query")(query_command)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pg-relay {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable verbose logging"),
    ] = False,
    dsn: Annotated[
        str | None,
        typer.Option("--dsn", help="Database URL (overrides DATABASE_URL)"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config file"),
    ] = None,
) -> None:
    """pg-relay - run SQL against PostgreSQL over HTTP."""
    setup_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["dsn"] = dsn
    ctx.obj["config_file"] = config_file


def run() -> None:
    """Entry point with global error handling."""
    try:
        app()
    except RelayError as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e.message}", err=True)
        raise SystemExit(e.exit_code) from None
    except SystemExit:
        raise
    except KeyboardInterrupt:
        raise SystemExit(130) from None
    except Exception as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None
