"""Shared CLI plumbing for command modules."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pg_relay.core.config import load_config, resolve_config

if TYPE_CHECKING:
    import typer

    from pg_relay.core.config import ResolvedConfig


def get_config(ctx: typer.Context, **cli_overrides: Any) -> ResolvedConfig:
    obj = ctx.ensure_object(dict)
    config = load_config(obj.get("config_file"))
    return resolve_config(
        config,
        dsn=obj.get("dsn"),
        **{key: val for key, val in cli_overrides.items() if val is not None},
    )


def is_verbose(ctx: typer.Context) -> bool:
    return bool(ctx.ensure_object(dict).get("verbose", False))
