"""Connection pool construction for pg-relay.

The pool is the connectivity collaborator shared by every request.
It is built by the composition root (the app factory or the CLI)
and handed to QueryRelay.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import psycopg
from psycopg_pool import ConnectionPool

if TYPE_CHECKING:
    from pg_relay.core.config import ResolvedConfig

CONNECT_TIMEOUT = 10


def create_pool(
    config: ResolvedConfig,
    min_size: int | None = None,
    max_size: int | None = None,
) -> ConnectionPool:
    """Build an unopened pool of autocommit connections.

    Callers open it with pool.open() or by entering it as a context
    manager, and own closing it.
    """
    return ConnectionPool(
        conninfo=config.database_url,
        min_size=min_size if min_size is not None else config.pool_min_size,
        max_size=max_size if max_size is not None else config.pool_max_size,
        kwargs={
            "autocommit": True,
            "application_name": config.application_name,
            "connect_timeout": CONNECT_TIMEOUT,
        },
        timeout=config.pool_timeout,
        name=config.application_name,
        open=False,
    )


def connect_failure(pool: Any) -> psycopg.OperationalError | None:
    """Return the driver error a fresh connection with the pool's settings hits.

    The pool retries failed connects in the background and only reports
    PoolTimeout to the waiting caller. One direct attempt recovers the
    driver's own message ("connection refused", "password authentication
    failed", ...). Returns None when the connect succeeds, i.e. the pool
    was merely exhausted.
    """
    kwargs = dict(pool.kwargs or {})
    kwargs.setdefault("connect_timeout", CONNECT_TIMEOUT)
    try:
        conn = psycopg.connect(pool.conninfo, **kwargs)
    except psycopg.OperationalError as e:
        return e
    conn.close()
    return None
