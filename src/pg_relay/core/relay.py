"""Query relay for pg-relay.

Runs query text verbatim on a pooled psycopg v3 connection, turns the
rows into column-name-to-value mappings and maps driver failures to
the RelayError hierarchy.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import psycopg
import psycopg.errors
import sentry_sdk
import structlog
from psycopg_pool import PoolTimeout

from pg_relay.core.exceptions import NetworkError, QueryExecutionError
from pg_relay.core.models import ColumnMeta, QueryResult
from pg_relay.core.pool import connect_failure
from pg_relay.core.values import build_row

if TYPE_CHECKING:
    from psycopg_pool import ConnectionPool

# Mapping from psycopg type OIDs to human-readable names.
# Covers the most common PostgreSQL types; unknown OIDs fall back to "unknown".
_TYPE_NAMES: dict[int, str] = {
    16: "bool",
    17: "bytea",
    20: "int8",
    21: "int2",
    23: "int4",
    25: "text",
    26: "oid",
    114: "json",
    142: "xml",
    700: "float4",
    701: "float8",
    790: "money",
    869: "inet",
    1042: "bpchar",
    1043: "varchar",
    1082: "date",
    1083: "time",
    1114: "timestamp",
    1184: "timestamptz",
    1186: "interval",
    1700: "numeric",
    2950: "uuid",
    3802: "jsonb",
}


class QueryRelay:
    """Executes submitted SQL against a shared connection pool.

    The relay holds no state between calls. Each call borrows one
    connection for the duration of the statement.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self.pool = pool

    def execute_query(self, sql: str) -> QueryResult:
        """Execute SQL verbatim and return every row.

        Raises QueryExecutionError (or NetworkError for connectivity
        failures) carrying the driver's message. Nothing is retried.
        """
        log = structlog.get_logger()
        sql_normalized = " ".join(sql.split())
        log.debug("executing query", sql=sql_normalized)
        with sentry_sdk.start_span(op="db.query", name=sql_normalized[:100]) as span:
            start_time = time.monotonic()
            try:
                with self.pool.connection() as conn, conn.cursor() as cur:
                    cur.execute(sql)
                    columns, rows = self._collect(cur)
                    status_message = cur.statusmessage or ""
            except psycopg.errors.QueryCanceled as e:
                span.set_status("cancelled")
                log.error("query canceled", sql=sql_normalized, error=str(e))
                raise QueryExecutionError(str(e)) from e
            except PoolTimeout as e:
                span.set_status("unavailable")
                cause = connect_failure(self.pool) or e
                log.error("database unavailable", sql=sql_normalized, error=str(cause))
                raise NetworkError(str(cause)) from cause
            except psycopg.OperationalError as e:
                span.set_status("unavailable")
                log.error("database unavailable", sql=sql_normalized, error=str(e))
                raise NetworkError(str(e)) from e
            except psycopg.Error as e:
                span.set_status("internal_error")
                log.error("query failed", sql=sql_normalized, error=str(e))
                raise QueryExecutionError(str(e)) from e

            duration_ms = (time.monotonic() - start_time) * 1000
            span.set_data("row_count", len(rows))
            span.set_data("duration_ms", duration_ms)
            log.debug(
                "query complete",
                duration_ms=f"{duration_ms:.1f}",
                row_count=len(rows),
            )

        return QueryResult(
            columns=columns,
            rows=rows,
            row_count=len(rows),
            status_message=status_message,
        )

    @staticmethod
    def _collect(
        cur: psycopg.Cursor[Any],
    ) -> tuple[list[ColumnMeta], list[dict[str, Any]]]:
        # Statements without a result (DDL, INSERT without RETURNING)
        # have no description and produce an empty result set.
        if not cur.description:
            return [], []

        columns = [
            ColumnMeta(
                name=desc.name,
                type_oid=desc.type_code,
                type_name=_TYPE_NAMES.get(desc.type_code, "unknown"),
            )
            for desc in cur.description
        ]
        names = [col.name for col in columns]
        rows = [build_row(names, values) for values in cur.fetchall()]
        return columns, rows
