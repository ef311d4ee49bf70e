"""Request and result models for pg-relay.

Pydantic models for the incoming query request and the result
returned by QueryRelay.execute_query().
"""

from __future__ import annotations

from typing import Any, TypeAlias

from pydantic import BaseModel

CellValue: TypeAlias = str | int | float | bool | list[Any] | dict[str, Any] | None
ResultRow: TypeAlias = dict[str, CellValue]
ResultSet: TypeAlias = list[ResultRow]


class QueryRequest(BaseModel):
    """Body of POST /query. The text is executed verbatim."""

    sql: str


class ColumnMeta(BaseModel):
    """Metadata for a single result column."""

    name: str
    type_oid: int
    type_name: str


class QueryResult(BaseModel):
    """Result of a SQL query execution."""

    columns: list[ColumnMeta]
    rows: ResultSet
    row_count: int
    status_message: str

    @property
    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]
