"""Tests for JSONFormatter."""

import json

import pytest

from pg_relay.core.models import ColumnMeta, QueryResult
from pg_relay.formatters.json import JSONFormatter


def _make_result(rows=None):
    if rows is None:
        rows = [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}]
    return QueryResult(
        columns=[
            ColumnMeta(name="id", type_oid=23, type_name="int4"),
            ColumnMeta(name="name", type_oid=25, type_name="text"),
        ],
        rows=rows,
        row_count=len(rows),
        status_message=f"SELECT {len(rows)}",
    )


@pytest.mark.unit
def test_json_formatter_rows_as_dicts():
    output = "\n".join(JSONFormatter().format(_make_result()))
    parsed = json.loads(output)
    assert parsed == [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}]


@pytest.mark.unit
def test_json_formatter_pretty_print_default():
    output = "\n".join(JSONFormatter().format(_make_result()))
    assert "\n" in output
    assert "  " in output


@pytest.mark.unit
def test_json_formatter_compact_mode():
    output = "\n".join(JSONFormatter(compact=True).format(_make_result()))
    assert "\n" not in output
    assert json.loads(output)[0] == {"id": 1, "name": "alice"}


@pytest.mark.unit
def test_json_formatter_empty_result():
    output = "\n".join(JSONFormatter(compact=True).format(_make_result(rows=[])))
    assert output == "[]"


@pytest.mark.unit
def test_json_formatter_handles_none_values():
    output = "\n".join(JSONFormatter().format(_make_result(rows=[{"id": 1, "name": None}])))
    assert json.loads(output)[0]["name"] is None


@pytest.mark.unit
def test_json_formatter_keeps_column_order():
    rows = [{"name": "alice", "id": 1}]
    output = "\n".join(JSONFormatter(compact=True).format(_make_result(rows=rows)))
    assert output == '[{"name": "alice", "id": 1}]'
