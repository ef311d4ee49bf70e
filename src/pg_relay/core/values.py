"""Normalization of driver values into JSON-compatible cell values."""

from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Any

from pg_relay.core.models import CellValue


def decode_bytes(val: bytes | bytearray | memoryview) -> str:
    return bytes(val).decode("utf-8", errors="replace")


def normalize_value(val: Any) -> CellValue:
    """Convert one value returned by psycopg into a JSON cell value.

    Raw byte sequences become text. Types with no JSON counterpart
    (Decimal, UUID, intervals, inet) are rendered with str().
    """
    if val is None or isinstance(val, (bool, int, str)):
        return val
    if isinstance(val, float):
        if math.isfinite(val):
            return val
        return str(val).replace("inf", "Infinity").replace("nan", "NaN")
    if isinstance(val, (bytes, bytearray, memoryview)):
        return decode_bytes(val)
    if isinstance(val, (datetime, date, time)):
        return val.isoformat()
    if isinstance(val, (list, tuple)):
        return [normalize_value(item) for item in val]
    if isinstance(val, dict):
        return {str(key): normalize_value(item) for key, item in val.items()}
    return str(val)


def build_row(column_names: list[str], values: tuple[Any, ...]) -> dict[str, CellValue]:
    """Map each column name to its normalized value, in column order."""
    return {
        name: normalize_value(val)
        for name, val in zip(column_names, values, strict=True)
    }
