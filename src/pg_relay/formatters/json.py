"""JSON formatter for relay result sets."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pg_relay.core.models import QueryResult


class JSONFormatter:
    def __init__(self, compact: bool = False) -> None:
        self.compact = compact

    def format(self, result: QueryResult) -> Iterator[str]:
        if self.compact:
            yield json.dumps(result.rows, default=str)
        else:
            yield json.dumps(result.rows, indent=2, default=str)
