"""Output formatters for pg-relay."""

from pg_relay.formatters.json import JSONFormatter

__all__ = ["JSONFormatter"]
