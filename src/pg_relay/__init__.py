"""pg-relay - HTTP relay that runs SQL against PostgreSQL."""

from pg_relay.__about__ import __version__

__all__ = ["__version__"]
