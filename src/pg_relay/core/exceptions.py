"""Exception hierarchy for pg-relay.

Every exception carries an exit_code for the CLI and a status_code for
the HTTP layer.
"""

from pg_relay.core.exit_codes import ExitCode


class RelayError(Exception):
    """Base exception for all pg-relay errors."""

    exit_code: int = ExitCode.GENERAL_ERROR
    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InputError(RelayError):
    """Missing query text, file not found, malformed request body."""

    exit_code: int = ExitCode.INPUT_ERROR
    status_code: int = 400


class ConfigError(RelayError):
    """Malformed config file, invalid database URL."""

    exit_code: int = ExitCode.CONFIG_ERROR


class QueryExecutionError(RelayError):
    """The database rejected or failed to run the submitted text."""

    exit_code: int = ExitCode.QUERY_ERROR


class NetworkError(QueryExecutionError):
    """Connection failures, unreachable host, pool checkout timeout."""

    exit_code: int = ExitCode.NETWORK_ERROR
