"""Standard exit codes for pg-relay commands."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for pg-relay commands.

    Values are stable across releases; unused numbers stay unassigned.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INPUT_ERROR = 3
    NETWORK_ERROR = 5
    CONFIG_ERROR = 7
    QUERY_ERROR = 8
