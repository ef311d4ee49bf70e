"""Sentry integration for error tracking and performance monitoring.

Sentry stays disabled unless a DSN is configured.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import sentry_sdk

from pg_relay.__about__ import __version__

if TYPE_CHECKING:
    from pg_relay.core.config import ResolvedConfig


def setup_sentry(config: ResolvedConfig) -> bool:
    """Initialize Sentry when the resolved config carries a DSN.

    Returns True when Sentry was initialized.
    """
    if not config.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=config.sentry_dsn,
        traces_sample_rate=config.sentry_traces_sample_rate,
        environment=config.environment,
        release=__version__,
        attach_stacktrace=True,
        send_default_pii=False,
    )
    return True
