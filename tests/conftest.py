"""Shared test fixtures for pg-relay."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from typer.testing import CliRunner

from pg_relay.cli.main import app
from tests.fakes import FakeColumn, FakePool, static_outcome


@pytest.fixture
def people_pool():
    """Pool answering every query with two rows of (id, name)."""
    return FakePool(
        static_outcome(
            [FakeColumn("id", 23), FakeColumn("name", 25)],
            [(1, "alice"), (2, "bob")],
        )
    )


@pytest.fixture
def runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_runner(runner):
    """Invoke the CLI app with the given arguments."""

    def invoke(*args: str, **kwargs):
        return runner.invoke(app, list(args), **kwargs)

    return invoke


@pytest.fixture
def temp_dir():
    """Temporary directory for test files."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove pg-relay environment variables so defaults apply."""
    for var in (
        "DATABASE_URL",
        "PG_RELAY_HOST",
        "PG_RELAY_PORT",
        "PG_RELAY_POOL_MIN_SIZE",
        "PG_RELAY_POOL_MAX_SIZE",
        "PG_RELAY_ENVIRONMENT",
        "PG_RELAY_CONFIG",
        "SENTRY_DSN",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
