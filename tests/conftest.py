"""
Shared test fixtures and configuration for pytest.
"""

import logging
import os
import sqlite3
import sys
from pathlib import Path
from typing import Optional

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlfixture import DbApiExecutor, Executor, ExecutorError, Table  # noqa: E402


logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ============================================================================
# Environment detection
# ============================================================================

def is_database_available() -> bool:
    """Check if an ODBC database is configured for integration tests."""
    conn_str = os.environ.get("SQLFIXTURE_CONN_STR")
    if not conn_str:
        return False

    try:
        import pyodbc

        conn = pyodbc.connect(conn_str, timeout=5)
        conn.close()
        return True

    except Exception as e:
        logger.debug(f"Database not available: {e}")
        return False


# ============================================================================
# Pytest hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (requires a database)")


def pytest_collection_modifyitems(config, items):
    """Automatically skip integration tests if no database is available."""
    if is_database_available():
        return

    skip_db = pytest.mark.skip(
        reason="Database not available (set SQLFIXTURE_CONN_STR to an ODBC connection string)"
    )

    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_db)


# ============================================================================
# Helpers
# ============================================================================

class RecordingExecutor(Executor):
    """Executor that records statements and can fail on a chosen call."""

    def __init__(self, fail_on: Optional[int] = None):
        self.calls = []
        self.fail_on = fail_on

    def execute(self, sql, params=()):
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            self.calls.append((sql, list(params)))
            raise ExecutorError("simulated failure", statement=sql)
        self.calls.append((sql, list(params)))


class SqliteExecutor(DbApiExecutor):
    """DbApiExecutor for sqlite3, which has no TRUNCATE statement."""

    def execute(self, sql, params=()):
        if sql.startswith("truncate "):
            sql = "delete from " + sql[len("truncate "):]
        super().execute(sql, params)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def recording_executor():
    """Fixture providing a recording executor."""
    return RecordingExecutor()


@pytest.fixture
def failing_executor():
    """Factory for recording executors that fail on the n-th call (0-based)."""
    return lambda fail_on: RecordingExecutor(fail_on=fail_on)


@pytest.fixture
def sqlite_conn():
    """In-memory SQLite database with the test and test2 tables."""
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE test (id INTEGER PRIMARY KEY, name TEXT)")
    conn.execute("CREATE TABLE test2 (id INTEGER PRIMARY KEY, slug TEXT)")
    conn.execute("INSERT INTO test (id, name) VALUES (99, 'stale')")
    conn.execute("INSERT INTO test2 (id, slug) VALUES (99, 'stale')")
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def sqlite_executor(sqlite_conn):
    """Executor over the in-memory SQLite database."""
    return SqliteExecutor(sqlite_conn)


@pytest.fixture
def common_tables():
    """The two-table fixture used across tests."""
    return [
        Table(name="test", rows=[{"id": 1, "name": "something"}]),
        Table(
            name="test2",
            rows=[
                {"id": 1, "slug": "something"},
                {"id": 2, "slug": "something-else"},
            ],
        ),
    ]


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the YAML/JSON fixture documents."""
    return FIXTURES_DIR
