"""
Unit tests for the DB-API executor.
"""

import sqlite3
from unittest.mock import MagicMock

import pytest

from sqlfixture import DbApiExecutor, ExecutorError, as_executor


class TestDbApiExecutor:
    """Tests for DbApiExecutor."""

    def test_passes_params_positionally(self):
        """Test params are handed to cursor.execute as a list."""
        conn = MagicMock()
        cursor = conn.cursor.return_value

        DbApiExecutor(conn, error_types=(RuntimeError,)).execute("insert into t (a,b) values (?,?)", (1, "x"))

        cursor.execute.assert_called_once_with("insert into t (a,b) values (?,?)", [1, "x"])
        cursor.close.assert_called_once()
        conn.commit.assert_called_once()

    def test_no_params(self):
        """Test statements without params are executed bare."""
        conn = MagicMock()
        cursor = conn.cursor.return_value

        DbApiExecutor(conn, error_types=(RuntimeError,)).execute("truncate t")

        cursor.execute.assert_called_once_with("truncate t")

    def test_commit_disabled(self):
        """Test commit=False leaves transaction control to the caller."""
        conn = MagicMock()

        DbApiExecutor(conn, commit=False, error_types=(RuntimeError,)).execute("truncate t")

        conn.commit.assert_not_called()

    def test_driver_error_wrapped(self):
        """Test driver errors become ExecutorError and the cursor is closed."""
        conn = MagicMock()
        cursor = conn.cursor.return_value
        cursor.execute.side_effect = RuntimeError("connection lost")

        with pytest.raises(ExecutorError) as exc_info:
            DbApiExecutor(conn, error_types=(RuntimeError,)).execute("truncate t")

        assert exc_info.value.statement == "truncate t"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        cursor.close.assert_called_once()
        conn.commit.assert_not_called()

    def test_cursor_failure_wrapped(self):
        """Test a failure opening the cursor becomes ExecutorError."""
        conn = MagicMock()
        conn.cursor.side_effect = RuntimeError("connection lost")

        with pytest.raises(ExecutorError) as exc_info:
            DbApiExecutor(conn, error_types=(RuntimeError,)).execute("truncate t")

        assert exc_info.value.statement == "truncate t"
        conn.commit.assert_not_called()

    def test_uses_connection_error_class(self):
        """Test sqlite3 errors are recognized via the connection's Error class."""
        conn = sqlite3.connect(":memory:")
        try:
            with pytest.raises(ExecutorError) as exc_info:
                DbApiExecutor(conn).execute("insert into missing (a) values (?)", [1])

            assert isinstance(exc_info.value.__cause__, sqlite3.Error)
        finally:
            conn.close()


class TestAsExecutor:
    """Tests for as_executor."""

    def test_executor_returned_unchanged(self, recording_executor):
        """Test executors pass through."""
        assert as_executor(recording_executor) is recording_executor

    def test_connection_wrapped(self):
        """Test connections are wrapped."""
        conn = sqlite3.connect(":memory:")
        try:
            executor = as_executor(conn)
            assert isinstance(executor, DbApiExecutor)
        finally:
            conn.close()

    def test_other_objects_rejected(self):
        """Test anything else raises TypeError."""
        with pytest.raises(TypeError, match="DB-API connection"):
            as_executor("not a connection")
