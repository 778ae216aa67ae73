"""
Executor abstraction used to run fixture statements.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

try:
    import pyodbc
except ImportError:
    pyodbc = None

from .exceptions import ExecutorError


logger = logging.getLogger(__name__)


class Executor(ABC):
    """
    Runs a single statement with positional parameters.

    Implementations raise ExecutorError on any database failure.
    """

    @abstractmethod
    def execute(self, sql: str, params: Sequence[Any] = ()) -> None:
        """Execute a statement."""
        pass


class DbApiExecutor(Executor):
    """
    Executor backed by a DB-API 2.0 connection (pyodbc, sqlite3, ...).

    The connection is used exclusively for the duration of a population run
    and is not closed by the executor.
    """

    def __init__(
        self,
        conn: Any,
        commit: bool = True,
        error_types: tuple[type[BaseException], ...] | None = None,
    ):
        """
        Initialize the executor.

        Args:
            conn: Open DB-API connection.
            commit: Commit after every statement.
            error_types: Driver exception classes to translate into
                ExecutorError. Defaults to the connection's Error class
                and pyodbc.Error.
        """
        self.conn = conn
        self.commit = commit
        self.error_types = error_types or _driver_errors(conn)

    def execute(self, sql: str, params: Sequence[Any] = ()) -> None:
        cursor = None
        try:
            cursor = self.conn.cursor()
            logger.debug(f"Executing: {sql}")
            if params:
                logger.debug(f"Values: {list(params)}")
                cursor.execute(sql, list(params))
            else:
                cursor.execute(sql)
            if self.commit:
                self.conn.commit()
        except self.error_types as e:
            logger.error(f"Statement failed: {e}")
            raise ExecutorError(f"Failed to execute '{sql}': {e}", statement=sql) from e
        finally:
            if cursor is not None:
                cursor.close()


def _driver_errors(conn: Any) -> tuple[type[BaseException], ...]:
    errors = []
    conn_error = getattr(conn, "Error", None)
    if isinstance(conn_error, type) and issubclass(conn_error, Exception):
        errors.append(conn_error)
    if pyodbc is not None:
        errors.append(pyodbc.Error)
    return tuple(errors) or (Exception,)


def as_executor(target: Any) -> Executor:
    """
    Return an Executor for the given target.

    Executors are returned unchanged; objects with a cursor() method are
    wrapped in a DbApiExecutor.
    """
    if isinstance(target, Executor):
        return target
    if callable(getattr(target, "cursor", None)):
        return DbApiExecutor(target)
    raise TypeError(
        f"Expected an Executor or DB-API connection, got {type(target).__name__}"
    )
