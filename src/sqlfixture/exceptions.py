"""
Custom exceptions for the sqlfixture package.
"""

from __future__ import annotations


class FixtureError(Exception):
    """Base exception for all fixture errors."""
    pass


class DecodeError(FixtureError):
    """
    Error decoding a fixture document.

    Raised when:
    - The document is not valid YAML/JSON
    - The document does not have the tables/rows shape
    - A fixture file cannot be found or has an unknown extension
    """
    pass


class BuildError(FixtureError):
    """
    Error turning a row into a statement.

    Raised when:
    - A row has no columns
    - Identifier validation is enabled and a table or column name is rejected
    """

    def __init__(
        self,
        message: str,
        table: str | None = None,
        row_index: int | None = None,
    ):
        super().__init__(message)
        self.table = table
        self.row_index = row_index


class ExecutorError(FixtureError):
    """
    Error executing a statement against the database.

    Raised when:
    - The connection is lost
    - A constraint is violated
    - The target table does not exist
    """

    def __init__(
        self,
        message: str,
        statement: str | None = None,
        table: str | None = None,
        row_index: int | None = None,
    ):
        super().__init__(message)
        self.statement = statement
        self.table = table
        self.row_index = row_index
