"""
Fixture population engine.

A Fixture binds a list of tables to an executor. Populating it truncates
every table in order and inserts its rows:

    fixture = Fixture.from_yaml(conn, Path("fixtures/test.yaml").read_bytes())
    fixture.populate()

Warning: populate() truncates every table named in the fixture.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

from .decoders import FORMAT_JSON, FORMAT_YAML, decode
from .exceptions import BuildError, DecodeError, ExecutorError
from .executor import Executor, as_executor
from .models import Tables
from .statements import DEFAULT_PLACEHOLDER, build_insert, build_truncate


logger = logging.getLogger(__name__)

_EXTENSIONS = {
    ".yaml": FORMAT_YAML,
    ".yml": FORMAT_YAML,
    ".json": FORMAT_JSON,
}


class Fixture:
    """
    Tables to populate, bound to an executor.

    Not safe for concurrent use; give each concurrent run its own
    connection.
    """

    def __init__(
        self,
        executor: Executor | Any,
        tables: Tables,
        placeholder: str = DEFAULT_PLACEHOLDER,
        validate_identifiers: bool = False,
    ):
        """
        Initialize the fixture.

        Args:
            executor: Executor or DB-API connection.
            tables: Tables to populate, in order.
            placeholder: Positional parameter marker for the driver.
            validate_identifiers: Reject table/column names that are not
                plain identifiers.
        """
        self.executor = as_executor(executor)
        self.tables = tables
        self.placeholder = placeholder
        self.validate_identifiers = validate_identifiers

    @classmethod
    def new(cls, executor: Executor | Any, tables: Tables, **kwargs: Any) -> "Fixture":
        """Create a fixture from explicit table data."""
        return cls(executor, tables, **kwargs)

    @classmethod
    def from_yaml(cls, executor: Executor | Any, data: bytes | str, **kwargs: Any) -> "Fixture":
        """Create a fixture from a YAML document. Raises DecodeError."""
        return cls(executor, decode(data, FORMAT_YAML), **kwargs)

    @classmethod
    def from_json(cls, executor: Executor | Any, data: bytes | str, **kwargs: Any) -> "Fixture":
        """Create a fixture from a JSON document. Raises DecodeError."""
        return cls(executor, decode(data, FORMAT_JSON), **kwargs)

    @classmethod
    def from_file(cls, executor: Executor | Any, file_path: Path, **kwargs: Any) -> "Fixture":
        """
        Create a fixture from a .yaml, .yml or .json file.

        Raises:
            DecodeError: If the file is missing, has an unknown extension,
                or is malformed.
        """
        file_path = Path(file_path)
        fmt = _EXTENSIONS.get(file_path.suffix.lower())
        if fmt is None:
            raise DecodeError(f"Unsupported fixture file type: {file_path}")
        if not file_path.exists():
            raise DecodeError(f"Fixture file not found: {file_path}")

        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise DecodeError(f"Cannot read fixture file {file_path}: {e}") from e

        try:
            tables = decode(data, fmt)
        except DecodeError as e:
            raise DecodeError(f"{file_path}: {e}") from e
        return cls(executor, tables, **kwargs)

    def statements(self) -> Iterator[tuple[str, list[Any]]]:
        """
        Yield every (sql, params) pair populate() would execute, in order.

        Raises:
            BuildError: When a row cannot be turned into a statement.
        """
        for table in self.tables:
            yield build_truncate(table.name, self.validate_identifiers), []
            for i, row in enumerate(table.rows):
                stmt = self._build(table.name, i, row)
                yield stmt.sql, stmt.params

    def populate(self) -> dict[str, int]:
        """
        Truncate and populate every table, in order.

        Stops at the first failure. Tables already processed stay
        truncated/populated.

        Returns:
            Dictionary mapping table names to rows inserted.

        Raises:
            BuildError: If a row cannot be turned into a statement.
            ExecutorError: If the database rejects a statement.
        """
        results: dict[str, int] = {}

        for table in self.tables:
            sql = build_truncate(table.name, self.validate_identifiers)
            try:
                self.executor.execute(sql)
            except ExecutorError as e:
                e.table = table.name
                raise
            logger.info(f"TRUNCATED {table.name}")

            rows_inserted = 0
            for i, row in enumerate(table.rows):
                stmt = self._build(table.name, i, row)
                try:
                    self.executor.execute(stmt.sql, stmt.params)
                except ExecutorError as e:
                    e.table = table.name
                    e.row_index = i
                    logger.error(f"Insert failed for {table.name} row {i}: {e}")
                    raise
                rows_inserted += 1

            results[table.name] = rows_inserted
            logger.info(f"Loaded {rows_inserted} rows into {table.name}")

        return results

    def _build(self, table: str, row_index: int, row: dict[str, Any]):
        try:
            return build_insert(
                table,
                row,
                placeholder=self.placeholder,
                validate_identifiers=self.validate_identifiers,
            )
        except BuildError as e:
            e.row_index = row_index
            raise
