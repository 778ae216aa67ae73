"""
SQL statement construction for fixture rows.

Table and column names are written into the statement text as-is, so they
must come from trusted fixture authors. Values are always bound as
positional parameters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from .exceptions import BuildError
from .models import Row


DEFAULT_PLACEHOLDER = "?"

_IDENTIFIER_RE = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_$]*(\.[A-Za-z_][A-Za-z0-9_$]*)?$"
)


@dataclass
class InsertStatement:
    """A parameterized insert statement for a single row."""

    table: str
    columns: list[str] = field(default_factory=list)
    params: list[Any] = field(default_factory=list)
    placeholder: str = DEFAULT_PLACEHOLDER

    def __post_init__(self):
        if not self.columns:
            raise BuildError(f"Insert into {self.table} has no columns", table=self.table)
        if len(self.columns) != len(self.params):
            raise BuildError(
                f"Insert into {self.table} has {len(self.columns)} columns "
                f"but {len(self.params)} params",
                table=self.table,
            )

    @property
    def sql(self) -> str:
        """Render the statement text."""
        columns_str = ",".join(self.columns)
        placeholders = ",".join(self.placeholder for _ in self.columns)
        return f"insert into {self.table} ({columns_str}) values ({placeholders})"


def validate_identifier(name: str) -> bool:
    """Return True if name is a plain (optionally schema-qualified) identifier."""
    return isinstance(name, str) and bool(_IDENTIFIER_RE.match(name))


def build_truncate(table: str, validate_identifiers: bool = False) -> str:
    """Build the truncate statement for a table."""
    if validate_identifiers and not validate_identifier(table):
        raise BuildError(f"Invalid table name: {table!r}", table=table)
    return f"truncate {table}"


def build_insert(
    table: str,
    row: Row,
    placeholder: str = DEFAULT_PLACEHOLDER,
    validate_identifiers: bool = False,
) -> InsertStatement:
    """
    Build an insert statement for one row.

    Columns and parameters come from a single pass over the row so that
    params[i] always belongs to columns[i].

    Args:
        table: Target table name.
        row: Column name to value mapping.
        placeholder: Positional parameter marker for the driver.
        validate_identifiers: If True, reject names outside [A-Za-z0-9_$].

    Returns:
        InsertStatement with aligned columns and params.

    Raises:
        BuildError: If the row is empty or an identifier is rejected.
    """
    pairs = list(row.items())
    if not pairs:
        raise BuildError(f"Cannot build insert for empty row in {table}", table=table)

    if validate_identifiers:
        if not validate_identifier(table):
            raise BuildError(f"Invalid table name: {table!r}", table=table)
        bad = [col for col, _ in pairs if not validate_identifier(col)]
        if bad:
            raise BuildError(
                f"Invalid column names for {table}: {', '.join(map(repr, bad))}",
                table=table,
            )

    return InsertStatement(
        table=table,
        columns=[col for col, _ in pairs],
        params=[value for _, value in pairs],
        placeholder=placeholder,
    )
