"""
Data model for fixture tables and rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# A row maps column name to value. Values are passed to the driver as-is.
Row = dict[str, Any]
Rows = list[Row]


@dataclass
class Table:
    """A named table and the rows to insert into it."""

    name: str
    rows: Rows = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Table":
        """Create from dictionary."""
        return cls(name=data["name"], rows=list(data.get("rows") or []))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"name": self.name, "rows": [dict(row) for row in self.rows]}


Tables = list[Table]
