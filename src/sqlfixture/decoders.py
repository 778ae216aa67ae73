"""
Decoders for YAML and JSON fixture documents.

Both formats describe the same shape and decode into the same model:

    - name: test
      rows:
        - id: 1
          name: something

Decoding is pure: it performs no I/O and never touches the database.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import yaml

from .exceptions import DecodeError
from .models import Table, Tables


logger = logging.getLogger(__name__)

FORMAT_YAML = "yaml"
FORMAT_JSON = "json"


def decode_yaml(data: bytes | str) -> Tables:
    """
    Decode a YAML fixture document.

    Args:
        data: Raw document bytes or text.

    Returns:
        Decoded tables.

    Raises:
        DecodeError: If the document is malformed.
    """
    text = _to_text(data)
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DecodeError(f"Invalid YAML fixture: {e}") from e
    return _to_tables(document)


def decode_json(data: bytes | str) -> Tables:
    """
    Decode a JSON fixture document.

    Args:
        data: Raw document bytes or text.

    Returns:
        Decoded tables.

    Raises:
        DecodeError: If the document is malformed.
    """
    text = _to_text(data)
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON fixture: {e}") from e
    return _to_tables(document)


_DECODERS = {
    FORMAT_YAML: decode_yaml,
    FORMAT_JSON: decode_json,
}


def decode(data: bytes | str, fmt: str) -> Tables:
    """Decode a fixture document in the given format ("yaml" or "json")."""
    try:
        decoder = _DECODERS[fmt]
    except KeyError:
        raise ValueError(
            f"Unknown fixture format '{fmt}'. Expected one of: {', '.join(_DECODERS)}"
        )
    return decoder(data)


def _to_text(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Fixture is not valid UTF-8: {e}") from e


def _to_tables(document: Any) -> Tables:
    """Validate the decoded document shape and build the table model."""
    if document is None:
        return []
    if not isinstance(document, list):
        raise DecodeError(
            f"Fixture must be a list of tables, got {type(document).__name__}"
        )

    tables: Tables = []
    for i, entry in enumerate(document):
        if not isinstance(entry, dict):
            raise DecodeError(
                f"Table entry {i} must be a mapping, got {type(entry).__name__}"
            )

        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise DecodeError(f"Table entry {i} is missing a string 'name'")

        rows = entry.get("rows")
        if rows is None:
            rows = []
        if not isinstance(rows, list):
            raise DecodeError(f"'rows' must be a list in table '{name}'")

        for j, row in enumerate(rows):
            if not isinstance(row, dict):
                raise DecodeError(
                    f"Row {j} in table '{name}' must be a mapping, "
                    f"got {type(row).__name__}"
                )
            for key in row:
                if not isinstance(key, str):
                    raise DecodeError(
                        f"Row {j} in table '{name}' has non-string column {key!r}"
                    )

        tables.append(Table.from_dict({"name": name, "rows": rows}))

    logger.debug(f"Decoded {len(tables)} tables")
    return tables
