"""
Populate database tables from YAML/JSON fixtures for integration tests.

This package truncates each table named in a fixture and inserts its rows
with parameterized statements.
"""

from .exceptions import BuildError, DecodeError, ExecutorError, FixtureError
from .models import Row, Rows, Table, Tables
from .decoders import decode, decode_json, decode_yaml
from .statements import InsertStatement, build_insert, build_truncate
from .executor import DbApiExecutor, Executor, as_executor
from .fixture import Fixture

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "DecodeError",
    "ExecutorError",
    "FixtureError",
    "Row",
    "Rows",
    "Table",
    "Tables",
    "decode",
    "decode_json",
    "decode_yaml",
    "InsertStatement",
    "build_insert",
    "build_truncate",
    "DbApiExecutor",
    "Executor",
    "as_executor",
    "Fixture",
]
