#!/usr/bin/env python3
"""
Fixture loader CLI.

Truncates and populates database tables from YAML/JSON fixture files.

Usage:
    sqlfixture fixtures/users.yaml
    sqlfixture fixtures/users.yaml fixtures/orders.json --verbose
    sqlfixture fixtures/users.yaml --dry-run
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

try:
    import pyodbc
except ImportError:
    pyodbc = None

from dotenv import load_dotenv

from .config import FixtureConfig
from .exceptions import FixtureError
from .executor import DbApiExecutor, Executor
from .fixture import Fixture


def setup_logging(verbose: bool = False) -> None:
    """Configure logging to console."""
    log_level = logging.DEBUG if verbose else logging.INFO

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="sqlfixture",
        description="Truncate and populate database tables from fixture files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Populate from one fixture file
    sqlfixture fixtures/test.yaml

    # Print statements without connecting
    sqlfixture fixtures/test.yaml --dry-run

Connection string is read from SQLFIXTURE_CONN_STR (or a .env file).
        """,
    )

    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Fixture files (.yaml, .yml or .json), loaded in order",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print statements without connecting to the database",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose/debug logging",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config file",
    )

    parser.add_argument(
        "--validate-identifiers",
        action="store_true",
        help="Reject table/column names that are not plain identifiers",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    load_dotenv()
    setup_logging(verbose=args.verbose)

    logger = logging.getLogger(__name__)

    try:
        config = FixtureConfig(args.config)
    except OSError as e:
        logger.error(str(e))
        return 1

    options = {
        "placeholder": config.placeholder,
        "validate_identifiers": args.validate_identifiers or config.validate_identifiers,
    }

    # Decode and render every file before touching the database
    fixtures: list[Fixture] = []
    try:
        for path in args.files:
            fixture = Fixture.from_file(_DryRunExecutor(), path, **options)
            statements = list(fixture.statements())
            logger.debug(f"Parsed: {path} -> {len(fixture.tables)} tables")
            fixtures.append(fixture)

            if args.dry_run:
                for sql, params in statements:
                    print(f"{sql} {params}" if params else sql)
    except FixtureError as e:
        logger.error(f"Invalid fixture: {e}")
        return 1

    if args.dry_run:
        logger.info("[DRY RUN] Skipping database connection")
        return 0

    if pyodbc is None:
        logger.error("pyodbc is required. Install with: pip install pyodbc")
        return 1

    if not config.connection_string:
        logger.error(
            "Database connection not configured. Set SQLFIXTURE_CONN_STR or "
            "connection_string in the config file."
        )
        return 1

    try:
        logger.info("Connecting to database...")
        conn = pyodbc.connect(config.connection_string, autocommit=True)
    except pyodbc.Error as e:
        logger.error(f"Failed to connect to database: {e}")
        return 1

    try:
        executor = DbApiExecutor(conn, commit=config.commit)
        for path, parsed in zip(args.files, fixtures):
            logger.info(f"Loading fixture file: {path}")
            fixture = Fixture(executor, parsed.tables, **options)
            results = fixture.populate()
            for table, count in results.items():
                logger.info(f"  {table}: {count} rows")
        return 0
    except FixtureError as e:
        logger.error(f"Fixture loading failed: {e}")
        return 1
    finally:
        conn.close()
        logger.info("Database connection closed")


class _DryRunExecutor(Executor):
    """Executor that refuses to run; fixtures are only decoded and rendered."""

    def execute(self, sql, params=()):
        raise RuntimeError("Dry run executor cannot execute statements")


if __name__ == "__main__":
    sys.exit(main())
