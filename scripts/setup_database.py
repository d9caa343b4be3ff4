#!/usr/bin/env python3
"""
Database setup script for Snippetbox.

Creates the snippets, users and sessions tables for the configured DSN
(SQLite or PostgreSQL). Safe to run more than once.
"""

import sys

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from snippetbox.core.config import settings
from snippetbox.core.utils.logging_config import init_application_logging
from snippetbox.db.init_db import init_database
from snippetbox.db.session import open_db


def main() -> bool:
    """Initialize database based on configuration"""
    init_application_logging(settings)
    print("Snippetbox Database Setup")
    print("=" * 40)

    engine = open_db(settings.db_dsn)
    print(f"Database Type: {engine.dialect.name}")

    try:
        existing = inspect(engine).get_table_names()
        print(f"Existing Tables: {len(existing)}")
        for table in sorted(existing):
            print(f"  - {table}")

        print("\nInitializing database...")
        init_database(engine)

        tables = inspect(engine).get_table_names()
        print(f"Database initialized successfully! Table Count: {len(tables)}")
        return True
    except SQLAlchemyError as e:
        print(f"Database initialization failed: {e}")
        return False
    finally:
        engine.dispose()


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
