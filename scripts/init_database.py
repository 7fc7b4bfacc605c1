"""
Database initialization script.

Creates the boutique database if needed and the outfit tables. Framework
tables (product, customer) are only created when missing, e.g. on a fresh
development database.

Usage:
    python scripts/init_database.py
"""

import asyncio
import sys

import asyncpg
from sqlalchemy import inspect
from sqlalchemy.engine import make_url

from boutique.config.settings import load_config
from boutique.infrastructure.persistence import Base, Database

EXPECTED_TABLES = ["outfit", "outfit_products", "outfit_creator"]


async def create_database_if_not_exists(database_url: str) -> None:
    """Create the PostgreSQL database if it doesn't exist."""
    print("Checking if database exists...")

    url = make_url(database_url)
    conn = await asyncpg.connect(
        host=url.host,
        port=url.port or 5432,
        user=url.username,
        password=url.password,
        database="postgres",
    )
    try:
        exists = await conn.fetchval(
            "SELECT 1 FROM pg_database WHERE datname = $1", url.database
        )
        if exists:
            print(f"Database '{url.database}' already exists")
        else:
            print(f"Creating database '{url.database}'...")
            await conn.execute(f'CREATE DATABASE "{url.database}"')
            print("Database created successfully")
    finally:
        await conn.close()


async def create_tables(database: Database) -> list:
    """Create tables and return the table names found afterwards."""
    print("\nCreating tables...")
    await database.create_schema(Base.metadata)

    async with database.engine.connect() as conn:
        return await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).get_table_names()
        )


async def main() -> None:
    """Run database initialization."""
    settings = load_config()
    display_url = make_url(settings.DATABASE_URL).render_as_string(hide_password=True)

    print("Boutique Database Initialization")
    print("=" * 50)
    print(f"Database URL: {display_url}")
    print("=" * 50)

    database = Database(settings.DATABASE_URL)
    try:
        if settings.DATABASE_URL.startswith("postgresql"):
            await create_database_if_not_exists(settings.DATABASE_URL)

        await database.connect()
        tables = await create_tables(database)
        print(f"Found tables: {', '.join(sorted(tables))}")

        missing = set(EXPECTED_TABLES) - set(tables)
        if missing:
            print(f"Missing tables: {', '.join(sorted(missing))}")
            sys.exit(1)

        print("\nDatabase initialization completed successfully!")
    except Exception as e:
        print(f"\nDatabase initialization failed: {e}")
        sys.exit(1)
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
