"""
Test fixtures and configuration.
"""

import socket
from pathlib import Path
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from boutique.config.settings import Settings
from boutique.infrastructure.persistence.database import Database
from boutique.infrastructure.persistence.models import (
    Base,
    CustomerModel,
    ProductModel,
)
from boutique.loaders import load

PRODUCTS = [
    ("prod_tee", "Linen Tee", "linen-tee"),
    ("prod_jeans", "Wide Leg Jeans", "wide-leg-jeans"),
    ("prod_loafers", "Suede Loafers", "suede-loafers"),
]
CUSTOMERS = [
    ("cus_alice", "alice@example.com"),
    ("cus_bob", "bob@example.com"),
]


@pytest.fixture
def free_port() -> int:
    """Port that nothing listens on at the time of the call."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'boutique.db'}"


@pytest.fixture
def test_settings(database_url: str, free_port: int) -> Settings:
    """Settings for an isolated test instance."""
    return Settings(
        ENV="test",
        HOST="127.0.0.1",
        PORT=free_port,
        DATABASE_URL=database_url,
        DATABASE_TYPE="sqlite",
        EVENT_BUS_TYPE="local",
        LOG_LEVEL="WARNING",
        SHUTDOWN_TIMEOUT=5,
        SHUTDOWN_CLEANUP_TIMEOUT=2,
    )


async def seed_catalog(database: Database) -> None:
    """Insert framework products and customers."""
    async with database.session() as session:
        for product_id, title, handle in PRODUCTS:
            session.add(ProductModel(id=product_id, title=title, handle=handle))
        for customer_id, email in CUSTOMERS:
            session.add(CustomerModel(id=customer_id, email=email))


@pytest_asyncio.fixture
async def test_db(database_url: str) -> AsyncGenerator[Database, None]:
    """
    Create test database, tables and catalog rows.

    Each test gets a clean SQLite file.
    """
    db = Database(database_url=database_url)
    await db.connect()
    await db.create_schema(Base.metadata)
    await seed_catalog(db)

    yield db

    await db.drop_schema(Base.metadata)
    await db.disconnect()


@pytest_asyncio.fixture
async def api_app(test_db, test_settings, tmp_path) -> AsyncGenerator[FastAPI, None]:
    """Application loaded against the seeded test database."""
    app = FastAPI()
    container = await load(tmp_path, app, settings=test_settings)

    yield app

    await container.shutdown()


@pytest_asyncio.fixture
async def api_client(api_app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client calling the loaded application in-process."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=api_app), base_url="http://test"
    ) as client:
        yield client
