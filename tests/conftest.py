"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient

from config import Config
from link_shorter.database.sqlite import SQLiteShorterDB, connect, create_tables
from link_shorter.service import ShorterService
from link_shorter.shortcode import ShortCodeGenerator
from link_shorter.common.logging_config import setup_logging
from web_app import create_app


VALID_TOKEN = "validtoken"


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "shorter.db")


@pytest.fixture
def conn(db_path):
    """Raw connection for repository tests."""
    connection = connect(db_path)
    create_tables(connection)
    yield connection
    connection.close()


@pytest.fixture
async def test_db(db_path, logger) -> AsyncGenerator[SQLiteShorterDB, None]:
    """Create test database instance."""
    db = SQLiteShorterDB(db_config=db_path, logger=logger)

    yield db

    await db.close()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=8)


@pytest.fixture
async def service(test_db, short_code_generator, logger) -> ShorterService:
    """Create service instance with one usable token."""
    service = ShorterService(
        db=test_db,
        short_code_generator=short_code_generator,
        logger=logger,
    )
    await service.add_token(VALID_TOKEN)
    return service


@pytest.fixture
async def app(test_db, service, db_path):
    """Create test FastAPI app."""
    config = Config(database_path=db_path)

    return create_app(
        db_instance=test_db,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
