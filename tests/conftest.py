"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener import URLShortener, ShortIDGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG", extra_loggers=())


@pytest.fixture
def short_id_generator():
    """Create short ID generator."""
    return ShortIDGenerator()


@pytest.fixture
def engine(short_id_generator, logger) -> URLShortener:
    """Create an empty engine."""
    return URLShortener(
        generator=short_id_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    """Configuration that ignores the local environment file."""
    return Config(_env_file=None, base_url="http://testserver")


@pytest.fixture
def app(engine, config):
    """Create test FastAPI app."""
    return create_app(engine=engine, config=config)


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
