# src/tests/conftest.py
import logging
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from waitlist.config import Settings, get_settings
from waitlist.main import create_application

# Set up logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)

@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'waitlist.db'}"

@pytest.fixture
def settings(database_url: str) -> Settings:
    return Settings(WAITLIST_DB_URL=database_url, CLIENT_IP_HEADER="CF-Connecting-IP")

@pytest.fixture
def app(settings: Settings):
    application = create_application()
    application.dependency_overrides[get_settings] = lambda: settings
    return application

@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    logger.debug("Creating async client over ASGI transport")

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
        follow_redirects=True,
    ) as client:
        yield client
