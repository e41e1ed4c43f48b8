"""Fixtures for route guard tests.

Requests go through the full ASGI stack (route guard, DI, error handlers)
against the mocked container, so tests can seed state through ``container``.
"""

import httpx
import pytest_asyncio

from portal.interface.api.app import create_app
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    test_container = build_test_container()
    yield test_container
    await test_container.close()


@pytest_asyncio.fixture
async def client(container):
    app_instance = create_app(container)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app_instance),
        base_url="http://test",
        follow_redirects=False,
    ) as test_client:
        yield test_client
