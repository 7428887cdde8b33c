"""
Integration Test Configuration

Runs the real catalog FastAPI app in-process through httpx.ASGITransport
and points the real CatalogServiceClient at it, so the client application
exercises the full HTTP stack without a network listener.

Usage:
    pytest tests/integration -v
"""

import os
import sys

import httpx
import pytest
import pytest_asyncio

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from core.config import CatalogServiceConfig
from microservices.catalog_service.client import CatalogServiceClient
from microservices.catalog_service.factory import create_catalog_service
from microservices.catalog_service.main import create_app


class TestConfig:
    """Integration test settings"""

    BASE_URL = "http://catalog.test"
    HTTP_TIMEOUT = 10.0


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


@pytest.fixture
def service_config(tmp_path) -> CatalogServiceConfig:
    return CatalogServiceConfig(covers_dir=str(tmp_path / "covers"))


@pytest.fixture
def catalog_app_asgi(service_config):
    """Catalog FastAPI app with a fresh seeded collection"""
    service = create_catalog_service(service_config)
    # ASGITransport does not run the lifespan
    service.cover_storage.ensure_dir()
    return create_app(service_config, service=service)


@pytest_asyncio.fixture
async def catalog_client(catalog_app_asgi):
    """Real CatalogServiceClient talking to the in-process app"""
    transport = httpx.ASGITransport(app=catalog_app_asgi)
    client = CatalogServiceClient(
        TestConfig.BASE_URL, timeout=TestConfig.HTTP_TIMEOUT, transport=transport
    )
    yield client
    await client.close()


@pytest_asyncio.fixture
async def offline_client():
    """CatalogServiceClient whose every request fails to connect"""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    client = CatalogServiceClient(TestConfig.BASE_URL, transport=httpx.MockTransport(refuse))
    yield client
    await client.close()
