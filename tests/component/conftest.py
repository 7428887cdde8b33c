"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── catalog_service/  Service layer and HTTP API (in-memory repository, TestClient)
    ├── catalog_app/      Client application flows (mocked HTTP client and UI)
    └── mocks/            Mock implementations

Usage:
    pytest tests/component -v
"""
import os
import sys
from pathlib import Path

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.config import CatalogServiceConfig
from microservices.catalog_service.album_repository import SEED_ALBUMS, InMemoryAlbumRepository
from microservices.catalog_service.catalog_service import CatalogService
from microservices.catalog_service.cover_storage import CoverStorage

from tests.component.mocks import MockCatalogClient, ScriptedUI


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Catalog Service Fixtures
# =============================================================================

@pytest.fixture
def covers_dir(tmp_path) -> Path:
    return tmp_path / "covers"


@pytest.fixture
def service_config(covers_dir) -> CatalogServiceConfig:
    """Service config writing covers into a temp directory"""
    return CatalogServiceConfig(covers_dir=str(covers_dir))


@pytest.fixture
def repository() -> InMemoryAlbumRepository:
    """Fresh seeded repository"""
    return InMemoryAlbumRepository(seed=SEED_ALBUMS)


@pytest.fixture
def cover_storage(service_config) -> CoverStorage:
    return CoverStorage(service_config.covers_dir, max_bytes=service_config.max_cover_bytes)


@pytest.fixture
def catalog_service(repository, cover_storage) -> CatalogService:
    """CatalogService over the seeded repository"""
    return CatalogService(repository=repository, cover_storage=cover_storage)


@pytest.fixture
def api_client(service_config, catalog_service):
    """FastAPI test client (lifespan runs, covers dir is created)"""
    from fastapi.testclient import TestClient
    from microservices.catalog_service.main import create_app

    app = create_app(service_config, service=catalog_service)
    with TestClient(app) as client:
        yield client


# =============================================================================
# Client Application Fixtures
# =============================================================================

@pytest.fixture
def mock_client() -> MockCatalogClient:
    """Mock catalog client holding the seed albums"""
    return MockCatalogClient(albums=SEED_ALBUMS)


@pytest.fixture
def ui() -> ScriptedUI:
    return ScriptedUI()
