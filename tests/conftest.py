"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - integration/: Client application against the real ASGI app (in-process)
    - component/  : Service, API and client app with test doubles
    - unit/       : Unit tests (pure functions, local files only)
"""
import os
import sys
from typing import Any, Dict

import pytest

# Set testing environment BEFORE any project imports
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from tests.fixtures import (
    make_album,
    make_album_create_request,
    make_cover_bytes,
    SEED_ALBUM_COUNT,
)


# =============================================================================
# Test Configuration
# =============================================================================

class TestConfig:
    """Centralized test configuration"""

    SERVICE_ORIGIN = "http://testserver"
    MAX_COVER_BYTES = 5 * 1024 * 1024
    SEED_ALBUM_COUNT = SEED_ALBUM_COUNT


@pytest.fixture(scope="session")
def test_config() -> TestConfig:
    """Provide test configuration"""
    return TestConfig()


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def sample_album() -> Dict[str, Any]:
    """A stored album record"""
    return make_album()


@pytest.fixture
def sample_create_request() -> Dict[str, Any]:
    """A valid create-album body"""
    return make_album_create_request()


@pytest.fixture
def cover_bytes() -> bytes:
    """A small PNG-looking payload"""
    return make_cover_bytes()
