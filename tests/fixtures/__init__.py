"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - common.py: Names and suffixes
    - catalog_fixtures.py: Album and cover factories
"""

from .common import (
    make_suffix,
    make_filename,
)

from .catalog_fixtures import (
    SEED_ALBUM_COUNT,
    PNG_SIGNATURE,
    make_album,
    make_album_response,
    make_album_create_request,
    make_cover_bytes,
)

__all__ = [
    # Common
    "make_suffix",
    "make_filename",
    # Catalog
    "SEED_ALBUM_COUNT",
    "PNG_SIGNATURE",
    "make_album",
    "make_album_response",
    "make_album_create_request",
    "make_cover_bytes",
]
