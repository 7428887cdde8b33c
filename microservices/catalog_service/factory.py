"""
Catalog Service Factory

Factory functions for creating service instances with real dependencies.

Usage:
    from .factory import create_catalog_service
    service = create_catalog_service(config)
"""
from typing import Optional

from core.config import CatalogServiceConfig

from .album_repository import SEED_ALBUMS, InMemoryAlbumRepository
from .catalog_service import CatalogService
from .cover_storage import CoverStorage


def create_catalog_service(
    config: Optional[CatalogServiceConfig] = None,
) -> CatalogService:
    """
    Create CatalogService with an in-memory repository and disk cover storage.

    Args:
        config: Service configuration, loaded from the environment if omitted

    Returns:
        CatalogService: Configured service instance
    """
    config = config or CatalogServiceConfig.from_env()

    repository = InMemoryAlbumRepository(seed=SEED_ALBUMS if config.seed_albums else None)
    cover_storage = CoverStorage(config.covers_dir, max_bytes=config.max_cover_bytes)

    return CatalogService(
        repository=repository,
        cover_storage=cover_storage,
        public_base_url=config.public_base_url,
    )
