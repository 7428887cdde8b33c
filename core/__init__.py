#!/usr/bin/env python3
"""
Core Module for the Album Catalog

Shared components used by the catalog service and the client application.

COMPONENTS:
    - config/: Dataclass configuration loaded from the environment
    - logger.py: Service logger setup
    - service_client_base.py: Async HTTP client base class

USAGE:
    from core.config import CatalogServiceConfig
    from core.logger import setup_service_logger

    config = CatalogServiceConfig.from_env()
    logger = setup_service_logger("catalog_service", level=config.log_level)
"""

from .logger import setup_service_logger
from .service_client_base import BaseServiceClient

__all__ = [
    "setup_service_logger",
    "BaseServiceClient",
]

__version__ = "1.0.0"
