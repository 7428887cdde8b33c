#!/usr/bin/env python3
"""Modular configuration system for the album catalog

Configuration hierarchy:
- logging_config: Logging configuration
- service_config: Catalog HTTP service (bind address, covers directory, limits)
- client_config: Client application (API base URL, local cache)
"""
import os
from dotenv import load_dotenv
from .client_config import CatalogClientConfig
from .logging_config import LoggingConfig
from .service_config import DEFAULT_MAX_COVER_BYTES, CatalogServiceConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

__all__ = [
    'LoggingConfig',
    'CatalogServiceConfig',
    'CatalogClientConfig',
    'DEFAULT_MAX_COVER_BYTES',
]
