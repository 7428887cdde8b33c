#!/usr/bin/env python3
"""Catalog client configuration

Where the client application finds the catalog service and where it keeps
its local album cache.
"""
import os
from dataclasses import dataclass
from typing import Optional


def _float(val: str, default: Optional[float]) -> Optional[float]:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class CatalogClientConfig:
    """Client application settings"""

    api_base_url: str = "http://localhost:5000"
    storage_path: str = "~/.album_catalog/local_storage.json"

    # Seconds before a cached album list is considered stale (None: never)
    cache_max_age: Optional[float] = None

    http_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> 'CatalogClientConfig':
        """Load client configuration from environment variables"""
        return cls(
            api_base_url=os.getenv("CATALOG_API_BASE", "http://localhost:5000").rstrip("/"),
            storage_path=os.getenv("CATALOG_STORAGE_PATH", "~/.album_catalog/local_storage.json"),
            cache_max_age=_float(os.getenv("CATALOG_CACHE_MAX_AGE", ""), None),
            http_timeout=_float(os.getenv("CATALOG_HTTP_TIMEOUT", ""), 30.0),
        )
