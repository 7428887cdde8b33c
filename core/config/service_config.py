#!/usr/bin/env python3
"""Catalog service configuration

Settings for the album catalog HTTP service: bind address, cover upload
directory and limits, and the origin used when building cover URLs.
"""
import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_MAX_COVER_BYTES = 5 * 1024 * 1024


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default

def _list(val: str) -> List[str]:
    return [item.strip() for item in val.split(",") if item.strip()]


@dataclass
class CatalogServiceConfig:
    """Album catalog service settings"""

    service_name: str = "catalog_service"
    service_host: str = "0.0.0.0"
    service_port: int = 5000
    debug: bool = False
    log_level: str = "INFO"

    # ===========================================
    # Cover uploads
    # ===========================================
    covers_dir: str = "public/covers"
    max_cover_bytes: int = DEFAULT_MAX_COVER_BYTES

    # Origin used for coverUrl; empty means "use the request origin"
    public_base_url: str = ""

    # ===========================================
    # HTTP surface
    # ===========================================
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Load the three demo albums on start
    seed_albums: bool = True

    @classmethod
    def from_env(cls) -> 'CatalogServiceConfig':
        """Load catalog service configuration from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            service_host=os.getenv("CATALOG_HOST", "0.0.0.0"),
            service_port=_int(os.getenv("CATALOG_PORT", "5000"), 5000),
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            covers_dir=os.getenv("CATALOG_COVERS_DIR", "public/covers"),
            max_cover_bytes=_int(os.getenv("CATALOG_MAX_COVER_BYTES", ""), DEFAULT_MAX_COVER_BYTES),
            public_base_url=os.getenv("CATALOG_PUBLIC_BASE_URL", "").rstrip("/"),
            cors_origins=_list(os.getenv("CATALOG_CORS_ORIGINS", "*")),
            seed_albums=_bool(os.getenv("CATALOG_SEED_ALBUMS", "true")),
        )
