"""
Catalog App

Client application for the album catalog service. Mirrors the last fetched
album list into a local JSON store so the catalog stays readable while the
service is unreachable.
"""

from .album_cache import ALBUMS_KEY, AlbumCache
from .app import CatalogApp
from .local_storage import LocalStorage
from .state import AlbumForm, AppState, AppStatus, SearchFilters

__version__ = "1.0.0"

__all__ = [
    "ALBUMS_KEY",
    "AlbumCache",
    "AlbumForm",
    "AppState",
    "AppStatus",
    "CatalogApp",
    "LocalStorage",
    "SearchFilters",
]
