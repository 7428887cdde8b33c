"""
Catalog Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .models import Album


# Custom exceptions - defined here to avoid importing the repository
class AlbumNotFoundError(Exception):
    """Album not found error"""
    pass


class AlbumValidationError(Exception):
    """Album validation error (missing required data)"""
    pass


class CoverUploadError(Exception):
    """Cover upload rejected (no file, or file too large)"""
    pass


class CatalogServiceError(Exception):
    """Base exception for catalog service errors"""
    pass


@runtime_checkable
class AlbumRepositoryProtocol(Protocol):
    """
    Interface for Album Repository.

    Implementations own the album collection and allocate ids.
    """

    async def create_album(self, album_data: Dict[str, Any]) -> Album:
        """Allocate an id, append the album and return it"""
        ...

    async def get_album_by_id(self, album_id: int) -> Optional[Album]:
        """Get album by id"""
        ...

    async def list_albums(
        self,
        band: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> List[Album]:
        """List albums in collection order, optionally filtered"""
        ...

    async def update_album(
        self, album_id: int, update_data: Dict[str, Any]
    ) -> Optional[Album]:
        """Overwrite the given fields; None if the album does not exist"""
        ...

    async def delete_album(self, album_id: int) -> bool:
        """Remove an album; False if it does not exist"""
        ...

    async def count_albums(self) -> int:
        """Number of albums in the collection"""
        ...


@runtime_checkable
class CoverStorageProtocol(Protocol):
    """Interface for cover file storage"""

    max_bytes: int

    async def save(self, upload: Any) -> str:
        """Persist an uploaded file and return its stored filename"""
        ...
