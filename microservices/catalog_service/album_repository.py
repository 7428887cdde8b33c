"""
Album Repository - In-memory data access layer for the catalog service

Owns the album collection for the lifetime of the process. Ids come from a
monotonic counter, so an id freed by a delete is never handed out again.
"""

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from .models import Album

logger = logging.getLogger(__name__)


SEED_ALBUMS: List[Dict[str, Any]] = [
    {"id": 1, "band": "Metallica", "title": "Master of Puppets", "year": 1986, "genre": "Thrash Metal", "cover": None},
    {"id": 2, "band": "Metallica", "title": "Ride the Lightning", "year": 1984, "genre": "Thrash Metal", "cover": None},
    {"id": 3, "band": "AC/DC", "title": "Back in Black", "year": 1980, "genre": "Hard Rock", "cover": None},
]


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle.lower() in value.lower()


class InMemoryAlbumRepository:
    """Album repository backed by a process-local list"""

    def __init__(self, seed: Optional[Iterable[Dict[str, Any]]] = None):
        """
        Initialize the repository

        Args:
            seed: Initial album records (with ids); None starts empty
        """
        self._albums: List[Album] = [Album.model_validate(item) for item in (seed or [])]
        self._next_id = max((album.id for album in self._albums), default=0) + 1
        self._lock = threading.Lock()

    # ==================== Album Operations ====================

    async def create_album(self, album_data: Dict[str, Any]) -> Album:
        """Allocate the next id and append the album"""
        with self._lock:
            album = Album(id=self._next_id, **album_data)
            self._next_id += 1
            self._albums.append(album)
        logger.debug(f"Stored album {album.id}")
        return album.model_copy()

    async def get_album_by_id(self, album_id: int) -> Optional[Album]:
        """Get album by id"""
        album = self._find(album_id)
        return album.model_copy() if album else None

    async def list_albums(
        self,
        band: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> List[Album]:
        """List albums in insertion order, filtered by case-insensitive substrings"""
        result = list(self._albums)
        if band:
            result = [a for a in result if _contains(a.band, band)]
        if genre:
            result = [a for a in result if _contains(a.genre, genre)]
        return [a.model_copy() for a in result]

    async def update_album(
        self, album_id: int, update_data: Dict[str, Any]
    ) -> Optional[Album]:
        """Overwrite the given fields in place"""
        with self._lock:
            index = self._index_of(album_id)
            if index is None:
                return None
            updated = self._albums[index].model_copy(update=update_data)
            self._albums[index] = updated
        return updated.model_copy()

    async def delete_album(self, album_id: int) -> bool:
        """Remove an album from the collection"""
        with self._lock:
            index = self._index_of(album_id)
            if index is None:
                return False
            del self._albums[index]
        return True

    # ==================== Utility Methods ====================

    async def count_albums(self) -> int:
        return len(self._albums)

    def _find(self, album_id: int) -> Optional[Album]:
        index = self._index_of(album_id)
        return self._albums[index] if index is not None else None

    def _index_of(self, album_id: int) -> Optional[int]:
        for index, album in enumerate(self._albums):
            if album.id == album_id:
                return index
        return None
