"""
Album Cache

Cache-aside mirror of the catalog's album list in LocalStorage.

The list is stored as the exact JSON array the service returned under
ALBUMS_KEY. The time of the last successful fetch is kept separately so a
configured max age can mark the mirror stale; without a max age the mirror
is trusted until a live fetch overwrites it.
"""

import json
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from .local_storage import LocalStorage

logger = logging.getLogger(__name__)

ALBUMS_KEY = "albums"
FETCHED_AT_KEY = "albums:fetched_at"


class AlbumCache:
    """Album list mirror with an optional staleness rule"""

    def __init__(
        self,
        storage: LocalStorage,
        max_age: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            storage: Backing key-value store
            max_age: Seconds after a fetch before the mirror is stale (None: never)
            clock: Time source, seconds since the epoch
        """
        self.storage = storage
        self.max_age = max_age
        self.clock = clock

    def load(self) -> Optional[List[Dict[str, Any]]]:
        """Cached album list, or None when nothing usable is stored"""
        raw = self.storage.get_item(ALBUMS_KEY)
        if raw is None:
            return None
        try:
            albums = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding corrupt album cache")
            return None
        return albums if isinstance(albums, list) else None

    def fetched_at(self) -> Optional[float]:
        raw = self.storage.get_item(FETCHED_AT_KEY)
        try:
            return float(raw) if raw is not None else None
        except ValueError:
            return None

    def is_stale(self) -> bool:
        if self.max_age is None:
            return False
        fetched_at = self.fetched_at()
        if fetched_at is None:
            return True
        return self.clock() - fetched_at > self.max_age

    def replace(self, albums: List[Dict[str, Any]]):
        """Store a freshly fetched list and stamp the fetch time"""
        self.store(albums)
        self.storage.set_item(FETCHED_AT_KEY, repr(self.clock()))

    def store(self, albums: List[Dict[str, Any]]):
        """Store a locally patched list, keeping the last fetch time"""
        self.storage.set_item(ALBUMS_KEY, json.dumps(albums, ensure_ascii=False))

    def clear(self):
        self.storage.remove_item(ALBUMS_KEY)
        self.storage.remove_item(FETCHED_AT_KEY)
