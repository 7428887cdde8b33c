"""
Catalog App - client application flows

Loads the album list (cache first), searches, creates, edits titles and
deletes albums against the catalog service, keeping the local mirror in
step with every successful call.

Every remote failure is handled the same way: log it, tell the user with a
generic message and leave the previous list and cache untouched.
"""

import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from microservices.catalog_service.client import CatalogClientError, CatalogServiceClient
from microservices.catalog_service.models import build_cover_url

from .album_cache import AlbumCache
from .console import CatalogUI
from .state import AppState, AppStatus

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Fill in the fields: band, title, year, genre."
CREATE_FAILED_MESSAGE = "Failed to add album."
UPDATE_FAILED_MESSAGE = "Failed to update album."
DELETE_FAILED_MESSAGE = "Failed to delete album."
FETCH_FAILED_MESSAGE = "Failed to load albums."
EDIT_TITLE_PROMPT = "New title:"
DELETE_CONFIRM_PROMPT = "Delete this album?"


def coerce_year(text: str) -> Union[int, float, str]:
    """Turn the typed year into a number when it is a finite one."""
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return text
    return value if math.isfinite(value) else text


class CatalogApp:
    """Client application state machine over the catalog API"""

    def __init__(
        self,
        client: CatalogServiceClient,
        cache: AlbumCache,
        ui: CatalogUI,
        api_base_url: Optional[str] = None,
    ):
        """
        Args:
            client: Catalog service HTTP client
            cache: Local album list mirror
            ui: Dialogs for alerts, prompts and confirmations
            api_base_url: Origin used to rebuild missing cover URLs
                (defaults to the client's base URL)
        """
        self.client = client
        self.cache = cache
        self.ui = ui
        self.api_base_url = (api_base_url or client.base_url).rstrip("/")
        self.state = AppState()

    @property
    def albums(self) -> List[Dict[str, Any]]:
        return self.state.albums

    # ==================== Helpers ====================

    def ensure_cover_url(self, album: Dict[str, Any]) -> Dict[str, Any]:
        """Return the album with a coverUrl, rebuilding it from ``cover`` if missing"""
        if album.get("coverUrl"):
            return album
        return {**album, "coverUrl": build_cover_url(self.api_base_url, album.get("cover"))}

    def _persist(self, albums: List[Dict[str, Any]]):
        self.state.albums = albums
        self.cache.store(albums)

    def _fail(self, message: str, error: Exception, alert: bool = True):
        logger.error(f"{message} {error}")
        self.state.status = AppStatus.ERROR
        self.state.error = message
        if alert:
            self.ui.alert(message)

    def _succeed(self):
        self.state.status = AppStatus.IDLE
        self.state.error = None

    # ==================== Loading ====================

    async def activate(self, refresh: bool = False) -> List[Dict[str, Any]]:
        """
        Initial load

        Uses the cached list when there is one and it is not stale,
        otherwise fetches from the service. If that fetch fails the cached
        list is still shown; status stays ``error``.

        Args:
            refresh: Ignore a fresh cache and fetch
        """
        cached = self.cache.load()
        if cached is not None and not refresh and not self.cache.is_stale():
            self._persist([self.ensure_cover_url(album) for album in cached])
            logger.debug(f"Loaded {len(cached)} albums from local cache")
            return self.albums

        if not await self.fetch_albums() and cached is not None:
            self.state.albums = [self.ensure_cover_url(album) for album in cached]
            logger.warning(f"Service unreachable, showing {len(cached)} cached albums")
        return self.albums

    async def fetch_albums(self, params: Optional[Dict[str, str]] = None) -> bool:
        """
        Fetch the album list and replace both the list and the cache

        Returns:
            True on success
        """
        params = params or {}
        self.state.status = AppStatus.LOADING
        try:
            albums = await self.client.list_albums(**params)
        except CatalogClientError as e:
            self._fail(FETCH_FAILED_MESSAGE, e, alert=False)
            return False

        self.state.albums = albums
        self.cache.replace(albums)
        self._succeed()
        return True

    async def search(self, band: Optional[str] = None, genre: Optional[str] = None) -> bool:
        """Fetch with the current (or given) filters; blank filters are not sent"""
        if band is not None:
            self.state.filters.band = band
        if genre is not None:
            self.state.filters.genre = genre
        return await self.fetch_albums(self.state.filters.to_params())

    async def clear_search(self) -> bool:
        """Reset the filters and fetch the full list"""
        self.state.filters.clear()
        return await self.fetch_albums()

    # ==================== Create ====================

    async def create_album(self) -> Optional[Dict[str, Any]]:
        """
        Submit the pending form

        Uploads the chosen cover file first (if any) and uses the stored
        filename as the cover; otherwise the typed filename is used.

        Returns:
            The created album, or None when validation or a remote call failed
        """
        form = self.state.form
        if form.missing_fields():
            self.ui.alert(MISSING_FIELDS_MESSAGE)
            return None

        self.state.status = AppStatus.LOADING
        uploaded = None
        try:
            cover = form.cover.strip() or None
            if form.cover_file:
                result = await self.client.upload_cover(Path(form.cover_file))
                uploaded = result.get("filename")
                if uploaded:
                    cover = uploaded

            created = await self.client.create_album(
                band=form.band,
                title=form.title,
                year=coerce_year(form.year),
                genre=form.genre,
                cover=cover,
            )
        except (CatalogClientError, OSError) as e:
            if uploaded:
                logger.warning(f"Uploaded cover {uploaded} is not referenced by any album")
            self._fail(CREATE_FAILED_MESSAGE, e)
            return None

        created = self.ensure_cover_url(created)
        self._persist([*self.albums, created])
        form.reset()
        self._succeed()
        return created

    # ==================== Edit ====================

    async def edit_title(self, album: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Ask for a new title and update the album

        Returns:
            The updated album, or None if cancelled, unchanged or failed
        """
        new_title = self.ui.prompt(EDIT_TITLE_PROMPT, album.get("title", ""))
        if new_title is None or not new_title.strip() or new_title == album.get("title"):
            return None

        try:
            updated = await self.client.update_album(album["id"], title=new_title)
        except CatalogClientError as e:
            self._fail(UPDATE_FAILED_MESSAGE, e)
            return None

        updated = self.ensure_cover_url(updated)
        self._persist([updated if a.get("id") == album["id"] else a for a in self.albums])
        self._succeed()
        return updated

    # ==================== Delete ====================

    async def delete_album(self, album_id: int) -> bool:
        """
        Confirm, then delete the album

        Returns:
            True if the album was deleted
        """
        if not self.ui.confirm(DELETE_CONFIRM_PROMPT):
            return False

        try:
            await self.client.delete_album(album_id)
        except CatalogClientError as e:
            self._fail(DELETE_FAILED_MESSAGE, e)
            return False

        self._persist([a for a in self.albums if a.get("id") != album_id])
        self._succeed()
        return True

    def find_album(self, album_id: int) -> Optional[Dict[str, Any]]:
        for album in self.albums:
            if album.get("id") == album_id:
                return album
        return None
