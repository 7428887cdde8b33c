"""
Catalog Service Business Logic

Album catalog business logic layer.
Handles required-field validation, partial updates, cover URL derivation
and error translation.

Uses dependency injection for testability:
- Repository and cover storage are injected, not created at import time
"""

from typing import Any, Dict, List, Optional
import logging

from .protocols import (
    AlbumRepositoryProtocol,
    CoverStorageProtocol,
    AlbumNotFoundError,
    AlbumValidationError,
    CoverUploadError,
    CatalogServiceError,
)
from .models import (
    Album,
    AlbumCreateRequest,
    AlbumUpdateRequest,
    AlbumResponse,
    AlbumDeleteResponse,
    CoverUploadResponse,
    build_cover_url,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("band", "title", "year", "genre")
PATCHABLE_FIELDS = ("band", "title", "year", "genre")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    # A zero year is treated as missing
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


# ==================== Catalog Service ====================

class CatalogService:
    """
    Album catalog business logic service

    Delegates storage to the injected repository and cover storage. Every
    album leaving the service carries a coverUrl derived from ``origin``,
    or from ``public_base_url`` when one is configured.
    """

    def __init__(
        self,
        repository: AlbumRepositoryProtocol,
        cover_storage: Optional[CoverStorageProtocol] = None,
        public_base_url: str = "",
    ):
        """
        Initialize service with injected dependencies.

        Args:
            repository: Album repository
            cover_storage: Cover upload storage
            public_base_url: Fixed origin for cover URLs (empty: request origin)
        """
        self.repo = repository
        self.cover_storage = cover_storage
        self.public_base_url = public_base_url.rstrip("/")

    def resolve_origin(self, request_origin: str) -> str:
        return self.public_base_url or request_origin.rstrip("/")

    def to_response(self, album: Album, origin: str) -> AlbumResponse:
        """Attach the derived coverUrl to an album"""
        return AlbumResponse(
            **album.model_dump(),
            cover_url=build_cover_url(self.resolve_origin(origin), album.cover),
        )

    # ==================== Album Operations ====================

    async def list_albums(
        self,
        origin: str,
        band: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> List[AlbumResponse]:
        """
        List albums in collection order

        Args:
            origin: Request origin used for cover URLs
            band: Case-insensitive band substring filter
            genre: Case-insensitive genre substring filter
        """
        try:
            albums = await self.repo.list_albums(band=band or None, genre=genre or None)
            return [self.to_response(album, origin) for album in albums]
        except Exception as e:
            logger.error(f"Failed to list albums: {e}")
            raise CatalogServiceError(f"Failed to list albums: {str(e)}")

    async def get_album(self, album_id: int, origin: str) -> AlbumResponse:
        """
        Get album by id

        Raises:
            AlbumNotFoundError: If album not found
        """
        try:
            album = await self.repo.get_album_by_id(album_id)
            if not album:
                raise AlbumNotFoundError(f"Album not found: {album_id}")
            return self.to_response(album, origin)

        except AlbumNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to get album: {e}")
            raise CatalogServiceError(f"Failed to get album: {str(e)}")

    async def create_album(self, request: AlbumCreateRequest, origin: str) -> AlbumResponse:
        """
        Create a new album

        Raises:
            AlbumValidationError: If band, title, year or genre is missing
        """
        try:
            self._validate_album_create_request(request)

            album = await self.repo.create_album({
                "band": request.band,
                "title": request.title,
                "year": request.year,
                "genre": request.genre,
                "cover": None if _is_blank(request.cover) else request.cover,
            })

            logger.info(f"Album created: {album.id} ({album.band} - {album.title})")
            return self.to_response(album, origin)

        except AlbumValidationError:
            raise
        except Exception as e:
            logger.error(f"Failed to create album: {e}")
            raise CatalogServiceError(f"Failed to create album: {str(e)}")

    async def update_album(
        self,
        album_id: int,
        request: AlbumUpdateRequest,
        origin: str,
    ) -> AlbumResponse:
        """
        Update only the fields supplied in the request

        band/title/year/genre are ignored when null or blank. cover is
        overwritten whenever the key is present; blank or null clears it.

        Raises:
            AlbumNotFoundError: If album not found
        """
        try:
            update_data = self._build_update_data(request)
            album = await self.repo.update_album(album_id, update_data)
            if not album:
                raise AlbumNotFoundError(f"Album not found: {album_id}")

            logger.info(f"Album updated: {album_id} fields={sorted(update_data)}")
            return self.to_response(album, origin)

        except AlbumNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to update album: {e}")
            raise CatalogServiceError(f"Failed to update album: {str(e)}")

    async def delete_album(self, album_id: int) -> AlbumDeleteResponse:
        """
        Delete album

        Raises:
            AlbumNotFoundError: If album not found
        """
        try:
            deleted = await self.repo.delete_album(album_id)
            if not deleted:
                raise AlbumNotFoundError(f"Album not found: {album_id}")

            logger.info(f"Album deleted: {album_id}")
            return AlbumDeleteResponse(message=f"Album {album_id} deleted")

        except AlbumNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to delete album: {e}")
            raise CatalogServiceError(f"Failed to delete album: {str(e)}")

    # ==================== Cover Operations ====================

    async def upload_cover(self, upload, origin: str) -> CoverUploadResponse:
        """
        Store an uploaded cover image

        Raises:
            CoverUploadError: If no file was supplied or it is too large
        """
        if self.cover_storage is None:
            raise CatalogServiceError("Cover storage is not configured")

        try:
            filename = await self.cover_storage.save(upload)
            return CoverUploadResponse(
                filename=filename,
                cover_url=build_cover_url(self.resolve_origin(origin), filename),
            )
        except CoverUploadError:
            raise
        except Exception as e:
            logger.error(f"Failed to store cover: {e}")
            raise CatalogServiceError(f"Failed to store cover: {str(e)}")

    async def count_albums(self) -> int:
        return await self.repo.count_albums()

    # ==================== Helpers ====================

    def _validate_album_create_request(self, request: AlbumCreateRequest):
        missing = [name for name in REQUIRED_FIELDS if _is_blank(getattr(request, name))]
        if missing:
            raise AlbumValidationError(
                f"Missing required fields ({', '.join(REQUIRED_FIELDS)}): {', '.join(missing)}"
            )

    def _build_update_data(self, request: AlbumUpdateRequest) -> Dict[str, Any]:
        supplied = request.model_fields_set
        update_data = {}
        for name in PATCHABLE_FIELDS:
            value = getattr(request, name)
            if name in supplied and not _is_blank(value):
                update_data[name] = value
        if "cover" in supplied:
            update_data["cover"] = None if _is_blank(request.cover) else request.cover
        return update_data
