"""
Catalog Service Client

Async HTTP client for the catalog service API.
Every non-2xx response and every transport failure surfaces as
CatalogClientError.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import httpx

from core.service_client_base import BaseServiceClient

logger = logging.getLogger(__name__)


class CatalogClientError(Exception):
    """Remote call failed (network error or non-success status)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CatalogServiceClient(BaseServiceClient):
    """Catalog Service HTTP client"""

    service_name = "catalog_service"
    default_port = 5000

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, f"{self.base_url}{path}", **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.error(f"{method} {path} failed: {e.response.status_code} - {e.response.text}")
            raise CatalogClientError(
                f"HTTP {e.response.status_code}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise CatalogClientError(str(e) or e.__class__.__name__) from e

    # =============================================================================
    # Album Management
    # =============================================================================

    async def list_albums(
        self,
        band: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        List albums, optionally filtered

        Args:
            band: Band substring filter (sent only when given)
            genre: Genre substring filter (sent only when given)

        Returns:
            Albums with coverUrl

        Example:
            >>> async with CatalogServiceClient("http://localhost:5000") as client:
            ...     albums = await client.list_albums(band="metallica")
        """
        params = {}
        if band:
            params["band"] = band
        if genre:
            params["genre"] = genre

        response = await self._request("GET", "/albums", params=params)
        return response.json()

    async def get_album(self, album_id: int) -> Dict[str, Any]:
        """Get album by id"""
        response = await self._request("GET", f"/albums/{album_id}")
        return response.json()

    async def create_album(
        self,
        band: str,
        title: str,
        year: Union[int, float, str],
        genre: str,
        cover: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a new album

        Returns:
            Created album with its assigned id
        """
        payload = {
            "band": band,
            "title": title,
            "year": year,
            "genre": genre,
            "cover": cover,
        }
        response = await self._request("POST", "/albums", json=payload)
        return response.json()

    async def update_album(self, album_id: int, **fields: Any) -> Dict[str, Any]:
        """
        Update album fields

        Only the keyword arguments given are sent, so
        ``update_album(1, title="New")`` leaves every other field alone and
        ``update_album(1, cover=None)`` clears the cover.

        Returns:
            Updated album
        """
        response = await self._request("PUT", f"/albums/{album_id}", json=fields)
        return response.json()

    async def delete_album(self, album_id: int) -> Dict[str, Any]:
        """Delete album, returns the confirmation body"""
        response = await self._request("DELETE", f"/albums/{album_id}")
        return response.json()

    # =============================================================================
    # Covers
    # =============================================================================

    async def upload_cover(
        self,
        file: Union[str, Path, bytes],
        filename: Optional[str] = None,
        content_type: str = "application/octet-stream",
    ) -> Dict[str, Any]:
        """
        Upload a cover image

        Args:
            file: Path to an image, or raw bytes
            filename: Name to send (defaults to the path's name)
            content_type: MIME type of the file

        Returns:
            {"filename": ..., "coverUrl": ...}
        """
        if isinstance(file, (str, Path)):
            path = Path(file)
            content = path.read_bytes()
            filename = filename or path.name
        else:
            content = file
            filename = filename or "cover"

        files = {"cover": (filename, content, content_type)}
        response = await self._request("POST", "/upload-cover", files=files)
        return response.json()

    async def download_cover(self, filename: str) -> bytes:
        """Fetch a stored cover's bytes"""
        encoded = quote(filename, safe="-_.!~*'()")
        response = await self._request("GET", f"/covers/{encoded}")
        return response.content


__all__ = ["CatalogClientError", "CatalogServiceClient"]
