"""
Catalog Service Models

Pydantic models for the album catalog: the stored album record, request
bodies, and responses carrying the derived coverUrl.
"""

from typing import Optional, List, Union
from urllib.parse import quote
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


# Year is stored as received; the service does no numeric validation.
YearValue = Union[int, float, str]

# Characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


# ==================== Core Models ====================

class Album(BaseModel):
    """Album record as held by the repository"""
    id: int
    band: str
    title: str
    year: YearValue
    genre: str
    cover: Optional[str] = None


# ==================== Request Models ====================

class AlbumCreateRequest(BaseModel):
    """Album creation request

    Required fields are checked by the service so that a missing field
    yields a 400 rather than a schema error.
    """
    band: Optional[str] = Field(None, description="Band name")
    title: Optional[str] = Field(None, description="Album title")
    year: Optional[YearValue] = Field(None, description="Release year")
    genre: Optional[str] = Field(None, description="Genre")
    cover: Optional[str] = Field(None, description="Stored cover filename")


class AlbumUpdateRequest(BaseModel):
    """Album update request (partial patch)"""
    band: Optional[str] = Field(None, description="Band name")
    title: Optional[str] = Field(None, description="Album title")
    year: Optional[YearValue] = Field(None, description="Release year")
    genre: Optional[str] = Field(None, description="Genre")
    cover: Optional[str] = Field(None, description="Stored cover filename, blank clears it")


# ==================== Response Models ====================

class AlbumResponse(Album):
    """Album with its derived cover URL"""
    model_config = ConfigDict(populate_by_name=True)

    cover_url: Optional[str] = Field(None, alias="coverUrl")


class AlbumDeleteResponse(BaseModel):
    """Album deletion confirmation"""
    message: str


class CoverUploadResponse(BaseModel):
    """Stored cover details"""
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    cover_url: str = Field(..., alias="coverUrl")


class ErrorResponse(BaseModel):
    """Error body returned for every failed request"""
    message: str


class CatalogHealthResponse(BaseModel):
    """Service health response"""
    status: str = "healthy"
    service: str = "catalog_service"
    album_count: int
    timestamp: datetime


# ==================== Query Parameter Models ====================

class AlbumListParams(BaseModel):
    """Album list filters (case-insensitive substring match)"""
    band: Optional[str] = Field(None, description="Band name contains")
    genre: Optional[str] = Field(None, description="Genre contains")


# ==================== Helpers ====================

def build_cover_url(origin: str, filename: Optional[str]) -> Optional[str]:
    """Join origin, the covers path and the percent-encoded filename.

    Returns None when there is no cover.
    """
    if not filename:
        return None
    return f"{origin.rstrip('/')}/covers/{quote(filename, safe=_URI_COMPONENT_SAFE)}"


# ==================== Export Models ====================

__all__ = [
    'YearValue',
    # Core Models
    'Album',
    # Request Models
    'AlbumCreateRequest', 'AlbumUpdateRequest',
    # Response Models
    'AlbumResponse', 'AlbumDeleteResponse', 'CoverUploadResponse',
    'ErrorResponse', 'CatalogHealthResponse',
    # Query Models
    'AlbumListParams',
    # Helpers
    'build_cover_url',
]
