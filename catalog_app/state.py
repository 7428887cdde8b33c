"""
Client Application State

Status, current album list, search filters and the pending create form.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class AppStatus(str, Enum):
    """Client activity status"""
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


REQUIRED_FORM_FIELDS = ("band", "title", "year", "genre")


@dataclass
class AlbumForm:
    """Pending create-album form"""
    band: str = ""
    title: str = ""
    year: str = ""
    genre: str = ""
    # Filename of a cover already in the covers directory
    cover: str = ""
    # Local image chosen for upload; takes precedence over ``cover``
    cover_file: Optional[str] = None

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_FORM_FIELDS if not str(getattr(self, name)).strip()]

    def choose_file(self, path: Optional[str]):
        """Select a file to upload; clears the typed cover filename"""
        self.cover_file = path
        self.cover = ""

    def reset(self):
        self.band = self.title = self.year = self.genre = self.cover = ""
        self.cover_file = None


@dataclass
class SearchFilters:
    """Search box contents"""
    band: str = ""
    genre: str = ""

    def to_params(self) -> Dict[str, str]:
        """Query parameters for the non-blank filters, trimmed"""
        params = {}
        if self.band.strip():
            params["band"] = self.band.strip()
        if self.genre.strip():
            params["genre"] = self.genre.strip()
        return params

    def clear(self):
        self.band = ""
        self.genre = ""


@dataclass
class AppState:
    status: AppStatus = AppStatus.IDLE
    albums: List[Dict[str, Any]] = field(default_factory=list)
    filters: SearchFilters = field(default_factory=SearchFilters)
    form: AlbumForm = field(default_factory=AlbumForm)
    error: Optional[str] = None
